import dataclasses
import math

import pytest

from segtrie.config import TrieConfig
from segtrie.errors import (
    AlreadyInitializedError,
    DictionaryOpenError,
    LineFormatError,
    NotInitializedError,
    ZeroFrequencyError,
)
from segtrie.trie import LoadedTrie, Trie, load_trie


def test_every_record_found_by_exact_lookup(write_dict, backend):
    path = write_dict(["中国 10 ns", "中国人 4 n", "人 7 n", "国 1 n"])
    trie = load_trie(path, TrieConfig(backend=backend))
    for record in trie.records:
        found = trie.exact_lookup(record.word)
        assert (found.word, found.freq, found.tag) == (record.word, record.freq, record.tag)


def test_prefix_matches(abc_dict, backend):
    trie = load_trie(abc_dict, TrieConfig(backend=backend))
    dag, matched = trie.prefix_matches("abcd", 0)
    assert matched is True
    assert {end: r.word for end, r in dag.items()} == {0: "a", 1: "ab", 2: "abc"}
    assert 3 not in dag


def test_prefix_matches_offset(abc_dict, backend):
    trie = load_trie(abc_dict, TrieConfig(backend=backend))
    text = "xxabc"
    dag, matched = trie.prefix_matches(text[2:], 2)
    assert matched
    assert sorted(dag) == [2, 3, 4]
    assert dag[4].tag == "z"


def test_prefix_matches_only_from_start(abc_dict, backend):
    trie = load_trie(abc_dict, TrieConfig(backend=backend))
    dag, matched = trie.prefix_matches("dabc", 0)
    assert dag == {}
    assert matched is False


def test_prefix_matches_accepts_char_list(abc_dict, backend):
    trie = load_trie(abc_dict, TrieConfig(backend=backend))
    dag, _ = trie.prefix_matches(list("ab"), 5)
    assert sorted(dag) == [5, 6]


def test_exact_lookup_missing(abc_dict, backend):
    trie = load_trie(abc_dict, TrieConfig(backend=backend))
    assert trie.exact_lookup("abcd") is None
    assert trie.exact_lookup("b") is None
    assert "abcd" not in trie
    assert "ab" in trie


def test_duplicate_word_last_wins(write_dict, backend):
    path = write_dict(["ab 3 first", "c 1 n", "ab 9 second"])
    trie = load_trie(path, TrieConfig(backend=backend))
    record = trie.exact_lookup("ab")
    assert (record.freq, record.tag) == (9, "second")
    assert [r.tag for r in trie.records if r.word == "ab"] == ["first", "second"]
    assert len(trie) == 3
    dag, _ = trie.prefix_matches("ab")
    assert dag[1].tag == "second"


def test_undecodable_line_skipped(write_dict, backend):
    path = write_dict(["a 5 x", b"\xc3\x28 3 y", "b 2 z"])
    trie = load_trie(path, TrieConfig(backend=backend))
    assert len(trie) == 2
    assert trie.exact_lookup("a").freq == 5
    assert trie.exact_lookup("b").freq == 2


def test_freq_sum_and_min_log_freq(abc_dict, backend):
    trie = load_trie(abc_dict, TrieConfig(backend=backend))
    assert trie.freq_sum == 9
    assert trie.min_log_freq() == pytest.approx(math.log(1 / 9))
    assert trie.exact_lookup("a").log_freq == pytest.approx(math.log(5 / 9))


def test_has_prefix(abc_dict, backend):
    trie = load_trie(abc_dict, TrieConfig(backend=backend))
    assert trie.has_prefix("ab")
    assert not trie.has_prefix("b")


def test_node_count(abc_dict):
    assert load_trie(abc_dict).node_count == 4
    assert load_trie(abc_dict, TrieConfig(backend="marisa")).node_count is None


def test_zero_frequency_dictionary(write_dict):
    path = write_dict(["a 0 x", "b 0 y"])
    trie = Trie()
    with pytest.raises(ZeroFrequencyError):
        trie.init(path)
    assert not trie.is_initialized
    with pytest.raises(NotInitializedError):
        trie.exact_lookup("a")
    with pytest.raises(AlreadyInitializedError):
        trie.init(path)


def test_query_before_init():
    trie = Trie()
    with pytest.raises(NotInitializedError):
        trie.prefix_matches("abc")
    with pytest.raises(NotInitializedError):
        trie.min_log_freq()


def test_double_init(abc_dict):
    trie = Trie()
    loaded = trie.init(abc_dict)
    assert isinstance(loaded, LoadedTrie)
    with pytest.raises(AlreadyInitializedError):
        trie.init(abc_dict)
    assert trie.exact_lookup("ab").tag == "y"


def test_from_file(abc_dict):
    trie = Trie.from_file(abc_dict, TrieConfig(backend="marisa"))
    assert trie.is_initialized
    assert trie.freq_sum == 9
    dag, matched = trie.prefix_matches("abc")
    assert matched and len(dag) == 3


def test_release(abc_dict):
    trie = Trie.from_file(abc_dict)
    trie.release()
    assert not trie.is_initialized
    with pytest.raises(NotInitializedError):
        trie.exact_lookup("a")


def test_open_error(tmp_path):
    with pytest.raises(DictionaryOpenError):
        load_trie(tmp_path / "nope.txt")


def test_format_error_propagates(write_dict):
    path = write_dict(["a 5 x", "bad line here too"])
    with pytest.raises(LineFormatError) as excinfo:
        Trie().init(path)
    assert excinfo.value.lineno == 2


def test_bad_backend():
    with pytest.raises(ValueError):
        TrieConfig(backend="hash")


def test_returned_records_cannot_be_modified(abc_dict, backend):
    trie = load_trie(abc_dict, TrieConfig(backend=backend))
    record = trie.exact_lookup("a")
    with pytest.raises(dataclasses.FrozenInstanceError):
        record.log_freq = 99.0
    dag, _ = trie.prefix_matches("ab")
    with pytest.raises(dataclasses.FrozenInstanceError):
        dag[1].freq = 0
    assert trie.exact_lookup("a").log_freq == pytest.approx(math.log(5 / 9))
    assert trie.exact_lookup("ab").freq == 3


def test_loaded_trie_release(abc_dict, backend):
    trie = load_trie(abc_dict, TrieConfig(backend=backend))
    trie.release()
    assert trie.released
    with pytest.raises(NotInitializedError):
        trie.exact_lookup("a")
    with pytest.raises(NotInitializedError):
        trie.prefix_matches("abc")
    with pytest.raises(NotInitializedError):
        trie.min_log_freq()
    with pytest.raises(NotInitializedError):
        trie.freq_sum
    with pytest.raises(NotInitializedError):
        len(trie)
    assert "released" in repr(trie)


def test_marisa_matches_nodes(write_dict):
    path = write_dict(["a 5 x", "ab 3 y", "abcd 2 z", "ab 4 w", "b 1 v", "中 2 n"])
    nodes = load_trie(path)
    marisa = load_trie(path, TrieConfig(backend="marisa"))
    for text in ["abcde", "abx", "ab", "b", "中国", "zz", ""]:
        expected, _ = nodes.prefix_matches(text, 3)
        got, _ = marisa.prefix_matches(text, 3)
        assert {k: r.tag for k, r in got.items()} == {k: r.tag for k, r in expected.items()}


@pytest.mark.parametrize("encoding", ["rot13", "utf-16", "no-such-codec"])
def test_unusable_encoding(encoding):
    with pytest.raises(ValueError):
        TrieConfig(encoding=encoding)
