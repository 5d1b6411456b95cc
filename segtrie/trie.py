"""
Dictionary trie for segmentation lookups.

``load_trie`` runs the whole load (read, score, build) and returns a
LoadedTrie, which only exists once loading has succeeded. ``Trie`` wraps
the same thing in an explicit init-once state machine for callers that
construct first and load later.

Example:
    >>> trie = load_trie("dict.txt")
    >>> dag, matched = trie.prefix_matches("abcd")
    >>> {end: r.word for end, r in dag.items()}
    {0: 'a', 1: 'ab', 2: 'abc'}
"""

import logging
import time
from pathlib import Path
from typing import Iterable, Optional, Sequence, Tuple, Union

from segtrie.config import TrieConfig
from segtrie.errors import AlreadyInitializedError, NotInitializedError
from segtrie.loader import load_records
from segtrie.marisa_index import MarisaIndex, build_marisa_index
from segtrie.nodes import NodeArena, build_node_arena
from segtrie.records import Dag, Record, RecordStore
from segtrie.scoring import score_records

logger = logging.getLogger(__name__)

Index = Union[NodeArena, MarisaIndex]


def build_index(records: Sequence[Record], backend: str) -> Index:
    if backend == "marisa":
        return build_marisa_index(records)
    return build_node_arena(records)


class LoadedTrie:
    """
    An initialized, immutable dictionary trie.

    Safe to share between threads: nothing on the query paths writes.
    After ``release`` every query raises NotInitializedError.
    """

    __slots__ = ("_store", "_index", "_freq_sum", "_min_log_freq", "config")

    def __init__(
        self,
        store: RecordStore,
        index: Index,
        freq_sum: int,
        min_log_freq: float,
        config: TrieConfig,
    ):
        self._store: Optional[RecordStore] = store
        self._index: Optional[Index] = index
        self._freq_sum = freq_sum
        self._min_log_freq = min_log_freq
        self.config = config

    def _live(self) -> Tuple[RecordStore, Index]:
        if self._store is None or self._index is None:
            raise NotInitializedError("trie has been released")
        return self._store, self._index

    def exact_lookup(self, word: Iterable[str]) -> Optional[Record]:
        """
        Look up an exact word.

        Returns:
            The Record for ``word``, or None if it is not in the dictionary
        """
        store, index = self._live()
        record_id = index.find(word)
        if record_id is None:
            return None
        return store[record_id]

    def prefix_matches(
        self,
        sequence: Iterable[str],
        start_offset: int = 0,
    ) -> Tuple[Dag, bool]:
        """
        Find every dictionary word that is a prefix of ``sequence``.

        Args:
            sequence: Text starting at the position being matched
            start_offset: Position of ``sequence[0]`` in the full text

        Returns:
            Tuple of (dag, matched_any). ``dag`` maps the absolute offset of
            each match's last character to its Record.
        """
        store, index = self._live()
        dag: Dag = {}
        for pos, record_id in index.walk_prefixes(sequence):
            dag[start_offset + pos] = store[record_id]
        return dag, bool(dag)

    def min_log_freq(self) -> float:
        """Lowest log-frequency in the dictionary, the floor for unknown words."""
        self._live()
        return self._min_log_freq

    @property
    def freq_sum(self) -> int:
        self._live()
        return self._freq_sum

    @property
    def records(self) -> Sequence[Record]:
        """Every loaded record in file order, including shadowed duplicates."""
        store, _ = self._live()
        return store.records()

    @property
    def node_count(self) -> Optional[int]:
        """Number of trie nodes, None for backends that do not expose it."""
        _, index = self._live()
        return index.node_count

    @property
    def released(self) -> bool:
        return self._store is None

    def contains(self, word: Iterable[str]) -> bool:
        _, index = self._live()
        return index.find(word) is not None

    def has_prefix(self, prefix: Iterable[str]) -> bool:
        """Check if any word starts with ``prefix``."""
        _, index = self._live()
        return index.has_prefix(prefix)

    def release(self) -> None:
        """Drop the nodes and records. Later queries raise NotInitializedError."""
        if self._index is not None:
            self._index.release()
        self._index = None
        self._store = None

    def __contains__(self, word) -> bool:
        return self.contains(word)

    def __len__(self) -> int:
        store, _ = self._live()
        return len(store)

    def __repr__(self) -> str:
        if self.released:
            return f"LoadedTrie(released, backend={self.config.backend!r})"
        return (
            f"LoadedTrie({len(self._store)} records, freq_sum={self._freq_sum}, "
            f"backend={self.config.backend!r})"
        )


def load_trie(
    path: Union[str, Path],
    config: Optional[TrieConfig] = None,
) -> LoadedTrie:
    """
    Load a dictionary file and build its trie.

    Raises:
        DictionaryOpenError: If the file cannot be opened
        LineFormatError: On a malformed line in strict mode
        ZeroFrequencyError: If the frequencies sum to zero
    """
    if config is None:
        config = TrieConfig()

    t0 = time.perf_counter()
    loaded = load_records(path, config)
    scored, freq_sum, min_log_freq = score_records(loaded.records())
    store = RecordStore.from_records(scored).freeze()
    index = build_index(store.records(), config.backend)
    elapsed = (time.perf_counter() - t0) * 1000

    logger.info(
        f"Built {config.backend} trie over {len(store)} records "
        f"(freq_sum={freq_sum}, min_log_freq={min_log_freq:.4f}) in {elapsed:.1f}ms"
    )
    return LoadedTrie(store, index, freq_sum, min_log_freq, config)


class Trie:
    """
    Init-once wrapper around LoadedTrie.

    ``init`` may be attempted exactly once. If it fails the trie stays
    unusable; queries before a successful ``init`` raise NotInitializedError.
    """

    def __init__(self, config: Optional[TrieConfig] = None):
        self.config = config if config is not None else TrieConfig()
        self._loaded: Optional[LoadedTrie] = None
        self._init_attempted = False

    @classmethod
    def from_file(
        cls,
        path: Union[str, Path],
        config: Optional[TrieConfig] = None,
    ) -> "Trie":
        trie = cls(config)
        trie.init(path)
        return trie

    def init(self, path: Union[str, Path]) -> LoadedTrie:
        if self._init_attempted:
            raise AlreadyInitializedError("trie init may only be attempted once")
        self._init_attempted = True
        self._loaded = load_trie(path, self.config)
        return self._loaded

    @property
    def is_initialized(self) -> bool:
        return self._loaded is not None

    @property
    def loaded(self) -> LoadedTrie:
        if self._loaded is None:
            raise NotInitializedError("trie is not initialized")
        return self._loaded

    def exact_lookup(self, word: Iterable[str]) -> Optional[Record]:
        return self.loaded.exact_lookup(word)

    def prefix_matches(
        self,
        sequence: Iterable[str],
        start_offset: int = 0,
    ) -> Tuple[Dag, bool]:
        return self.loaded.prefix_matches(sequence, start_offset)

    def min_log_freq(self) -> float:
        return self.loaded.min_log_freq()

    @property
    def freq_sum(self) -> int:
        return self.loaded.freq_sum

    @property
    def records(self) -> Sequence[Record]:
        return self.loaded.records

    def contains(self, word: Iterable[str]) -> bool:
        return self.loaded.contains(word)

    def has_prefix(self, prefix: Iterable[str]) -> bool:
        return self.loaded.has_prefix(prefix)

    def release(self) -> None:
        """Free the nodes and records. The trie cannot be initialized again."""
        if self._loaded is not None:
            self._loaded.release()
            self._loaded = None
