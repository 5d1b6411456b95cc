"""
Word index on marisa_trie.RecordTrie.

Same queries as NodeArena, answered by a compact static trie instead of a
dict per node. Each key maps to the indices of every record with that
word; the highest index is the one that was loaded last and wins.
"""

from typing import Iterable, Iterator, Optional, Sequence, Tuple

import marisa_trie

from segtrie.records import Record

# Record index, little-endian uint32
RECORD_FORMAT = "<I"


def _as_text(sequence: Iterable[str]) -> str:
    return sequence if isinstance(sequence, str) else "".join(sequence)


class MarisaIndex:
    """Read-only word -> record index map with prefix queries."""

    __slots__ = ("_trie",)

    def __init__(self, trie: marisa_trie.RecordTrie):
        self._trie = trie

    def find(self, sequence: Iterable[str]) -> Optional[int]:
        word = _as_text(sequence)
        values = self._trie.get(word)
        if not values:
            return None
        return max(value[0] for value in values)

    def has_prefix(self, prefix: Iterable[str]) -> bool:
        try:
            next(iter(self._trie.iterkeys(_as_text(prefix))))
            return True
        except StopIteration:
            return False

    def walk_prefixes(self, sequence: Iterable[str]) -> Iterator[Tuple[int, int]]:
        """
        Yield ``(position, record_id)`` for every prefix of ``sequence`` that is a word.

        One native walk collects the matching keys; a key of length n ends
        at position n - 1.
        """
        keys = self._trie.prefixes(_as_text(sequence))
        for key in sorted(set(keys), key=len):
            yield len(key) - 1, self.find(key)

    @property
    def node_count(self) -> Optional[int]:
        return None

    def release(self) -> None:
        self._trie = marisa_trie.RecordTrie(RECORD_FORMAT, [])

    def __len__(self) -> int:
        return len(self._trie)


def build_marisa_index(records: Sequence[Record]) -> MarisaIndex:
    """Build the index; duplicate words keep every index, lookups pick the last."""
    def generate_items():
        for record_id, record in enumerate(records):
            yield (record.word, (record_id,))

    return MarisaIndex(marisa_trie.RecordTrie(RECORD_FORMAT, generate_items()))
