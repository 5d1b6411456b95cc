"""
Trie nodes stored in an arena.

Node ``i`` is described by ``children[i]`` (character -> child node id) and
``record_ids[i]`` (index into the RecordStore, or NO_RECORD). Node 0 is the
root and stands for the empty prefix. Every child id appears in exactly one
parent's map, so the arena is a tree and can be released in one step.
"""

from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from segtrie.records import NO_RECORD, Record

ROOT = 0


class NodeArena:
    """Character trie whose nodes point at records by index."""

    __slots__ = ("_children", "_record_ids")

    def __init__(self):
        self._children: List[Dict[str, int]] = [{}]
        self._record_ids: List[int] = [NO_RECORD]

    def _new_node(self) -> int:
        self._children.append({})
        self._record_ids.append(NO_RECORD)
        return len(self._children) - 1

    def insert(self, word: str, record_id: int) -> int:
        """
        Add ``word`` and attach ``record_id`` at its terminal node.

        An existing attachment is overwritten. Returns the terminal node id.
        """
        node = ROOT
        for ch in word:
            child = self._children[node].get(ch)
            if child is None:
                child = self._new_node()
                self._children[node][ch] = child
            node = child
        self._record_ids[node] = record_id
        return node

    def _walk(self, sequence: Iterable[str]) -> Optional[int]:
        node = ROOT
        for ch in sequence:
            node = self._children[node].get(ch)
            if node is None:
                return None
        return node

    def find(self, sequence: Iterable[str]) -> Optional[int]:
        """Record id attached to the node spelled by ``sequence``, if any."""
        node = self._walk(sequence)
        if node is None:
            return None
        record_id = self._record_ids[node]
        return None if record_id == NO_RECORD else record_id

    def walk_prefixes(self, sequence: Iterable[str]) -> Iterator[Tuple[int, int]]:
        """
        Yield ``(position, record_id)`` for every prefix of ``sequence`` that is a word.

        ``position`` is the index of the last character of the prefix.
        The walk stops at the first character without a child.
        """
        node = ROOT
        for pos, ch in enumerate(sequence):
            node = self._children[node].get(ch)
            if node is None:
                return
            record_id = self._record_ids[node]
            if record_id != NO_RECORD:
                yield pos, record_id

    def has_prefix(self, prefix: Iterable[str]) -> bool:
        return self._walk(prefix) is not None

    @property
    def node_count(self) -> int:
        return len(self._children)

    def release(self) -> None:
        """Drop every node at once; the arena is empty afterwards."""
        self._children = [{}]
        self._record_ids = [NO_RECORD]


def build_node_arena(records: Iterable[Record]) -> NodeArena:
    """Insert every record's word, in order, so later duplicates win."""
    arena = NodeArena()
    for record_id, record in enumerate(records):
        arena.insert(record.word, record_id)
    return arena
