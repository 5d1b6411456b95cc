"""
Dictionary records and the append-only store that owns them.

Trie nodes never hold a Record object. They hold the record's index in the
RecordStore, which stays valid for as long as the store exists.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Sequence, Tuple, Union

# Sentinels for "no score yet" (shared with downstream decoders)
MIN_DOUBLE = -3.14e100
MAX_DOUBLE = 3.14e100

# Marks a node without an attached record
NO_RECORD = -1


@dataclass(frozen=True, slots=True)
class Record:
    """
    One dictionary entry.

    Attributes:
        word: The word as it appears in text
        freq: Raw frequency from the dictionary file
        tag: Part-of-speech or other label
        log_freq: ln(freq / freq_sum), set on the scored copy
    """
    word: str
    freq: int
    tag: str
    log_freq: float = 0.0

    def __str__(self) -> str:
        return f"{self.word}:{self.freq}:{self.tag}:{self.log_freq}"


# end offset -> record, one edge set of the segmentation DAG
Dag = Dict[int, Record]


class RecordStore:
    """
    Append-only sequence of records.

    Indices handed out by ``append`` are stable. Once ``freeze`` is called
    the store becomes a tuple and rejects further appends.
    """

    __slots__ = ("_records",)

    def __init__(self):
        self._records: Union[List[Record], Tuple[Record, ...]] = []

    @classmethod
    def from_records(cls, records: Iterable[Record]) -> "RecordStore":
        store = cls()
        for record in records:
            store.append(record)
        return store

    def append(self, record: Record) -> int:
        """Add a record and return its index."""
        if self.frozen:
            raise RuntimeError("record store is frozen")
        self._records.append(record)
        return len(self._records) - 1

    def freeze(self) -> "RecordStore":
        self._records = tuple(self._records)
        return self

    @property
    def frozen(self) -> bool:
        return isinstance(self._records, tuple)

    def records(self) -> Sequence[Record]:
        return self._records

    def __getitem__(self, index: int) -> Record:
        return self._records[index]

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[Record]:
        return iter(self._records)

    def __repr__(self) -> str:
        state = "frozen" if self.frozen else "open"
        return f"RecordStore({len(self._records)} records, {state})"
