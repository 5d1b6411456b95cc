"""
Load-time configuration for segtrie.
"""

import codecs
from dataclasses import dataclass

# Child-lookup structures a trie can be built on
BACKENDS = ("nodes", "marisa")

DEFAULT_ENCODING = "utf-8"

# Lines are split as bytes, so separators and digits must encode as ASCII
_ASCII_PROBE = " \t\r\n0123456789"


def check_encoding(encoding: str) -> None:
    """
    Reject codecs that cannot decode dictionary fields.

    Raises:
        ValueError: If ``encoding`` is unknown, not a text encoding, or not
            ASCII-compatible (e.g. UTF-16)
    """
    try:
        info = codecs.lookup(encoding)
    except LookupError:
        raise ValueError(f"unknown encoding {encoding!r}")
    if not getattr(info, "_is_text_encoding", True):
        raise ValueError(f"{encoding!r} is not a text encoding")
    if info.encode(_ASCII_PROBE)[0] != _ASCII_PROBE.encode("ascii"):
        raise ValueError(f"{encoding!r} is not ASCII-compatible")


@dataclass(frozen=True, slots=True)
class TrieConfig:
    """
    Options controlling how a dictionary file is loaded.

    Attributes:
        encoding: Text encoding of the word and tag fields
        strict_format: If True, a line without exactly three fields aborts
            loading with LineFormatError. If False, it is logged and skipped.
        backend: "nodes" for the dict-per-node arena, "marisa" for a
            marisa_trie.RecordTrie index
    """
    encoding: str = DEFAULT_ENCODING
    strict_format: bool = True
    backend: str = "nodes"

    def __post_init__(self):
        if self.backend not in BACKENDS:
            raise ValueError(
                f"unknown backend {self.backend!r}, expected one of {BACKENDS}"
            )
        check_encoding(self.encoding)
