"""
Exceptions raised by segtrie.

Every load-time failure surfaces from ``init`` / ``load_trie`` as one of
these. Queries never raise for a missing word; absence is a normal result.
"""

from pathlib import Path
from typing import Union


class TrieError(Exception):
    """Base class for all segtrie errors."""
    pass


class DictionaryOpenError(TrieError):
    """Raised when the dictionary file cannot be opened."""

    def __init__(self, path: Union[str, Path], reason: str = ""):
        self.path = Path(path)
        message = f"open {self.path} failed"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class LineFormatError(TrieError):
    """Raised when a dictionary line does not have exactly three fields."""

    def __init__(self, path: Union[str, Path], lineno: int, line: str):
        self.path = Path(path)
        self.lineno = lineno
        self.line = line
        super().__init__(
            f"{self.path}:{lineno}: expected 3 fields, got {line!r}"
        )


class ZeroFrequencyError(TrieError):
    """Raised when the total dictionary frequency is zero."""
    pass


class NotInitializedError(TrieError):
    """Raised when a trie is queried before it was initialized."""
    pass


class AlreadyInitializedError(TrieError):
    """Raised when ``init`` is attempted a second time."""
    pass
