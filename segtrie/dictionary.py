"""
Module-level dictionary for segtrie.

Holds one process-wide LoadedTrie so callers can load once at startup and
query from anywhere. Nothing is loaded lazily: querying before
``load_dictionary`` raises NotInitializedError.
"""

from pathlib import Path
from typing import Iterable, Optional, Tuple, Union

from segtrie.config import TrieConfig
from segtrie.errors import NotInitializedError
from segtrie.records import Dag, Record
from segtrie.trie import LoadedTrie, load_trie

# Module-level singleton
_TRIE: Optional[LoadedTrie] = None


def is_dictionary_loaded() -> bool:
    """Check if dictionary is loaded."""
    return _TRIE is not None


def load_dictionary(
    path: Union[str, Path],
    config: Optional[TrieConfig] = None,
) -> LoadedTrie:
    """
    Load the dictionary into the module-level trie.

    If a dictionary is already loaded it is returned unchanged; call
    ``unload_dictionary`` first to load a different one.

    Args:
        path: Path to the dictionary text file
        config: Load options. Uses defaults if not specified.

    Returns:
        The loaded trie
    """
    global _TRIE

    if _TRIE is not None:
        return _TRIE

    _TRIE = load_trie(path, config)
    return _TRIE


def get_trie() -> LoadedTrie:
    if _TRIE is None:
        raise NotInitializedError(
            "No dictionary loaded. Call segtrie.load_dictionary(path) first."
        )
    return _TRIE


def lookup(word: Iterable[str]) -> Optional[Record]:
    """
    Look up an exact word in the dictionary.

    Returns:
        The matching Record, or None
    """
    return get_trie().exact_lookup(word)


def prefix_matches(text: Iterable[str], start_offset: int = 0) -> Tuple[Dag, bool]:
    """Dictionary words that are prefixes of ``text``, keyed by end offset."""
    return get_trie().prefix_matches(text, start_offset)


def contains(word: Iterable[str]) -> bool:
    """Check if a word exists in the dictionary."""
    return get_trie().contains(word)


def has_prefix(prefix: Iterable[str]) -> bool:
    """Check if any word starts with the given prefix."""
    return get_trie().has_prefix(prefix)


def get_min_log_freq() -> float:
    return get_trie().min_log_freq()


def get_dictionary_size() -> int:
    """Get the number of records in the dictionary."""
    if _TRIE is None:
        return 0
    return len(_TRIE)


def unload_dictionary():
    """Unload the dictionary to free memory."""
    global _TRIE
    if _TRIE is not None:
        _TRIE.release()
    _TRIE = None
