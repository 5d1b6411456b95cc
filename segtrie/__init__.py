"""
segtrie: dictionary trie for word segmentation

Loads a frequency dictionary into a character trie and answers the two
lookups a segmenter needs: exact word lookup, and every dictionary word
that starts at a given position of the text (one edge set of the
segmentation DAG). Log-probabilities are precomputed at load time.

Basic Usage:
    import segtrie
    
    trie = segtrie.load_trie("dict.txt")
    dag, matched = trie.prefix_matches(text[i:], i)
    for end, record in dag.items():
        print(f"{i}-{end}: {record.word} ({record.log_freq:.2f})")
"""

import time
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Tuple, Union

from segtrie.config import TrieConfig
from segtrie.dictionary import (
    get_dictionary_size,
    get_min_log_freq,
    is_dictionary_loaded,
    load_dictionary,
    lookup,
    prefix_matches,
    unload_dictionary,
)
from segtrie.errors import (
    AlreadyInitializedError,
    DictionaryOpenError,
    LineFormatError,
    NotInitializedError,
    TrieError,
    ZeroFrequencyError,
)
from segtrie.records import MAX_DOUBLE, MIN_DOUBLE, Dag, Record
from segtrie.trie import LoadedTrie, Trie, load_trie

__version__ = "0.1.0"


# =============================================================================
# Loading helpers
# =============================================================================

def warm_up(
    path: Union[str, Path],
    config: Optional[TrieConfig] = None,
    verbose: bool = False,
) -> Tuple[float, dict]:
    """
    Load the module-level dictionary and report how long it took.
    
    Args:
        path: Dictionary file
        config: Load options
        verbose: If True, print timing information
        
    Returns:
        Tuple of (total_time_seconds, timing_details_dict)
    """
    timings = {}
    total_start = time.perf_counter()
    
    if verbose:
        print(f"Loading segtrie dictionary from {path}...")
    
    t0 = time.perf_counter()
    load_dictionary(path, config)
    timings['dictionary'] = (time.perf_counter() - t0) * 1000
    
    if verbose:
        print(f"  Dictionary:     {timings['dictionary']:>7.1f}ms ({get_dictionary_size():,} entries)")
    
    total_time = time.perf_counter() - total_start
    timings['total'] = total_time * 1000
    
    if verbose:
        print(f"Total warm-up:    {timings['total']:>7.1f}ms")
    
    return total_time, timings


@contextmanager
def dictionary_session(
    path: Union[str, Path],
    config: Optional[TrieConfig] = None,
) -> Iterator[LoadedTrie]:
    """
    Context manager that loads the module-level dictionary and unloads it on exit.
    
    Example:
        >>> with segtrie.dictionary_session("dict.txt") as trie:
        ...     for i in range(len(text)):
        ...         dag, _ = trie.prefix_matches(text[i:], i)
    """
    trie = load_dictionary(path, config)
    try:
        yield trie
    finally:
        unload_dictionary()


def get_version() -> str:
    """Get the library version."""
    return __version__


# =============================================================================
# Module-level exports
# =============================================================================

__all__ = [
    # Data classes
    "Record",
    "Dag",
    "TrieConfig",
    "LoadedTrie",
    "Trie",
    # Loading
    "load_trie",
    "load_dictionary",
    "unload_dictionary",
    "is_dictionary_loaded",
    "warm_up",
    "dictionary_session",
    # Queries
    "lookup",
    "prefix_matches",
    "get_min_log_freq",
    "get_dictionary_size",
    "get_version",
    # Constants
    "MIN_DOUBLE",
    "MAX_DOUBLE",
    # Exceptions
    "TrieError",
    "DictionaryOpenError",
    "LineFormatError",
    "ZeroFrequencyError",
    "NotInitializedError",
    "AlreadyInitializedError",
    # Version
    "__version__",
]
