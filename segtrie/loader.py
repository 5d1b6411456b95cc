"""
Dictionary file loader.

The dictionary is plain text, one entry per line::

    <word> <freq> <tag>

Lines are read as bytes and only the word field goes through the strict
decoder, so a single badly encoded word costs one line, not the file.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from segtrie.config import TrieConfig
from segtrie.errors import DictionaryOpenError, LineFormatError
from segtrie.records import Record, RecordStore

logger = logging.getLogger(__name__)

DICT_COLUMN_NUM = 3


def parse_freq(field: bytes) -> Optional[int]:
    """Parse a non-negative integer frequency, None if the field is not one."""
    if not field.isdigit():
        return None
    return int(field)


def parse_line(
    raw: bytes,
    lineno: int,
    path: Union[str, Path],
    config: TrieConfig,
) -> Optional[Record]:
    """
    Turn one dictionary line into a Record.

    Args:
        raw: The line as read from the file
        lineno: 1-based line number, used in messages
        path: Dictionary path, used in messages
        config: Encoding and strictness options

    Returns:
        The Record, or None if the line should be skipped

    Raises:
        LineFormatError: If the line does not have exactly three fields
            and config.strict_format is set
    """
    text = raw.rstrip(b"\r\n").decode(config.encoding, errors="replace")
    fields = raw.split()

    if len(fields) != DICT_COLUMN_NUM:
        if config.strict_format:
            raise LineFormatError(path, lineno, text)
        logger.warning(f"line[{lineno}:{text}] has {len(fields)} fields, skipped")
        return None

    word_field, freq_field, tag_field = fields

    try:
        word = word_field.decode(config.encoding)
    except UnicodeDecodeError:
        logger.error(f"line[{lineno}:{text}] illegal.")
        return None

    freq = parse_freq(freq_field)
    if freq is None:
        logger.warning(f"line[{lineno}:{text}] bad frequency, using 0")
        freq = 0

    tag = tag_field.decode(config.encoding, errors="replace")
    return Record(word=word, freq=freq, tag=tag)


def load_records(
    path: Union[str, Path],
    config: Optional[TrieConfig] = None,
) -> RecordStore:
    """
    Read a dictionary file into a RecordStore, preserving line order.

    Raises:
        DictionaryOpenError: If the file cannot be opened
        LineFormatError: On a malformed line in strict mode
    """
    if config is None:
        config = TrieConfig()
    path = Path(path)

    try:
        handle = open(path, "rb")
    except OSError as e:
        raise DictionaryOpenError(path, e.strerror or str(e)) from e

    store = RecordStore()
    skipped = 0
    with handle:
        for lineno, raw in enumerate(handle, start=1):
            record = parse_line(raw, lineno, path, config)
            if record is None:
                skipped += 1
                continue
            store.append(record)

    logger.info(f"Loaded {len(store)} records from {path} ({skipped} skipped)")
    return store
