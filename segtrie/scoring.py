"""
Frequency scoring: total frequency and per-record log-probability.

Records are frozen, so scoring returns new scored copies rather than
updating the loaded ones.
"""

import logging
import math
from dataclasses import replace
from typing import Iterable, List, Optional, Sequence, Tuple

from segtrie.errors import ZeroFrequencyError
from segtrie.records import MAX_DOUBLE, Record

logger = logging.getLogger(__name__)


def calculate_freq_sum(records: Iterable[Record]) -> int:
    return sum(record.freq for record in records)


def assign_log_freqs(records: Sequence[Record], freq_sum: int) -> Tuple[List[Record], float]:
    """
    Score every record with ``log_freq = ln(freq / freq_sum)``.

    Records with zero frequency have no defined log-probability. They are
    given the minimum over the positive records (the floor score) and do not
    take part in computing it.

    Returns:
        Tuple of (scored copies of the records in input order, min_log_freq)
    """
    if freq_sum <= 0:
        raise ZeroFrequencyError("total dictionary frequency is zero")

    min_log_freq = MAX_DOUBLE
    log_freqs: List[Optional[float]] = []
    for record in records:
        if record.freq == 0:
            log_freqs.append(None)
            continue
        log_freq = math.log(record.freq / freq_sum)
        log_freqs.append(log_freq)
        if log_freq < min_log_freq:
            min_log_freq = log_freq

    zero_count = log_freqs.count(None)
    if zero_count:
        logger.warning(f"{zero_count} zero-frequency records scored at floor {min_log_freq}")

    scored = [
        replace(record, log_freq=min_log_freq if log_freq is None else log_freq)
        for record, log_freq in zip(records, log_freqs)
    ]
    return scored, min_log_freq


def score_records(records: Sequence[Record]) -> Tuple[List[Record], int, float]:
    """
    Score all records.

    Returns:
        Tuple of (scored_records, freq_sum, min_log_freq)

    Raises:
        ZeroFrequencyError: If the dictionary is empty or every frequency is 0
    """
    freq_sum = calculate_freq_sum(records)
    if freq_sum == 0:
        raise ZeroFrequencyError(
            f"total frequency of {len(records)} records is zero, "
            "log-probabilities are undefined"
        )
    scored, min_log_freq = assign_log_freqs(records, freq_sum)
    return scored, freq_sum, min_log_freq
