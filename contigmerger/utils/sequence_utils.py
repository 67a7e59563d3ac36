"""
ContigMerger v0.1.0

Sequence length metrics for contig sets.

Provides the summary statistics reported after each merging stage.
"""

from dataclasses import dataclass, asdict
from typing import Dict, Iterable

import numpy as np


@dataclass
class SequenceMetrics:
    """Length summary of a set of sequences."""
    number_of_entries: int = 0
    total_length: int = 0
    median_length: float = 0.0
    average_length: float = 0.0
    n50: int = 0

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


def calculate_n50(lengths: Iterable[int]) -> int:
    """
    Calculate N50 of a set of lengths.

    Args:
        lengths: Sequence lengths

    Returns:
        Length of the sequence at which the cumulative sum of lengths,
        taken longest first, reaches half the total (0 for empty input)

    Example:
        >>> calculate_n50([2, 3, 4, 5, 6])
        5
    """
    sorted_lengths = np.sort(np.asarray(list(lengths), dtype=np.int64))[::-1]
    if sorted_lengths.size == 0:
        return 0

    cumulative = np.cumsum(sorted_lengths)
    index = int(np.searchsorted(cumulative, cumulative[-1] / 2, side='left'))
    return int(sorted_lengths[index])


def sequence_metrics(lengths: Iterable[int]) -> SequenceMetrics:
    """
    Compute count, total, median, average and N50 of sequence lengths.

    Example:
        >>> sequence_metrics([100, 200, 300]).median_length
        200.0
    """
    values = np.asarray(list(lengths), dtype=np.int64)
    if values.size == 0:
        return SequenceMetrics()

    return SequenceMetrics(
        number_of_entries=int(values.size),
        total_length=int(values.sum()),
        median_length=float(np.median(values)),
        average_length=float(values.mean()),
        n50=calculate_n50(values),
    )


def format_metrics(metrics: SequenceMetrics) -> str:
    """Multi-line human-readable rendering of metrics."""
    return (
        f"Total number of contigs   = {metrics.number_of_entries:,}\n"
        f"Total length of contigs   = {metrics.total_length:,}\n"
        f"Median length of contigs  = {metrics.median_length:,.1f}\n"
        f"Average length of contigs = {metrics.average_length:,.1f}\n"
        f"N50 = {metrics.n50:,}"
    )


__all__ = [
    'SequenceMetrics',
    'calculate_n50',
    'sequence_metrics',
    'format_metrics',
]
