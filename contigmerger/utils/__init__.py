"""
Utilities module for ContigMerger.

This module provides the run-level utilities:
- Pipeline orchestration (loading, merging, selection, output)
- Sequence length metrics
"""

from .pipeline import (
    MergePipeline,
    MergeResult,
    natural_sort_key,
    run_merge_pipeline,
)
from .sequence_utils import (
    SequenceMetrics,
    calculate_n50,
    sequence_metrics,
    format_metrics,
)

__all__ = [
    'MergePipeline',
    'MergeResult',
    'natural_sort_key',
    'run_merge_pipeline',
    'SequenceMetrics',
    'calculate_n50',
    'sequence_metrics',
    'format_metrics',
]
