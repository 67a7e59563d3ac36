"""
ContigMerger v0.1.0

Core merging pipeline: overlap graph, edge orientation, path enumeration,
contig merging and branch selection.

Author: ContigMerger Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from .overlap_graph import (
    OVERLAP_FIELDS,
    GraphCycleError,
    OverlapGraph,
    OverlapInfo,
)
from .edge_orienter import OrientationResult, orient_edges
from .path_enumerator import PathStatistics, enumerate_paths, iter_paths
from .contig_merger import (
    ComponentTrim,
    MergedContig,
    MissingSequenceError,
    merge_path,
    merge_paths,
)
from .branch_selector import (
    BranchSelection,
    TieBreak,
    group_by_root,
    select_branch,
    select_branches,
)

__all__ = [
    'OVERLAP_FIELDS',
    'GraphCycleError',
    'OverlapGraph',
    'OverlapInfo',
    'OrientationResult',
    'orient_edges',
    'PathStatistics',
    'enumerate_paths',
    'iter_paths',
    'ComponentTrim',
    'MergedContig',
    'MissingSequenceError',
    'merge_path',
    'merge_paths',
    'BranchSelection',
    'TieBreak',
    'group_by_root',
    'select_branch',
    'select_branches',
]
