#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ContigMerger v0.1.0

Branch selection — keep one merged contig per root contig.

All merged contigs grown from the same root form a branch. The branch
winner is the contig with the smallest path score; ties are broken by
length when the score is 0 and by total error otherwise.

Author: ContigMerger Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from typing import Dict, List
from dataclasses import dataclass, field
from enum import Enum
import logging

from .contig_merger import MergedContig

logger = logging.getLogger(__name__)


class TieBreak(Enum):
    """Rule that decided a branch."""
    NONE = "none"
    LONGEST = "longest"
    LOWEST_ERROR = "lowest error"


@dataclass
class BranchSelection:
    """
    Outcome of selecting one branch.

    Attributes:
        root: Root contig shared by all candidates
        winner: Selected merged contig
        candidates: Every merged contig of the branch, in path order
        num_ties: Candidates sharing the minimum score (0 when there was no tie)
        tiebreak: Rule used to pick the winner
    """
    root: str
    winner: MergedContig
    candidates: List[MergedContig] = field(default_factory=list)
    num_ties: int = 0
    tiebreak: TieBreak = TieBreak.NONE

    @property
    def paths_from_root(self) -> int:
        return len(self.candidates)

    @property
    def min_score(self) -> float:
        return self.winner.path_score

    @property
    def rejected(self) -> List[MergedContig]:
        return [c for c in self.candidates if c.ordinal != self.winner.ordinal]


def group_by_root(merged_contigs: List[MergedContig]) -> Dict[str, List[MergedContig]]:
    """Group merged contigs by root, roots and members in first-seen order."""
    branches: Dict[str, List[MergedContig]] = {}
    for contig in merged_contigs:
        branches.setdefault(contig.root, []).append(contig)
    return branches


def select_branch(root: str, candidates: List[MergedContig]) -> BranchSelection:
    """
    Pick the winner of a single branch.

    Args:
        root: Root contig id
        candidates: Merged contigs grown from root, in path order

    Raises:
        ValueError: Empty branch
    """
    if not candidates:
        raise ValueError(f"Branch {root} has no merged contigs")

    min_score = min(contig.path_score for contig in candidates)
    tied = [contig for contig in candidates if contig.path_score == min_score]

    if len(tied) == 1:
        return BranchSelection(root=root, winner=tied[0], candidates=list(candidates))

    # max()/min() return the first of equal keys, i.e. earliest in path order
    if min_score == 0:
        winner = max(tied, key=lambda contig: contig.length)
        tiebreak = TieBreak.LONGEST
    else:
        winner = min(tied, key=lambda contig: contig.total_error)
        tiebreak = TieBreak.LOWEST_ERROR

    logger.debug(
        f"Branch {root}: {len(tied)} tied at score {min_score}, "
        f"{winner.id} wins by {tiebreak.value}"
    )
    return BranchSelection(
        root=root,
        winner=winner,
        candidates=list(candidates),
        num_ties=len(tied),
        tiebreak=tiebreak,
    )


def select_branches(merged_contigs: List[MergedContig]) -> List[BranchSelection]:
    """Select one winner per root, branches in first-seen root order."""
    return [
        select_branch(root, candidates)
        for root, candidates in group_by_root(merged_contigs).items()
    ]

# ContigMerger v0.1.0
# Any usage is subject to this software's license.
