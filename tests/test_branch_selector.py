#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ContigMerger v0.1.0

Tests for per-root branch selection and tie-breaking.

Author: ContigMerger Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import pytest

from contigmerger.core import (
    ComponentTrim,
    MergedContig,
    TieBreak,
    group_by_root,
    select_branch,
    select_branches,
)


def contig(ordinal, components, length, total_error):
    """MergedContig with a placeholder sequence of the given length."""
    return MergedContig(
        ordinal=ordinal,
        components=tuple(components),
        sequence="A" * length,
        total_error=total_error,
        trims=tuple(ComponentTrim(c, 0) for c in components),
    )


class TestSelectBranch:
    """Test winner selection within one branch."""

    def test_single_candidate(self):
        only = contig(1, "RA", 100, 3)
        selection = select_branch("R", [only])

        assert selection.winner is only
        assert selection.tiebreak == TieBreak.NONE
        assert selection.num_ties == 0
        assert selection.paths_from_root == 1
        assert selection.rejected == []

    def test_lowest_score_wins(self):
        worse = contig(1, "RA", 100, 4)      # 4 / 200
        better = contig(2, "RB", 100, 1)     # 1 / 200
        selection = select_branch("R", [worse, better])

        assert selection.winner is better
        assert selection.tiebreak == TieBreak.NONE
        assert selection.rejected == [worse]

    def test_zero_score_tie_prefers_longest(self):
        """Test that perfect merges are decided by length."""
        short = contig(1, "RA", 100, 0)
        long = contig(2, "RB", 150, 0)
        selection = select_branch("R", [short, long])

        assert selection.winner is long
        assert selection.tiebreak == TieBreak.LONGEST
        assert selection.tiebreak.value == "longest"
        assert selection.num_ties == 2

    def test_nonzero_score_tie_prefers_lowest_error(self):
        """Test that equal nonzero scores are decided by total error."""
        # 2 / (100 * 2) == 4 / (200 * 2) == 0.01
        fewer = contig(1, "RA", 100, 2)
        more = contig(2, "RB", 200, 4)
        assert fewer.path_score == more.path_score

        selection = select_branch("R", [more, fewer])

        assert selection.winner is fewer
        assert selection.tiebreak == TieBreak.LOWEST_ERROR
        assert selection.tiebreak.value == "lowest error"
        assert selection.num_ties == 2

    def test_equal_length_tie_takes_first(self):
        first = contig(1, "RA", 120, 0)
        second = contig(2, "RB", 120, 0)
        selection = select_branch("R", [first, second])

        assert selection.winner is first
        assert selection.tiebreak == TieBreak.LONGEST

    def test_equal_error_tie_takes_first(self):
        first = contig(1, "RA", 100, 2)
        second = contig(2, "RB", 100, 2)
        selection = select_branch("R", [first, second])

        assert selection.winner is first
        assert selection.tiebreak == TieBreak.LOWEST_ERROR

    def test_only_tied_candidates_considered(self):
        """Test that a longer but non-minimal candidate cannot win the tiebreak."""
        longest_flawed = contig(1, "RA", 500, 1)
        perfect_short = contig(2, "RB", 50, 0)
        perfect_long = contig(3, "RC", 80, 0)
        selection = select_branch("R", [longest_flawed, perfect_short, perfect_long])

        assert selection.winner is perfect_long
        assert selection.num_ties == 2

    def test_empty_branch_rejected(self):
        with pytest.raises(ValueError):
            select_branch("R", [])


class TestSelectBranches:
    """Test grouping and selection across roots."""

    def test_group_by_root_order(self):
        merged = [
            contig(1, "AB", 10, 0),
            contig(2, "CD", 10, 0),
            contig(3, "AE", 10, 0),
        ]
        groups = group_by_root(merged)

        assert list(groups) == ["A", "C"]
        assert [m.ordinal for m in groups["A"]] == [1, 3]

    def test_one_winner_per_root(self):
        merged = [
            contig(1, "AB", 100, 1),
            contig(2, "AC", 100, 0),
            contig(3, "DE", 60, 2),
        ]
        selections = select_branches(merged)

        assert [s.root for s in selections] == ["A", "D"]
        assert [s.winner.ordinal for s in selections] == [2, 3]
        assert [s.paths_from_root for s in selections] == [2, 1]

    def test_every_candidate_is_winner_or_rejected(self):
        merged = [contig(i, ["R", f"X{i}"], 50 + i, i % 3) for i in range(1, 8)]
        selection = select_branches(merged)[0]

        ordinals = {selection.winner.ordinal} | {c.ordinal for c in selection.rejected}
        assert ordinals == set(range(1, 8))
        assert len(selection.rejected) == 6

# ContigMerger v0.1.0
# Any usage is subject to this software's license.
