#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ContigMerger v0.1.0

Report writer — merged contig FASTA files and tab-separated info reports.

Author: ContigMerger Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from __future__ import annotations
import logging
from datetime import datetime
from pathlib import Path
from typing import Iterable, Sequence

from ..core.branch_selector import BranchSelection
from ..core.contig_merger import MergedContig

logger = logging.getLogger(__name__)

SELECTION_COLUMNS = (
    'root',
    'paths_from_root',
    'selected_merged_contig',
    'total_error',
    'length',
    'number_of_contigs_in_path',
    'score',
    'number_of_ties',
    'tiebreaker',
)


# ============================================================================
#                           FASTA OUTPUT
# ============================================================================

def write_fasta(
    records: Iterable[tuple[str, str]],
    output_path: str | Path,
    line_width: int = 0
) -> int:
    """
    Write (id, sequence) records to a FASTA file.

    Args:
        records: Iterable of (id, sequence) tuples
        output_path: Output FASTA path (parent directories are created)
        line_width: Bases per line (0 = no wrapping)

    Returns:
        Number of sequences written
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    count = 0
    with open(output_path, 'w') as f:
        for record_id, sequence in records:
            f.write(f">{record_id}\n")
            if line_width > 0:
                for i in range(0, len(sequence), line_width):
                    f.write(sequence[i:i + line_width] + '\n')
            else:
                f.write(sequence + '\n')
            count += 1

    logger.info(f"Wrote {count} sequences to {output_path}")
    return count


def merged_records(contigs: Iterable[MergedContig]) -> list[tuple[str, str]]:
    """(id, sequence) records of merged contigs in ordinal order."""
    return [(c.id, c.sequence) for c in sorted(contigs, key=lambda c: c.ordinal)]


# ============================================================================
#                           INFO REPORTS
# ============================================================================

def _report_header(title: str, output_path: Path, inputs: dict[str, str]) -> str:
    """Common header block: title, file name, timestamp and inputs."""
    lines = [
        title,
        f"File: {output_path.name};",
        f"Created: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')};",
        "Input files:",
    ]
    lines.extend(f" - {name}: {value};" for name, value in inputs.items())
    return '\n'.join(lines) + '\n'


def format_merged_contig_block(contig: MergedContig) -> str:
    """
    Render the info block of one merged contig.

    Components that were not trimmed (the root, or a junction without an
    overlap edge) show NA in the trimmed column.
    """
    lines = [
        f"CLUSTER: {contig.id}",
        "parent_contigs\ttotal_length\tleft_ovlp_rmvd_length",
    ]
    for trim in contig.trims:
        trimmed = 'NA' if trim.trimmed_length is None else str(trim.trimmed_length)
        lines.append(f"{trim.contig_id}\t{trim.original_length}\t{trimmed}")
    lines.append(f"merged_contig_length: {contig.length}")
    lines.append(f"total_error: {contig.total_error}")
    lines.append(f"path_score: {contig.path_score}")
    return '\n'.join(lines) + '\n'


def write_merge_info(
    contigs: Sequence[MergedContig],
    output_path: str | Path,
    inputs: dict[str, str] | None = None
) -> None:
    """Write the per-merge component report."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w') as f:
        f.write(_report_header("Merged contigs information file", output_path, inputs or {}))
        for contig in sorted(contigs, key=lambda c: c.ordinal):
            f.write('\n')
            f.write(format_merged_contig_block(contig))

    logger.info(f"Merged contig information written to {output_path}")


def format_selection_row(selection: BranchSelection) -> str:
    """One tab-separated row of the selection report."""
    winner = selection.winner
    return '\t'.join(str(value) for value in (
        selection.root,
        selection.paths_from_root,
        winner.id,
        winner.total_error,
        winner.length,
        winner.num_components,
        winner.path_score,
        selection.num_ties,
        selection.tiebreak.value,
    ))


def write_selection_info(
    selections: Sequence[BranchSelection],
    output_path: str | Path,
    inputs: dict[str, str] | None = None,
    merged_before_selection: int | None = None
) -> None:
    """Write the per-branch selection report."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    inputs = dict(inputs or {})
    if merged_before_selection is not None:
        inputs['Merged contigs before selection'] = str(merged_before_selection)

    with open(output_path, 'w') as f:
        f.write(_report_header("Selected merged contigs information file", output_path, inputs))
        f.write("//\n")
        f.write('\t'.join(SELECTION_COLUMNS) + '\n')
        for selection in selections:
            f.write(format_selection_row(selection) + '\n')

    logger.info(f"Selection information written to {output_path}")

# ContigMerger v0.1.0
# Any usage is subject to this software's license.
