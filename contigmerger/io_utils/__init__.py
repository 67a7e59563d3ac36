"""
ContigMerger v0.1.0

I/O Module for ContigMerger.

Module structure:
1. dot_reader.py - Overlap graph loading from Dedupe DOT files
2. sequence_store.py - Contig sequences from FASTA/FASTQ cluster files
3. report_writer.py - Merged contig FASTA output and info reports
"""

from .dot_reader import (
    OverlapLabelError,
    parse_overlap_label,
    graph_from_networkx,
    read_overlap_dot,
)
from .sequence_store import (
    SequenceStore,
    detect_format,
    expand_cluster_pattern,
    read_sequences,
)
from .report_writer import (
    write_fasta,
    merged_records,
    format_merged_contig_block,
    format_selection_row,
    write_merge_info,
    write_selection_info,
)

__all__ = [
    'OverlapLabelError',
    'parse_overlap_label',
    'graph_from_networkx',
    'read_overlap_dot',
    'SequenceStore',
    'detect_format',
    'expand_cluster_pattern',
    'read_sequences',
    'write_fasta',
    'merged_records',
    'format_merged_contig_block',
    'format_selection_row',
    'write_merge_info',
    'write_selection_info',
]
