#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ContigMerger v0.1.0

Pytest configuration and shared fixtures.

Author: ContigMerger Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import pytest
from pathlib import Path
import tempfile
import shutil

from contigmerger.core import OverlapGraph, OverlapInfo


def make_overlap(length, mismatches=0, edits=0, from_length=100, to_length=100,
                 at_start_of_from=False, overlap_type='OVL'):
    """
    Build an OverlapInfo.

    By default the overlap sits at the end of the "from" contig and at the
    start of the "to" contig; at_start_of_from describes the reverse case.
    """
    if at_start_of_from:
        from_start, from_end = 0, length
        to_start, to_end = to_length - length, to_length
    else:
        from_start, from_end = from_length - length, from_length
        to_start, to_end = 0, length
    return OverlapInfo(
        overlap_type=overlap_type,
        overlap_length=length,
        mismatches=mismatches,
        edits=edits,
        from_ctg_length=from_length,
        overlap_start_on_from=from_start,
        overlap_end_on_from=from_end,
        to_ctg_length=to_length,
        overlap_start_on_to=to_start,
        overlap_end_on_to=to_end,
    )


def build_graph(edges, vertices=()):
    """Graph from (from, to, OverlapInfo) triples plus extra vertices."""
    graph = OverlapGraph()
    for vertex in vertices:
        graph.add_vertex(vertex)
    for from_vertex, to_vertex, overlap in edges:
        graph.add_edge(from_vertex, to_vertex, overlap)
    return graph


def dot_label(overlap):
    return ','.join(overlap.to_fields())


@pytest.fixture
def temp_output_dir():
    """Create temporary output directory for tests."""
    temp_dir = tempfile.mkdtemp(prefix="contigmerger_test_")
    yield Path(temp_dir)
    # Cleanup after test
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def two_contig_sequences():
    """Contig A (100 bp) whose last 20 bases start contig B (80 bp)."""
    seq_a = "ACGT" * 25
    seq_b = seq_a[-20:] + "T" * 60
    return {"A": seq_a, "B": seq_b}


@pytest.fixture
def two_contig_graph():
    """A -> B with a 20 bp overlap and one mismatch."""
    return build_graph([
        ("A", "B", make_overlap(20, mismatches=1, from_length=100, to_length=80)),
    ])


@pytest.fixture
def cluster_dot(temp_output_dir):
    """
    DOT file for a small cluster set.

    Cluster 1: 1 -> 2 -> 3 and 1 -> 4, with 4 -> 1 written backwards
    (overlap at the start of 4) plus isolated vertex 5.
    """
    o12 = make_overlap(10, mismatches=1, from_length=40, to_length=30)
    o23 = make_overlap(5, from_length=30, to_length=20)
    o41 = make_overlap(10, from_length=35, to_length=40, at_start_of_from=True)
    content = (
        "digraph G {\n"
        f'  1 -> 2 [label="{dot_label(o12)}"];\n'
        f'  2 -> 3 [label="{dot_label(o23)}"];\n'
        f'  4 -> 1 [label="{dot_label(o41)}"];\n'
        "  5;\n"
        "}\n"
    )
    path = temp_output_dir / "clusters.dot"
    path.write_text(content)
    return path


@pytest.fixture
def cluster_fasta(temp_output_dir):
    """Sequences for cluster_dot plus contig 6 that is absent from the graph."""
    sequences = {
        "1": "A" * 30 + "C" * 10,
        "2": "C" * 10 + "G" * 15 + "T" * 5,
        "3": "T" * 5 + "A" * 15,
        "4": "G" * 35,
        "5": "ACGTACGTAC",
        "6": "TTTTGGGG",
    }
    path = temp_output_dir / "cluster_1.fasta"
    path.write_text(''.join(f">{k}\n{v}\n" for k, v in sequences.items()))
    return path, sequences

# ContigMerger v0.1.0
# Any usage is subject to this software's license.
