#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ContigMerger v0.1.0

Tests for DOT graph reading, sequence loading and report writing.

Author: ContigMerger Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import gzip
import pytest
import networkx as nx

from contigmerger.core import MissingSequenceError, merge_path, select_branches
from contigmerger.io_utils import (
    OverlapLabelError,
    SequenceStore,
    detect_format,
    expand_cluster_pattern,
    format_selection_row,
    graph_from_networkx,
    parse_overlap_label,
    read_overlap_dot,
    write_fasta,
    write_merge_info,
    write_selection_info,
)
from conftest import build_graph, make_overlap


class TestOverlapLabels:
    """Test overlap label parsing."""

    def test_quoted_label(self):
        info = parse_overlap_label('"LEFT,20,1,0,100,80,100,80,0,20"')

        assert info.overlap_type == "LEFT"
        assert info.overlap_length == 20
        assert info.overlap_start_on_from == 80

    def test_bad_label(self):
        with pytest.raises(OverlapLabelError):
            parse_overlap_label("LEFT,20,1")

    def test_networkx_conversion(self):
        nx_graph = nx.DiGraph()
        nx_graph.add_node("solo")
        nx_graph.add_edge("a", "b", label="OVL,5,0,0,30,25,30,20,0,5")

        graph = graph_from_networkx(nx_graph)

        assert graph.vertices == ["solo", "a", "b"]
        assert graph.isolated_vertices() == ["solo"]
        assert graph.get_overlap("a", "b").overlap_length == 5

    def test_edge_without_label(self):
        nx_graph = nx.DiGraph()
        nx_graph.add_edge("a", "b")

        with pytest.raises(OverlapLabelError):
            graph_from_networkx(nx_graph)


class TestDotReader:
    """Test reading Dedupe DOT files."""

    def test_read_cluster_dot(self, cluster_dot):
        graph = read_overlap_dot(cluster_dot)

        assert set(graph.vertices) == {"1", "2", "3", "4", "5"}
        assert graph.num_edges == 3
        assert graph.has_edge("4", "1")
        assert graph.get_overlap("1", "2").mismatches == 1
        assert graph.isolated_vertices() == ["5"]

    def test_missing_file(self, temp_output_dir):
        with pytest.raises(FileNotFoundError):
            read_overlap_dot(temp_output_dir / "absent.dot")


class TestSequenceStore:
    """Test FASTA/FASTQ sequence loading."""

    def test_detect_format(self):
        assert detect_format("x/cluster_1.fasta") == "fasta"
        assert detect_format("cluster.fa.gz") == "fasta"
        assert detect_format("cluster.fastq") == "fastq"
        assert detect_format("cluster.FQ.GZ") == "fastq"
        with pytest.raises(ValueError):
            detect_format("cluster.txt")

    def test_load_fasta(self, cluster_fasta):
        path, sequences = cluster_fasta
        store = SequenceStore.from_files([path])

        assert dict(store) == sequences
        assert list(store) == list(sequences)
        assert store.source_files == [path]

    def test_load_gzipped_fastq(self, temp_output_dir):
        path = temp_output_dir / "reads.fastq.gz"
        with gzip.open(path, "wt") as f:
            f.write("@c1\nACGT\n+\nIIII\n@c2\nGG\n+\nII\n")

        store = SequenceStore.from_files([path])

        assert store["c1"] == "ACGT"
        assert store.lengths() == [4, 2]

    def test_load_gzipped_uppercase_suffix(self, temp_output_dir):
        path = temp_output_dir / "contigs.fa.GZ"
        with gzip.open(path, "wt") as f:
            f.write(">c1\nACGTACGT\n")

        store = SequenceStore.from_files([path])

        assert store["c1"] == "ACGTACGT"

    def test_percent_pattern(self, temp_output_dir):
        for i in (2, 1):
            (temp_output_dir / f"cluster_{i}.fa").write_text(f">c{i}\nACGT\n")

        files = expand_cluster_pattern(str(temp_output_dir / "cluster_%.fa"))
        store = SequenceStore.from_patterns([str(temp_output_dir / "cluster_%.fa")])

        assert [f.name for f in files] == ["cluster_1.fa", "cluster_2.fa"]
        assert list(store) == ["c1", "c2"]

    def test_pattern_without_match(self, temp_output_dir):
        with pytest.raises(FileNotFoundError):
            SequenceStore.from_patterns([str(temp_output_dir / "none_*.fa")])

    def test_duplicate_id_keeps_later(self, temp_output_dir):
        first = temp_output_dir / "a.fa"
        second = temp_output_dir / "b.fa"
        first.write_text(">x\nAAAA\n")
        second.write_text(">x\nCCCC\n")

        store = SequenceStore.from_files([first, second])

        assert store["x"] == "CCCC"
        assert len(store) == 1

    def test_require(self):
        store = SequenceStore({"a": "ACGT"})
        store.require(["a"])

        with pytest.raises(MissingSequenceError) as exc_info:
            store.require(["a", "b", "c"])
        assert exc_info.value.contig_ids == ["b", "c"]


class TestReportWriter:
    """Test FASTA and info report output."""

    @pytest.fixture
    def merged(self, two_contig_graph, two_contig_sequences):
        return merge_path(["A", "B"], two_contig_graph, two_contig_sequences, ordinal=1)

    def test_write_fasta_unwrapped(self, temp_output_dir):
        path = temp_output_dir / "out" / "seqs.fasta"
        count = write_fasta([("s1", "ACGTACGT"), ("s2", "GG")], path)

        assert count == 2
        assert path.read_text() == ">s1\nACGTACGT\n>s2\nGG\n"

    def test_write_fasta_wrapped(self, temp_output_dir):
        path = temp_output_dir / "seqs.fasta"
        write_fasta([("s1", "ACGTACGTAC")], path, line_width=4)

        assert path.read_text() == ">s1\nACGT\nACGT\nAC\n"

    def test_merge_info_block(self, temp_output_dir, merged):
        path = temp_output_dir / "info.txt"
        write_merge_info([merged], path, {"Graph file": "g.dot"})

        text = path.read_text()
        assert text.startswith("Merged contigs information file\n")
        assert " - Graph file: g.dot;" in text
        assert "CLUSTER: merged_contig_1\n" in text
        assert "A\t100\tNA\n" in text
        assert "B\t80\t60\n" in text
        assert "merged_contig_length: 160\n" in text
        assert "total_error: 1\n" in text

    def test_selection_info(self, temp_output_dir, merged):
        selections = select_branches([merged])
        path = temp_output_dir / "info_selected.txt"
        write_selection_info(selections, path, merged_before_selection=1)

        lines = path.read_text().splitlines()
        header_index = lines.index("//") + 1
        assert lines[header_index].split("\t")[0] == "root"
        assert lines[header_index + 1] == format_selection_row(selections[0])
        assert lines[header_index + 1].split("\t") == [
            "A", "1", "merged_contig_1", "1", "160", "2", "0.003125", "0", "none",
        ]

# ContigMerger v0.1.0
# Any usage is subject to this software's license.
