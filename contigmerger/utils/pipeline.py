"""
ContigMerger Pipeline Orchestrator.

Coordinates the complete merging run:
- Loading: overlap graph (DOT) and contig sequences (FASTA/FASTQ clusters)
- Orientation: every edge rewritten to suffix -> prefix direction
- Enumeration: all source-to-sink overlap paths
- Merging: one super-contig per path
- Selection: one winner per root contig
- Output: FASTA files, info reports and length metrics

The orchestrator owns the graph and the sequence store; every stage only
reads them and returns a new collection.
"""

from pathlib import Path
from typing import Optional, Dict, Any, List, Union
import logging
import time
from dataclasses import dataclass, field

from ..core.overlap_graph import OverlapGraph
from ..core.edge_orienter import OrientationResult, orient_edges
from ..core.path_enumerator import PathStatistics, enumerate_paths
from ..core.contig_merger import MergedContig, merge_paths
from ..core.branch_selector import BranchSelection, select_branches
from ..io_utils import (
    SequenceStore,
    read_overlap_dot,
    write_fasta,
    merged_records,
    write_merge_info,
    write_selection_info,
)
from .sequence_utils import SequenceMetrics, sequence_metrics, format_metrics

logger = logging.getLogger(__name__)


def natural_sort_key(contig_id: str):
    """Numeric ids sort numerically and before non-numeric ids."""
    if contig_id.isdigit():
        return (0, int(contig_id), '')
    return (1, 0, contig_id)


# ============================================================================
# Data Structures
# ============================================================================

@dataclass
class MergeResult:
    """Complete result of one merging run."""
    orientation: OrientationResult
    paths: List[List[str]]
    path_stats: PathStatistics
    merged_contigs: List[MergedContig]
    selections: List[BranchSelection]
    isolated_contigs: List[str]          # Graph vertices without edges
    ungraphed_contigs: List[str]         # Store contigs absent from the graph
    metrics: Dict[str, SequenceMetrics] = field(default_factory=dict)
    output_files: Dict[str, Path] = field(default_factory=dict)
    elapsed_sec: float = 0.0

    @property
    def oriented_graph(self) -> OverlapGraph:
        return self.orientation.graph

    @property
    def winners(self) -> List[MergedContig]:
        """Branch winners in ordinal order."""
        return sorted((s.winner for s in self.selections), key=lambda c: c.ordinal)

    @property
    def rejected(self) -> List[MergedContig]:
        """Non-winning merged contigs in ordinal order."""
        rejected = [c for s in self.selections for c in s.rejected]
        return sorted(rejected, key=lambda c: c.ordinal)

    @property
    def singletons(self) -> List[str]:
        """Contigs emitted unmerged, in natural id order."""
        return sorted(self.isolated_contigs + self.ungraphed_contigs, key=natural_sort_key)

    @property
    def unplaced_contigs(self) -> List[str]:
        """Connected contigs that ended up in no winning merged contig."""
        placed = {v for winner in self.winners for v in winner.components}
        return [
            v for v in self.oriented_graph.vertices
            if v not in placed and not self.oriented_graph.is_isolated(v)
        ]

    def final_records(self, sequences: SequenceStore) -> List[tuple]:
        """Final output set: singletons first, then winners."""
        records = [(contig_id, sequences[contig_id]) for contig_id in self.singletons]
        records.extend(merged_records(self.winners))
        return records

    def summary(self) -> str:
        """Return human-readable summary."""
        return (
            f"Merge Summary:\n"
            f"  Edges flipped: {self.orientation.flipped_edges:,}\n"
            f"  Paths: {self.path_stats.num_paths:,} "
            f"({self.path_stats.unique_vertices:,} unique vertices, "
            f"{self.path_stats.total_vertex_occurrences:,} including repeats)\n"
            f"  Merged contigs: {len(self.merged_contigs):,}\n"
            f"  Selected: {len(self.selections):,}\n"
            f"  Singletons: {len(self.singletons):,}\n"
            f"  Time: {self.elapsed_sec:.1f}s"
        )


# ============================================================================
# Orchestrator
# ============================================================================

class MergePipeline:
    """
    Run the overlap-merging pipeline on an in-memory graph and store.

    Args:
        graph: Raw overlap graph (not modified)
        sequences: Contig sequences
        threads: Worker threads for path merging
    """

    def __init__(
        self,
        graph: OverlapGraph,
        sequences: SequenceStore,
        threads: int = 1,
    ):
        self.graph = graph
        self.sequences = sequences
        self.threads = max(1, threads)

    @classmethod
    def from_files(
        cls,
        graph_file: Union[str, Path],
        cluster_patterns: List[str],
        threads: int = 1,
    ) -> 'MergePipeline':
        """Load the DOT graph and cluster sequence files."""
        logger.info("Importing cluster files")
        sequences = SequenceStore.from_patterns(cluster_patterns)
        graph = read_overlap_dot(graph_file)
        return cls(graph, sequences, threads=threads)

    def run(self) -> MergeResult:
        """
        Execute every stage.

        Raises:
            MissingSequenceError: A graph vertex has no sequence
            GraphCycleError: The oriented graph has a cycle
        """
        start_time = time.time()
        metrics: Dict[str, SequenceMetrics] = {}

        self.sequences.require(self.graph.vertices)
        metrics['input'] = self._log_metrics("Input contigs", self.sequences.lengths())

        logger.info("Flipping the edges in the graph")
        orientation = orient_edges(self.graph)
        oriented = orientation.graph

        logger.info("Finding all overlap paths in graph")
        paths = enumerate_paths(oriented)
        path_stats = PathStatistics.from_paths(paths)
        logger.info(f"Found {path_stats.num_paths} paths in graph")
        logger.info(f"Unique vertices present in all paths: {path_stats.unique_vertices}")
        logger.info(f"Total number of vertices in paths (including repeated): "
                    f"{path_stats.total_vertex_occurrences}")

        logger.info("Merging contigs")
        merged = merge_paths(paths, oriented, self.sequences, threads=self.threads)
        metrics['merged'] = self._log_metrics("Merged contigs", [c.length for c in merged])

        logger.info("Selecting best scoring merged contigs")
        selections = select_branches(merged)
        metrics['selected'] = self._log_metrics(
            "Selected merged contigs", [s.winner.length for s in selections]
        )

        result = MergeResult(
            orientation=orientation,
            paths=paths,
            path_stats=path_stats,
            merged_contigs=merged,
            selections=selections,
            isolated_contigs=oriented.isolated_vertices(),
            ungraphed_contigs=[c for c in self.sequences if c not in oriented],
            metrics=metrics,
        )

        final_lengths = [len(seq) for _, seq in result.final_records(self.sequences)]
        metrics['final'] = self._log_metrics("Final sequence set", final_lengths)

        unplaced = result.unplaced_contigs
        if unplaced:
            logger.info(f"{len(unplaced)} connected contigs are only present in rejected merges")

        result.elapsed_sec = time.time() - start_time
        return result

    def write_outputs(
        self,
        result: MergeResult,
        output_dir: Union[str, Path] = '.',
        prefix: str = 'overlap_extended_contigs',
        line_width: int = 0,
        write_removed: bool = True,
        final_fasta: str = 'all_merged_contigs.fasta',
        inputs: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Path]:
        """
        Write FASTA files and info reports for a finished run.

        Returns:
            Mapping of output kind -> written path
        """
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        inputs = {k: str(v) for k, v in (inputs or {}).items()}

        files = {
            'merged_fasta': output_dir / f"{prefix}.fasta",
            'merged_info': output_dir / f"info_{prefix}.txt",
            'selected_fasta': output_dir / f"selected_{prefix}.fasta",
            'selected_info': output_dir / f"info_selected_{prefix}.txt",
            'final_fasta': output_dir / final_fasta,
        }
        if write_removed:
            files['removed_fasta'] = output_dir / f"removed_{prefix}.fasta"

        write_fasta(merged_records(result.merged_contigs), files['merged_fasta'], line_width)
        write_merge_info(result.merged_contigs, files['merged_info'], inputs)
        write_fasta(merged_records(result.winners), files['selected_fasta'], line_width)
        write_selection_info(
            result.selections,
            files['selected_info'],
            inputs,
            merged_before_selection=len(result.merged_contigs),
        )
        if write_removed:
            write_fasta(merged_records(result.rejected), files['removed_fasta'], line_width)
        write_fasta(result.final_records(self.sequences), files['final_fasta'], line_width)

        result.output_files = files
        return files

    @staticmethod
    def _log_metrics(label: str, lengths: List[int]) -> SequenceMetrics:
        metrics = sequence_metrics(lengths)
        logger.info(f"{label}:\n{format_metrics(metrics)}")
        return metrics


def run_merge_pipeline(
    graph_file: Union[str, Path],
    cluster_patterns: List[str],
    output_dir: Union[str, Path] = '.',
    prefix: str = 'overlap_extended_contigs',
    threads: int = 1,
    line_width: int = 0,
    write_removed: bool = True,
    final_fasta: str = 'all_merged_contigs.fasta',
) -> MergeResult:
    """Load inputs, merge, and write all outputs."""
    pipeline = MergePipeline.from_files(graph_file, cluster_patterns, threads=threads)
    result = pipeline.run()
    pipeline.write_outputs(
        result,
        output_dir=output_dir,
        prefix=prefix,
        line_width=line_width,
        write_removed=write_removed,
        final_fasta=final_fasta,
        inputs={
            'Graph file': graph_file,
            'Cluster files': f"{', '.join(cluster_patterns)} ({len(pipeline.sequences.source_files)})",
        },
    )
    logger.info(result.summary())
    return result
