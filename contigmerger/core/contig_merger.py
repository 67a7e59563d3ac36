#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ContigMerger v0.1.0

Contig merging — build one super-contig per overlap path.

Overlap notation: contig A overlaps contig B
    A: --------------->
    B:       ---------------->
         <--overlap-->

The merged sequence keeps A whole and appends B without its first
overlap_length bases.

Author: ContigMerger Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from typing import List, Mapping, Optional, Tuple
from dataclasses import dataclass
from concurrent.futures import ThreadPoolExecutor, as_completed
import logging

from .overlap_graph import OverlapGraph

logger = logging.getLogger(__name__)

MERGED_CONTIG_PREFIX = "merged_contig_"


class MissingSequenceError(KeyError):
    """Raised when a graph vertex has no sequence in the sequence store."""

    def __init__(self, contig_ids: List[str]):
        self.contig_ids = list(contig_ids)
        preview = ', '.join(self.contig_ids[:10])
        if len(self.contig_ids) > 10:
            preview += ', ...'
        super().__init__(
            f"{len(self.contig_ids)} graph vertices have no sequence: {preview}"
        )

    def __str__(self) -> str:
        return self.args[0]


@dataclass(frozen=True)
class ComponentTrim:
    """
    Contribution of one component contig to a merged contig.

    trimmed_length is None when nothing was trimmed: the root contig, or a
    position with no overlap edge from its predecessor.
    """
    contig_id: str
    original_length: int
    trimmed_length: Optional[int] = None

    @property
    def contributed_length(self) -> int:
        if self.trimmed_length is None:
            return self.original_length
        return self.trimmed_length


@dataclass(frozen=True)
class MergedContig:
    """
    Super-contig produced from one overlap path.

    Attributes:
        ordinal: 1-based creation order, used as the sort key
        components: Path the contig was built from (root first)
        sequence: Concatenated sequence with overlaps trimmed
        total_error: Sum of mismatches + edits over all junctions used
        trims: Per-component length bookkeeping
    """
    ordinal: int
    components: Tuple[str, ...]
    sequence: str
    total_error: int
    trims: Tuple[ComponentTrim, ...]

    @property
    def id(self) -> str:
        return f"{MERGED_CONTIG_PREFIX}{self.ordinal}"

    @property
    def root(self) -> str:
        return self.components[0]

    @property
    def length(self) -> int:
        return len(self.sequence)

    @property
    def num_components(self) -> int:
        return len(self.components)

    @property
    def path_score(self) -> float:
        """Total error per merged base per component; 0.0 for a perfect merge."""
        denominator = self.length * self.num_components
        if denominator == 0:
            return 0.0 if self.total_error == 0 else float('inf')
        return self.total_error / denominator

    @property
    def is_perfect(self) -> bool:
        return self.total_error == 0

    def __len__(self) -> int:
        return self.length

    def __repr__(self) -> str:
        return (f"MergedContig(id='{self.id}', components={len(self.components)}, "
                f"length={self.length}, total_error={self.total_error})")


def merge_path(
    path: List[str],
    graph: OverlapGraph,
    sequences: Mapping[str, str],
    ordinal: int,
) -> MergedContig:
    """
    Merge the contigs of one path into a single sequence.

    Args:
        path: Vertices from root to sink
        graph: Oriented overlap graph
        sequences: Contig id -> sequence
        ordinal: Ordinal of the merged contig

    Returns:
        MergedContig for the path

    Raises:
        ValueError: Empty path
        MissingSequenceError: A component has no sequence
    """
    if not path:
        raise ValueError("Cannot merge an empty path")

    missing = [contig_id for contig_id in path if contig_id not in sequences]
    if missing:
        raise MissingSequenceError(missing)

    root = path[0]
    root_seq = sequences[root]
    pieces = [root_seq]
    trims = [ComponentTrim(root, len(root_seq))]
    total_error = 0

    for previous, contig_id in zip(path, path[1:]):
        seq = sequences[contig_id]
        overlap = graph.get_overlap(previous, contig_id)

        if overlap is None:
            # Only reachable with hand-built paths; enumerated paths always follow edges
            logger.warning(
                f"No overlap edge {previous} -> {contig_id} in merged contig "
                f"{MERGED_CONTIG_PREFIX}{ordinal}; appending {contig_id} untrimmed"
            )
            pieces.append(seq)
            trims.append(ComponentTrim(contig_id, len(seq)))
            continue

        trimmed = seq[overlap.overlap_length:]
        pieces.append(trimmed)
        trims.append(ComponentTrim(contig_id, len(seq), len(trimmed)))
        total_error += overlap.error

    return MergedContig(
        ordinal=ordinal,
        components=tuple(path),
        sequence=''.join(pieces),
        total_error=total_error,
        trims=tuple(trims),
    )


def _merge_chunk(
    chunk: List[Tuple[int, List[str]]],
    graph: OverlapGraph,
    sequences: Mapping[str, str],
) -> List[MergedContig]:
    return [merge_path(path, graph, sequences, ordinal) for ordinal, path in chunk]


def merge_paths(
    paths: List[List[str]],
    graph: OverlapGraph,
    sequences: Mapping[str, str],
    threads: int = 1,
) -> List[MergedContig]:
    """
    Merge every path, numbering merged contigs 1..N in path order.

    With threads > 1 chunks of paths are merged on a thread pool; graph and
    sequences are only read. The result is always sorted by ordinal.
    """
    numbered = list(enumerate(paths, start=1))

    if threads <= 1 or len(numbered) < 2:
        merged = _merge_chunk(numbered, graph, sequences)
    else:
        chunk_size = max(1, len(numbered) // (threads * 4))
        chunks = [numbered[i:i + chunk_size] for i in range(0, len(numbered), chunk_size)]
        logger.debug(f"Merging {len(numbered)} paths in {len(chunks)} chunks on {threads} threads")

        merged = []
        with ThreadPoolExecutor(max_workers=threads) as executor:
            futures = [
                executor.submit(_merge_chunk, chunk, graph, sequences)
                for chunk in chunks
            ]
            for future in as_completed(futures):
                merged.extend(future.result())
        merged.sort(key=lambda contig: contig.ordinal)

    return merged

# ContigMerger v0.1.0
# Any usage is subject to this software's license.
