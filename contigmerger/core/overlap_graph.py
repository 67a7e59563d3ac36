#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ContigMerger v0.1.0

Overlap graph — contig vertices connected by directed overlap edges.

Author: ContigMerger Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from typing import Dict, Iterator, List, Optional, Tuple
from dataclasses import dataclass, replace
from collections import deque
import logging

logger = logging.getLogger(__name__)


class GraphCycleError(Exception):
    """Raised when the overlap graph contains a directed cycle."""

    def __init__(self, cycle_vertices: List[str]):
        self.cycle_vertices = cycle_vertices
        preview = ', '.join(cycle_vertices[:10])
        if len(cycle_vertices) > 10:
            preview += ', ...'
        super().__init__(
            f"Overlap graph contains a cycle through {len(cycle_vertices)} "
            f"vertices: {preview}"
        )


# Positional order of the fields in an overlap descriptor
OVERLAP_FIELDS = (
    'overlap_type',
    'overlap_length',
    'mismatches',
    'edits',
    'from_ctg_length',
    'overlap_start_on_from',
    'overlap_end_on_from',
    'to_ctg_length',
    'overlap_start_on_to',
    'overlap_end_on_to',
)


@dataclass(frozen=True)
class OverlapInfo:
    """
    Overlap metadata attached to one edge direction.

    Coordinates are expressed relative to the edge: the "from" fields describe
    the contig the edge leaves, the "to" fields the contig it enters.

    Attributes:
        overlap_type: Overlap classification reported by the overlapper
        overlap_length: Number of overlapping bases
        mismatches: Mismatching bases inside the overlap
        edits: Edit operations inside the overlap
        from_ctg_length: Length of the "from" contig
        overlap_start_on_from: Overlap start coordinate on the "from" contig
        overlap_end_on_from: Overlap end coordinate on the "from" contig
        to_ctg_length: Length of the "to" contig
        overlap_start_on_to: Overlap start coordinate on the "to" contig
        overlap_end_on_to: Overlap end coordinate on the "to" contig
    """
    overlap_type: str
    overlap_length: int
    mismatches: int
    edits: int
    from_ctg_length: int
    overlap_start_on_from: int
    overlap_end_on_from: int
    to_ctg_length: int
    overlap_start_on_to: int
    overlap_end_on_to: int

    def __post_init__(self):
        if self.overlap_length < 0:
            raise ValueError(f"overlap_length must be >= 0, got {self.overlap_length}")

    @property
    def error(self) -> int:
        """Mismatches plus edits across the overlap."""
        return self.mismatches + self.edits

    def swapped(self) -> 'OverlapInfo':
        """Return a copy with the "from" and "to" roles exchanged."""
        return replace(
            self,
            from_ctg_length=self.to_ctg_length,
            overlap_start_on_from=self.overlap_start_on_to,
            overlap_end_on_from=self.overlap_end_on_to,
            to_ctg_length=self.from_ctg_length,
            overlap_start_on_to=self.overlap_start_on_from,
            overlap_end_on_to=self.overlap_end_on_from,
        )

    @classmethod
    def from_fields(cls, fields: List[str]) -> 'OverlapInfo':
        """
        Build an OverlapInfo from the 10 positional descriptor fields.

        Raises:
            ValueError: Wrong number of fields or non-integer numeric field
        """
        if len(fields) != len(OVERLAP_FIELDS):
            raise ValueError(
                f"Expected {len(OVERLAP_FIELDS)} overlap fields, got {len(fields)}"
            )
        overlap_type = fields[0].strip()
        numbers = [int(value.strip()) for value in fields[1:]]
        return cls(overlap_type, *numbers)

    def to_fields(self) -> List[str]:
        """Positional descriptor fields, inverse of from_fields."""
        return [str(getattr(self, name)) for name in OVERLAP_FIELDS]


class OverlapGraph:
    """
    Directed overlap graph over contig identifiers.

    Nodes = contig ids
    Edges = overlaps, at most one per ordered (from, to) pair

    Adjacency maps preserve insertion order, which fixes the iteration order
    of vertices, successors and predecessors.
    """

    def __init__(self):
        """Initialize empty overlap graph."""
        # vertex -> {neighbor: OverlapInfo}
        self.successors: Dict[str, Dict[str, OverlapInfo]] = {}
        self.predecessors: Dict[str, Dict[str, OverlapInfo]] = {}
        self.num_edges = 0

    def add_vertex(self, vertex: str):
        """Add a vertex; no-op if already present."""
        if vertex not in self.successors:
            self.successors[vertex] = {}
            self.predecessors[vertex] = {}

    def add_edge(self, from_vertex: str, to_vertex: str, overlap: OverlapInfo):
        """
        Add (or replace) the edge from_vertex -> to_vertex.

        Returns:
            True if an existing edge was replaced
        """
        self.add_vertex(from_vertex)
        self.add_vertex(to_vertex)

        replaced = to_vertex in self.successors[from_vertex]
        self.successors[from_vertex][to_vertex] = overlap
        self.predecessors[to_vertex][from_vertex] = overlap
        if not replaced:
            self.num_edges += 1
        return replaced

    def remove_edge(self, from_vertex: str, to_vertex: str):
        """Remove an edge; raises KeyError if it does not exist."""
        del self.successors[from_vertex][to_vertex]
        del self.predecessors[to_vertex][from_vertex]
        self.num_edges -= 1

    def has_vertex(self, vertex: str) -> bool:
        return vertex in self.successors

    def has_edge(self, from_vertex: str, to_vertex: str) -> bool:
        return to_vertex in self.successors.get(from_vertex, {})

    def get_overlap(self, from_vertex: str, to_vertex: str) -> Optional[OverlapInfo]:
        """Overlap attached to from_vertex -> to_vertex, or None."""
        return self.successors.get(from_vertex, {}).get(to_vertex)

    def get_successors(self, vertex: str) -> List[str]:
        return list(self.successors.get(vertex, {}))

    def get_predecessors(self, vertex: str) -> List[str]:
        return list(self.predecessors.get(vertex, {}))

    def in_degree(self, vertex: str) -> int:
        return len(self.predecessors[vertex])

    def out_degree(self, vertex: str) -> int:
        return len(self.successors[vertex])

    @property
    def vertices(self) -> List[str]:
        return list(self.successors)

    @property
    def num_vertices(self) -> int:
        return len(self.successors)

    def edges(self) -> Iterator[Tuple[str, str, OverlapInfo]]:
        """Yield (from, to, overlap) in insertion order."""
        for from_vertex, targets in self.successors.items():
            for to_vertex, overlap in targets.items():
                yield from_vertex, to_vertex, overlap

    def is_isolated(self, vertex: str) -> bool:
        """True if the vertex has no incident edges."""
        return not self.successors[vertex] and not self.predecessors[vertex]

    def isolated_vertices(self) -> List[str]:
        return [v for v in self.successors if self.is_isolated(v)]

    def source_vertices(self) -> List[str]:
        """Vertices with successors but no predecessors."""
        return [
            v for v in self.successors
            if self.successors[v] and not self.predecessors[v]
        ]

    def sink_vertices(self) -> List[str]:
        """Vertices with predecessors but no successors."""
        return [
            v for v in self.successors
            if self.predecessors[v] and not self.successors[v]
        ]

    def find_cycle_vertices(self) -> List[str]:
        """
        Kahn's algorithm: repeatedly strip vertices of in-degree 0.

        Returns:
            Vertices that could not be stripped (empty if the graph is acyclic)
        """
        remaining = {v: len(preds) for v, preds in self.predecessors.items()}
        queue = deque(v for v, degree in remaining.items() if degree == 0)

        while queue:
            vertex = queue.popleft()
            del remaining[vertex]
            for successor in self.successors[vertex]:
                remaining[successor] -= 1
                if remaining[successor] == 0:
                    queue.append(successor)

        return list(remaining)

    def has_cycle(self) -> bool:
        return bool(self.find_cycle_vertices())

    def check_acyclic(self):
        """Raise GraphCycleError if the graph contains a cycle."""
        cycle_vertices = self.find_cycle_vertices()
        if cycle_vertices:
            raise GraphCycleError(cycle_vertices)

    def __contains__(self, vertex: str) -> bool:
        return vertex in self.successors

    def __len__(self) -> int:
        return len(self.successors)

    def __repr__(self) -> str:
        return f"OverlapGraph(vertices={self.num_vertices}, edges={self.num_edges})"

# ContigMerger v0.1.0
# Any usage is subject to this software's license.
