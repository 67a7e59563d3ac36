#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ContigMerger v0.1.0

Path enumeration — all source-to-sink overlap paths of an oriented graph.

Author: ContigMerger Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from typing import Dict, Iterator, List
from dataclasses import dataclass, field
from collections import Counter
import logging

from .overlap_graph import OverlapGraph

logger = logging.getLogger(__name__)

Path = List[str]


@dataclass
class PathStatistics:
    """Vertex coverage of a set of enumerated paths."""
    num_paths: int = 0
    unique_vertices: int = 0
    total_vertex_occurrences: int = 0
    vertex_span: Dict[str, int] = field(default_factory=dict)

    @classmethod
    def from_paths(cls, paths: List[Path]) -> 'PathStatistics':
        span = Counter(vertex for path in paths for vertex in path)
        return cls(
            num_paths=len(paths),
            unique_vertices=len(span),
            total_vertex_occurrences=sum(span.values()),
            vertex_span=dict(span),
        )


def iter_paths(graph: OverlapGraph) -> Iterator[Path]:
    """
    Yield every source-to-sink path with an explicit-stack DFS.

    Sources are visited in vertex order and successors in edge insertion
    order, so paths come out in the same order a recursive pre-order walk
    would produce them. Isolated vertices are neither sources nor sinks and
    never appear in a path.

    The graph must be acyclic; call enumerate_paths for the checked version.
    """
    for source in graph.source_vertices():
        path = [source]
        # One successor iterator per vertex on the current path
        stack = [iter(graph.get_successors(source))]

        while stack:
            successor = next(stack[-1], None)
            if successor is None:
                stack.pop()
                path.pop()
                continue

            path.append(successor)
            next_successors = graph.get_successors(successor)
            if next_successors:
                stack.append(iter(next_successors))
            else:
                yield list(path)
                path.pop()


def enumerate_paths(graph: OverlapGraph) -> List[Path]:
    """
    Find all overlap paths in an oriented graph.

    A vertex reachable through several branches appears in every path that
    passes through it.

    Raises:
        GraphCycleError: The graph contains a cycle (checked before traversal)
    """
    graph.check_acyclic()
    return list(iter_paths(graph))

# ContigMerger v0.1.0
# Any usage is subject to this software's license.
