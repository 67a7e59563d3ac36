#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ContigMerger v0.1.0

Edge orientation — rewrite overlap edges so each one points from the contig
whose overlap sits at its end to the contig whose overlap sits at its start.

After orientation every edge u -> v reads "suffix of u overlaps prefix of v",
which is the direction the merger walks.

Author: ContigMerger Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from dataclasses import dataclass, field
from typing import List, Tuple
import logging

from .overlap_graph import OverlapGraph

logger = logging.getLogger(__name__)


@dataclass
class OrientationResult:
    """
    Result of edge orientation.

    Attributes:
        graph: New graph with every edge in suffix -> prefix direction
        flipped_edges: Number of edges whose direction was reversed
        flipped: The (from, to) pairs as they were before flipping
        collapsed: Oriented pairs produced by more than one input edge
    """
    graph: OverlapGraph
    flipped_edges: int = 0
    flipped: List[Tuple[str, str]] = field(default_factory=list)
    collapsed: List[Tuple[str, str]] = field(default_factory=list)


def needs_flip(overlap) -> bool:
    """An overlap starting at position 0 of the "from" contig is backwards."""
    return overlap.overlap_start_on_from == 0


def orient_edges(graph: OverlapGraph) -> OrientationResult:
    """
    Orient every edge of a raw overlap graph.

    The input graph is left untouched. Vertices keep their original order,
    isolated ones included.

    Args:
        graph: Raw graph as read from the overlapper output

    Returns:
        OrientationResult with the oriented graph and flip diagnostics
    """
    oriented = OverlapGraph()
    for vertex in graph.vertices:
        oriented.add_vertex(vertex)

    result = OrientationResult(graph=oriented)

    for from_vertex, to_vertex, overlap in graph.edges():
        if needs_flip(overlap):
            result.flipped_edges += 1
            result.flipped.append((from_vertex, to_vertex))
            from_vertex, to_vertex, overlap = to_vertex, from_vertex, overlap.swapped()

        if oriented.add_edge(from_vertex, to_vertex, overlap):
            result.collapsed.append((from_vertex, to_vertex))
            logger.warning(
                f"Two overlaps map onto edge {from_vertex} -> {to_vertex} "
                f"after orientation; keeping the later one"
            )

    logger.info(f"Number of edges flipped = {result.flipped_edges}")
    return result

# ContigMerger v0.1.0
# Any usage is subject to this software's license.
