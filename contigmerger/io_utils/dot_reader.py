#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ContigMerger v0.1.0

DOT reader — load an overlap graph written by BBTools Dedupe.

Each edge carries its overlap descriptor in the ``label`` attribute as ten
comma-separated fields:

    overlap_type,overlap_length,mismatches,edits,
    from_ctg_length,overlap_start_on_from,overlap_end_on_from,
    to_ctg_length,overlap_start_on_to,overlap_end_on_to

Author: ContigMerger Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from pathlib import Path
from typing import Union
import logging

import networkx as nx

from ..core.overlap_graph import OverlapGraph, OverlapInfo

logger = logging.getLogger(__name__)


class OverlapLabelError(ValueError):
    """Raised when an edge label is not a valid overlap descriptor."""
    pass


def parse_overlap_label(label: str) -> OverlapInfo:
    """
    Parse a DOT edge label into an OverlapInfo.

    Args:
        label: Label text, with or without surrounding quotes

    Raises:
        OverlapLabelError: Wrong field count or non-integer numeric field
    """
    text = str(label).strip().strip('"').strip()
    try:
        return OverlapInfo.from_fields(text.split(','))
    except ValueError as e:
        raise OverlapLabelError(f"Invalid overlap label '{text}': {e}") from e


def graph_from_networkx(nx_graph: nx.Graph) -> OverlapGraph:
    """
    Convert a networkx graph with labelled edges into an OverlapGraph.

    Node order and edge order follow the networkx graph. For multigraphs a
    repeated (from, to) pair keeps the last label seen.
    """
    graph = OverlapGraph()

    for node in nx_graph.nodes:
        vertex = str(node).strip('"').strip()
        # pydot can report a stray "\n" node for trailing whitespace
        if not vertex or vertex == '\\n':
            continue
        graph.add_vertex(vertex)

    for from_node, to_node, data in nx_graph.edges(data=True):
        from_vertex = str(from_node).strip('"')
        to_vertex = str(to_node).strip('"')
        if 'label' not in data:
            raise OverlapLabelError(f"Edge {from_vertex} -> {to_vertex} has no label")
        try:
            overlap = parse_overlap_label(data['label'])
        except OverlapLabelError as e:
            raise OverlapLabelError(f"Edge {from_vertex} -> {to_vertex}: {e}") from e
        graph.add_edge(from_vertex, to_vertex, overlap)

    return graph


def read_overlap_dot(filepath: Union[str, Path]) -> OverlapGraph:
    """
    Read a DOT overlap graph.

    Args:
        filepath: Path to .dot file

    Returns:
        Raw (unoriented) OverlapGraph

    Raises:
        FileNotFoundError: File does not exist
        OverlapLabelError: An edge label is malformed
    """
    filepath = Path(filepath)

    if not filepath.exists():
        raise FileNotFoundError(f"Graph file not found: {filepath}")

    logger.info(f"Opening graph file: {filepath}")
    graph = graph_from_networkx(nx.nx_pydot.read_dot(str(filepath)))

    logger.info(f"Total number of vertices in graph: {graph.num_vertices}")
    logger.info(f"Number of isolated vertices in graph: {len(graph.isolated_vertices())}")
    return graph

# ContigMerger v0.1.0
# Any usage is subject to this software's license.
