"""Shortest-path queries over the payment graph.

Every edge has unit weight, so a breadth-first search gives the exact hop
count. All search state lives inside the call; concurrent queries against
a frozen graph do not interfere.
"""

from typing import Optional, Set

from trust_graph.core.types import UNREACHABLE
from trust_graph.models.graph.schema import PaymentGraph


def shortest_path_length(
    graph: PaymentGraph,
    source: int,
    target: int,
    max_depth: Optional[int] = None,
) -> Optional[int]:
    """Number of edges on a shortest path between two parties.

    Args:
        graph: Graph to search
        source: Starting party id
        target: Destination party id
        max_depth: Stop expanding after this many hops. Targets farther
            away are reported as unreachable.

    Returns:
        Hop count, 0 for a self pair, or None if no path exists, either
        party is unknown, or the target lies beyond max_depth
    """
    if source == target:
        return 0

    adjacency = graph.adjacency
    if source not in adjacency or target not in adjacency:
        return UNREACHABLE

    visited: Set[int] = {source}
    frontier = [source]
    depth = 0

    while frontier:
        depth += 1
        if max_depth is not None and depth > max_depth:
            return UNREACHABLE

        next_frontier = []
        for vertex in frontier:
            for neighbor in adjacency[vertex]:
                if neighbor == target:
                    return depth
                if neighbor not in visited:
                    visited.add(neighbor)
                    next_frontier.append(neighbor)
        frontier = next_frontier

    return UNREACHABLE
