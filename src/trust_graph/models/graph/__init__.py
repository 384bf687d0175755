"""Payment graph - adjacency store, construction and shortest paths.

Key design:
- Nodes: parties, identified by integer id
- Edges: undirected "has transacted with", collapsed to one per pair
- Built once from batch data, frozen, then queried read-only
"""

from trust_graph.models.graph.schema import PaymentGraph
from trust_graph.models.graph.builder import GraphBuilder, BuildResult
from trust_graph.models.graph.traversal import shortest_path_length

__all__ = [
    "PaymentGraph",
    "GraphBuilder",
    "BuildResult",
    "shortest_path_length",
]
