"""Graph schema for the payment network.

Vertices are integer party ids; an edge means the two parties have paid
each other at least once. Edges are undirected and unweighted.
"""

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterator, Set, Tuple

from trust_graph.common.exceptions import GraphFrozenError


_EMPTY: FrozenSet[int] = frozenset()


@dataclass
class PaymentGraph:
    """Undirected simple graph stored as an adjacency map.

    Adjacency is kept symmetric: ``b in adjacency[a]`` iff ``a in adjacency[b]``.
    Once ``freeze()`` is called the graph rejects further mutation and can be
    shared across reader threads without locking.
    """
    adjacency: Dict[int, Set[int]] = field(default_factory=dict, repr=False)
    _edge_count: int = field(default=0, init=False, repr=False)
    _frozen: bool = field(default=False, init=False, repr=False)

    def add_vertex(self, vertex: int) -> None:
        """Add a vertex if it is not already present."""
        self._check_mutable()
        self.adjacency.setdefault(vertex, set())

    def add_edge(self, a: int, b: int) -> bool:
        """Add the undirected edge (a, b).

        Both vertices are created as needed. A self pair only registers
        the vertex.

        Returns:
            True if a new edge was stored
        """
        self._check_mutable()
        neighbors_a = self.adjacency.setdefault(a, set())
        neighbors_b = self.adjacency.setdefault(b, set())
        if a == b or b in neighbors_a:
            return False
        neighbors_a.add(b)
        neighbors_b.add(a)
        self._edge_count += 1
        return True

    def freeze(self) -> "PaymentGraph":
        """End the construction phase."""
        self._frozen = True
        return self

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    def has_vertex(self, vertex: int) -> bool:
        return vertex in self.adjacency

    def has_edge(self, a: int, b: int) -> bool:
        return b in self.adjacency.get(a, _EMPTY)

    def neighbors(self, vertex: int) -> FrozenSet[int]:
        """Get the neighbours of a vertex (empty for unknown vertices)."""
        return frozenset(self.adjacency.get(vertex, _EMPTY))

    def degree(self, vertex: int) -> int:
        return len(self.adjacency.get(vertex, _EMPTY))

    def vertex_count(self) -> int:
        """Get number of vertices."""
        return len(self.adjacency)

    def edge_count(self) -> int:
        """Get number of undirected edges."""
        return self._edge_count

    def edges(self) -> Iterator[Tuple[int, int]]:
        """Iterate each undirected edge once, as (smaller, larger)."""
        for vertex, neighbors in self.adjacency.items():
            for neighbor in neighbors:
                if vertex < neighbor:
                    yield vertex, neighbor

    def _check_mutable(self) -> None:
        if self._frozen:
            raise GraphFrozenError()
