"""Agent modules for TrustGraph."""

from trust_graph.agents.proximity.agent import ProximityAgent

__all__ = ["ProximityAgent"]
