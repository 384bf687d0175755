"""Proximity Agent - module init."""

from trust_graph.agents.proximity.agent import (
    ProximityAgent,
    FEATURE_THRESHOLDS,
    classify_distance,
)
from trust_graph.agents.proximity.schema import ProximityOutput

__all__ = ["ProximityAgent", "ProximityOutput", "FEATURE_THRESHOLDS", "classify_distance"]
