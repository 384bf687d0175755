"""Core types shared across layers."""

from trust_graph.core.types import TrustLabel, Feature, UNREACHABLE, TrustTuple

__all__ = ["TrustLabel", "Feature", "UNREACHABLE", "TrustTuple"]
