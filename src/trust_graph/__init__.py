"""TrustGraph - social proximity trust scoring for peer-to-peer payments."""

__version__ = "0.1.0"
__author__ = "TrustGraph Team"

# Core exports
from trust_graph.core.types import TrustLabel, Feature, UNREACHABLE

__all__ = [
    "TrustLabel",
    "Feature",
    "UNREACHABLE",
]
