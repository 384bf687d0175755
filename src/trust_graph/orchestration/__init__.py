"""Orchestration - stream classification loop."""

from trust_graph.orchestration.stream import StreamClassifier, StreamStats

__all__ = ["StreamClassifier", "StreamStats"]
