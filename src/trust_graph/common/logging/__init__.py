"""Logging helpers."""

from trust_graph.common.logging.logger import get_logger

__all__ = ["get_logger"]
