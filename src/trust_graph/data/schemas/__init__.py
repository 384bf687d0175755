"""Data schemas - canonical Pydantic definitions."""

from trust_graph.data.schemas.transaction import Transaction

__all__ = ["Transaction"]
