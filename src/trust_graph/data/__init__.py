"""Data layer - record parsing, schemas, file I/O."""

from trust_graph.data.parsing import parse_party_ids, iter_records
from trust_graph.data.schemas import Transaction
from trust_graph.data.io import open_stream, FeatureWriters

__all__ = [
    "parse_party_ids",
    "iter_records",
    "Transaction",
    "open_stream",
    "FeatureWriters",
]
