"""Common utilities - logging, config, exceptions."""

from trust_graph.common.logging.logger import get_logger
from trust_graph.common.config import Config, get_config, reset_config
from trust_graph.common.exceptions import (
    TrustGraphException,
    ConfigurationError,
    ValidationError,
    RecordParseError,
    ConstructionError,
    GraphFrozenError,
    StreamError,
    OutputError,
)

__all__ = [
    # Logging
    "get_logger",
    # Config
    "Config",
    "get_config",
    "reset_config",
    # Exceptions
    "TrustGraphException",
    "ConfigurationError",
    "ValidationError",
    "RecordParseError",
    "ConstructionError",
    "GraphFrozenError",
    "StreamError",
    "OutputError",
]
