"""Custom exceptions for TrustGraph.

Two tiers of failure exist:

- Setup-tier errors (unreadable or empty inputs, unopenable outputs) abort
  the run before any transaction is classified.
- Record-tier errors (a malformed line, a failed distance lookup) never
  leave the builder or the classifier; they are counted and folded into
  the unreachable bucket.

All TrustGraph exceptions inherit from TrustGraphException.
"""

from typing import Any, Dict, Optional


class TrustGraphException(Exception):
    """Base exception for all TrustGraph errors.

    Attributes:
        message: Human-readable error message
        code: Machine-readable error code
        details: Additional context about the error
    """

    def __init__(
        self,
        message: str,
        code: str = "TRUSTGRAPH_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for structured logging."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(TrustGraphException):
    """Raised when configuration is invalid or missing."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="CONFIG_ERROR", details=details)


class ValidationError(TrustGraphException):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        code: str = "VALIDATION_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, code=code, details=details)


class RecordParseError(ValidationError):
    """Raised when a delimited record does not yield two party ids."""

    def __init__(self, message: str, line: str):
        super().__init__(message, code="RECORD_PARSE_ERROR", details={"line": line})


class ConstructionError(TrustGraphException):
    """Raised when the payment graph cannot be built from batch data."""

    def __init__(self, message: str, path: Optional[str] = None):
        details = {"path": path} if path is not None else {}
        super().__init__(message, code="CONSTRUCTION_ERROR", details=details)


class GraphFrozenError(TrustGraphException):
    """Raised when a frozen graph is asked to mutate."""

    def __init__(self, message: str = "Graph is frozen; construction has ended"):
        super().__init__(message, code="GRAPH_FROZEN")


class StreamError(TrustGraphException):
    """Raised when the transaction stream cannot be opened or is empty."""

    def __init__(self, message: str, path: Optional[str] = None):
        details = {"path": path} if path is not None else {}
        super().__init__(message, code="STREAM_ERROR", details=details)


class OutputError(TrustGraphException):
    """Raised when a feature output channel cannot be opened."""

    def __init__(self, message: str, path: Optional[str] = None):
        details = {"path": path} if path is not None else {}
        super().__init__(message, code="OUTPUT_ERROR", details=details)
