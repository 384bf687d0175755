"""Configuration management - Centralized configuration for TrustGraph.

Provides environment-aware configuration with sensible defaults.
All configuration is loaded from environment variables with fallbacks.
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from trust_graph.common.constants import MonitoringConstants, StreamConstants
from trust_graph.common.exceptions import ConfigurationError


class Environment(str, Enum):
    """Application environment."""
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class LogLevel(str, Enum):
    """Logging levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, str(default))
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(
            f"{name} must be an integer, got {raw!r}",
            details={"variable": name, "value": raw},
        )


def _env_enum(enum_cls, name: str, default: str):
    raw = os.getenv(name, default)
    try:
        return enum_cls(raw)
    except ValueError:
        raise ConfigurationError(
            f"{name} has unsupported value {raw!r}",
            details={"variable": name, "value": raw},
        )


@dataclass
class Config:
    """Central configuration object for TrustGraph.

    All settings can be overridden via environment variables prefixed with TRUSTGRAPH_.

    Example:
        TRUSTGRAPH_ENVIRONMENT=production
        TRUSTGRAPH_LOG_LEVEL=INFO
        TRUSTGRAPH_WORKERS=4
    """

    # Core settings
    environment: Environment = field(
        default_factory=lambda: _env_enum(
            Environment, "TRUSTGRAPH_ENVIRONMENT", "development"
        )
    )
    debug: bool = field(
        default_factory=lambda: os.getenv("TRUSTGRAPH_DEBUG", "false").lower() == "true"
    )
    log_level: LogLevel = field(
        default_factory=lambda: _env_enum(LogLevel, "TRUSTGRAPH_LOG_LEVEL", "INFO")
    )

    # Stream classification
    workers: int = field(
        default_factory=lambda: _env_int(
            "TRUSTGRAPH_WORKERS", StreamConstants.DEFAULT_WORKERS
        )
    )
    progress_interval: int = field(
        default_factory=lambda: _env_int(
            "TRUSTGRAPH_PROGRESS_INTERVAL", StreamConstants.DEFAULT_PROGRESS_INTERVAL
        )
    )
    chunk_size: int = field(
        default_factory=lambda: _env_int(
            "TRUSTGRAPH_CHUNK_SIZE", StreamConstants.DEFAULT_CHUNK_SIZE
        )
    )

    # Metrics (CloudWatch)
    metrics_enabled: bool = field(
        default_factory=lambda: os.getenv("TRUSTGRAPH_METRICS_ENABLED", "false").lower() == "true"
    )
    metrics_namespace: str = field(
        default_factory=lambda: os.getenv(
            "TRUSTGRAPH_METRICS_NAMESPACE", MonitoringConstants.DEFAULT_NAMESPACE
        )
    )
    aws_region: str = field(
        default_factory=lambda: os.getenv(
            "AWS_DEFAULT_REGION", MonitoringConstants.DEFAULT_REGION
        )
    )

    def __post_init__(self):
        """Validate configuration after initialization."""
        for name in ("workers", "progress_interval", "chunk_size"):
            value = getattr(self, name)
            if value < 1:
                raise ConfigurationError(
                    f"{name} must be a positive integer, got {value}",
                    details={"field": name, "value": value},
                )

        # Warn about debug in production
        if self.environment == Environment.PRODUCTION and self.debug:
            import warnings
            warnings.warn(
                "Debug mode is enabled in production environment",
                RuntimeWarning,
                stacklevel=2
            )

    @property
    def effective_log_level(self) -> str:
        """Log level name, forced to DEBUG when debug mode is on."""
        return LogLevel.DEBUG.value if self.debug else self.log_level.value

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == Environment.PRODUCTION

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == Environment.DEVELOPMENT


# Singleton instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get the global configuration instance.

    Returns:
        Config: The global configuration singleton.
    """
    global _config
    if _config is None:
        _config = Config()
    return _config


def reset_config() -> None:
    """Reset the global configuration (for testing)."""
    global _config
    _config = None
