"""Configuration loading, schema, and defaults."""

from rerender.config.loader import ConfigError, load_config
from rerender.config.schema import (
    RerenderConfig,
    Severity,
    severity_at_or_above,
    severity_rank,
)

__all__ = [
    "ConfigError",
    "RerenderConfig",
    "Severity",
    "load_config",
    "severity_at_or_above",
    "severity_rank",
]
