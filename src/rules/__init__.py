"""Configuration loading and validation."""

from rules.config import (
    CONFIG_FILENAME,
    ConfigError,
    ReadinessConfig,
    TwinrefConfig,
    load_config,
)

__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "ReadinessConfig",
    "TwinrefConfig",
    "load_config",
]
