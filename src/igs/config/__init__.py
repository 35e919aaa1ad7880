"""Configuration loading, schema, and defaults."""

from igs.config.loader import ConfigError, load_config
from igs.config.schema import IgsConfig

__all__ = [
    "ConfigError",
    "IgsConfig",
    "load_config",
]
