"""Configuration loading, schema, and defaults."""

from gitoscope.config.loader import ConfigError, load_config
from gitoscope.config.schema import GitoscopeConfig

__all__ = [
    "ConfigError",
    "GitoscopeConfig",
    "load_config",
]
