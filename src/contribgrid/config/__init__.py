"""Configuration models and loaders for contribgrid."""

from .loader import ConfigError, DEFAULT_CONFIG_PATH, dump_example_config, load_config
from .models import (
    CacheConfig,
    ContribGridConfig,
    PaletteConfig,
    RuntimeConfig,
    SourceConfig,
)

__all__ = [
    "CacheConfig",
    "ConfigError",
    "ContribGridConfig",
    "DEFAULT_CONFIG_PATH",
    "PaletteConfig",
    "RuntimeConfig",
    "SourceConfig",
    "dump_example_config",
    "load_config",
]
