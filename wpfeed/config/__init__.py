"""Configuration management for wpfeed."""

from .loader import Config, load_config, save_config
from .models import BlogConfig, ConfigModel, PostgresConfig

__all__ = [
    "Config",
    "ConfigModel",
    "PostgresConfig",
    "BlogConfig",
    "load_config",
    "save_config",
]
