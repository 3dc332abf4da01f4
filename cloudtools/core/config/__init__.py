"""Configuration — cloudtools.yml loading and runtime settings."""

from cloudtools.core.config.loader import (
    CONFIG_FILE,
    CloudToolsConfig,
    ConfigError,
    find_config_file,
    load_config,
)
from cloudtools.core.config.settings import Settings, resolve_settings, verbose_from_env

__all__ = [
    "CONFIG_FILE",
    "CloudToolsConfig",
    "ConfigError",
    "Settings",
    "find_config_file",
    "load_config",
    "resolve_settings",
    "verbose_from_env",
]
