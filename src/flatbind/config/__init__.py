"""Configuration: format options, settings sources, and logging setup."""

from flatbind.config.discovery import CONFIG_ENV_VAR, CONFIG_FILENAME, find_config, load_toml
from flatbind.config.logging import configure_from_settings, configure_logging
from flatbind.config.models import FormatOptions, LoggingConfig
from flatbind.config.settings import FlatbindSettings

__all__ = [
    "CONFIG_ENV_VAR",
    "CONFIG_FILENAME",
    "FlatbindSettings",
    "FormatOptions",
    "LoggingConfig",
    "configure_from_settings",
    "configure_logging",
    "find_config",
    "load_toml",
]
