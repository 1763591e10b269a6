"""Application configuration helpers."""

from __future__ import annotations

from .env import LOG_LEVEL_ENV, PACKAGE_MANAGER_ENV, get_log_level, get_package_manager_override
from .errors import ConfigSourceError, ConfigurationError, MissingConfigurationError
from .linker import (
    CONFIG_FILENAMES,
    DEFAULT_CONFIG_FILENAME,
    DEFAULT_SEARCH_ROOT,
    MODULE_NAME,
    LinkerConfig,
    PackageEntryConfig,
)
from .logging import configure_logging

__all__ = [
    "CONFIG_FILENAMES",
    "DEFAULT_CONFIG_FILENAME",
    "DEFAULT_SEARCH_ROOT",
    "LOG_LEVEL_ENV",
    "MODULE_NAME",
    "PACKAGE_MANAGER_ENV",
    "ConfigSourceError",
    "ConfigurationError",
    "LinkerConfig",
    "MissingConfigurationError",
    "PackageEntryConfig",
    "configure_logging",
    "get_log_level",
    "get_package_manager_override",
]
