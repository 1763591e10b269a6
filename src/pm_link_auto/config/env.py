"""Environment variable loaders for configuration."""

from __future__ import annotations

import logging
import os

from pm_link_auto.domain.types import PackageManager

from .errors import ConfigurationError

PACKAGE_MANAGER_ENV = "PM_LINK_AUTO_PACKAGE_MANAGER"
LOG_LEVEL_ENV = "PM_LINK_AUTO_LOG_LEVEL"


def _read_env(name: str) -> str | None:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def get_package_manager_override() -> PackageManager | None:
    """Return the package manager forced through the environment, if any."""

    value = _read_env(PACKAGE_MANAGER_ENV)
    if value is None:
        return None
    try:
        return PackageManager(value.lower())
    except ValueError as exc:
        allowed = ", ".join(manager.value for manager in PackageManager)
        raise ConfigurationError(
            f"Invalid {PACKAGE_MANAGER_ENV}={value!r}; expected one of: {allowed}"
        ) from exc


def get_log_level() -> int:
    value = _read_env(LOG_LEVEL_ENV)
    if value is None:
        return logging.INFO
    level = logging.getLevelName(value.upper())
    if not isinstance(level, int):
        raise ConfigurationError(f"Invalid {LOG_LEVEL_ENV}={value!r}")
    return level
