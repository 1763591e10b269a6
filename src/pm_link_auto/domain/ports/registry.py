"""Ports for the package manager's global link registry and the config source."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from pathlib import Path

    from pm_link_auto.domain.types import GlobalLinkMap, PackageManager


@runtime_checkable
class GlobalRegistry(Protocol):
    """Snapshot of the global links for ``manager``.

    Implementations never raise; an unavailable registry yields an empty map.
    """

    def __call__(self, manager: PackageManager) -> GlobalLinkMap: ...


@runtime_checkable
class ConfigPatcher(Protocol):
    """Persist ``new_path`` for ``package_name`` in the config file; ``True`` if written."""

    def __call__(self, config_path: Path, package_name: str, new_path: str) -> bool: ...


__all__ = ["ConfigPatcher", "GlobalRegistry"]
