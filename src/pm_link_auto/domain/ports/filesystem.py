"""Ports for reading package manifests from the filesystem."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path


@runtime_checkable
class ManifestReader(Protocol):
    """Return the package name declared in ``directory``'s manifest, or ``None``."""

    def __call__(self, directory: Path) -> str | None: ...


@runtime_checkable
class ManifestGlobber(Protocol):
    """Yield absolute manifest paths below ``root``, skipping dependency trees."""

    def __call__(self, root: Path) -> Iterable[Path]: ...


@runtime_checkable
class PackageDiscoverer(Protocol):
    """Map each wanted package name to the directory that declares it."""

    def __call__(self, names: Iterable[str], root: Path) -> dict[str, Path]: ...


__all__ = ["ManifestGlobber", "ManifestReader", "PackageDiscoverer"]
