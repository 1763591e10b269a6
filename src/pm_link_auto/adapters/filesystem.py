"""Filesystem search for package manifests."""

from __future__ import annotations

import os
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING, Final

from .manifest import MANIFEST_FILENAME

if TYPE_CHECKING:
    from collections.abc import Iterator

log = getLogger(__name__)

IGNORED_DIRECTORIES: Final[frozenset[str]] = frozenset({"node_modules"})


def _log_walk_error(error: OSError) -> None:
    log.debug("Skipping unreadable directory %s: %s", error.filename, error.strerror)


def _is_searchable(directory: str) -> bool:
    return directory not in IGNORED_DIRECTORIES and not directory.startswith(".")


def glob_manifests(root: Path) -> Iterator[Path]:
    """Yield absolute ``package.json`` paths below ``root``.

    Dependency trees and hidden directories are pruned, symlinks are not
    followed, and siblings are visited in sorted order.
    """

    base = Path(os.path.abspath(root.expanduser()))
    for dirpath, dirnames, filenames in os.walk(base, onerror=_log_walk_error):
        dirnames[:] = sorted(name for name in dirnames if _is_searchable(name))
        if MANIFEST_FILENAME in filenames:
            yield Path(dirpath) / MANIFEST_FILENAME
