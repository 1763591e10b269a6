"""Filesystem search filling in missing or wrong package paths."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence
    from pathlib import Path

    from pm_link_auto.domain.ports import ManifestGlobber, ManifestReader

log = getLogger(__name__)


class DiscoveryIncompleteError(RuntimeError):
    """Raised when some requested packages exist nowhere under the search root."""

    def __init__(self, missing: Sequence[str], *, root: Path) -> None:
        names = ", ".join(f"'{name}'" for name in missing)
        super().__init__(f"Failed to find package(s) {names} anywhere under {root}")
        self.missing = tuple(missing)
        self.root = root


@dataclass(slots=True)
class DiscoverySearcher:
    """Locate package directories by the name their manifest declares.

    When several directories declare the same name, the first one yielded by
    ``glob_manifests`` wins; the default globber walks directories in sorted
    order so the choice is stable for an unchanged tree.
    """

    glob_manifests: ManifestGlobber
    read_name: ManifestReader
    clock: Callable[[], float] = field(default=time.perf_counter)

    def __call__(self, names: Iterable[str], root: Path) -> dict[str, Path]:
        wanted = list(dict.fromkeys(names))
        log.info("Searching for %d package(s) in '%s'...", len(wanted), root)

        started = self.clock()
        manifests = list(self.glob_manifests(root))
        log.info(
            "  Search complete. Found %d package.json files in %.2fs. Now checking names...",
            len(manifests),
            self.clock() - started,
        )

        remaining = set(wanted)
        found: dict[str, Path] = {}
        for manifest in manifests:
            if not remaining:
                break
            directory = manifest.parent
            name = self.read_name(directory)
            if name is not None and name in remaining:
                found[name] = directory
                remaining.discard(name)

        missing = [name for name in wanted if name not in found]
        if missing:
            raise DiscoveryIncompleteError(missing, root=root)

        log.info("  ✓ Found all packages:")
        for name in wanted:
            log.info("    - %s: %s", name, found[name])
        return {name: found[name] for name in wanted}
