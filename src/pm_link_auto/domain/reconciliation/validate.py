"""Validate declared entries against the manifests actually on disk."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING

from pm_link_auto.domain.types import DeclaredEntry, ResolvedEntry

if TYPE_CHECKING:
    from collections.abc import Iterable

    from pm_link_auto.domain.ports import ManifestReader

log = getLogger(__name__)


@dataclass(slots=True)
class EntryPartition:
    """Declared entries split by whether their path can be trusted."""

    valid: list[ResolvedEntry] = field(default_factory=list["ResolvedEntry"])
    invalid: list[DeclaredEntry] = field(default_factory=list["DeclaredEntry"])


def resolve_declared_path(declared: str, config_dir: Path) -> Path:
    """Absolute form of a config path; relative paths are anchored at ``config_dir``."""

    return Path(os.path.abspath(config_dir / Path(declared).expanduser()))


def validate_entries(
    entries: Iterable[DeclaredEntry],
    *,
    config_dir: Path,
    read_name: ManifestReader,
) -> EntryPartition:
    """Partition ``entries`` into validated and invalid ones, keeping declaration order."""

    partition = EntryPartition()
    for entry in entries:
        if not entry.path:
            log.warning("  ? Missing: '%s' has no path configured.", entry.name)
            partition.invalid.append(entry)
            continue

        absolute = resolve_declared_path(entry.path, config_dir)
        found_name = read_name(absolute)
        if found_name == entry.name:
            log.info("  ✓ Valid:   '%s' at %s", entry.name, entry.path)
            partition.valid.append(ResolvedEntry(name=entry.name, path=absolute))
            continue

        if found_name is None:
            reason = "has no readable package.json"
        else:
            reason = f"holds package '{found_name}'"
        log.warning("  ✗ Invalid: '%s' path %s %s.", entry.name, absolute, reason)
        partition.invalid.append(entry)

    return partition
