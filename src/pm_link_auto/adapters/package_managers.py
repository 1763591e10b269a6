"""Per package manager command vocabulary and detection."""

from __future__ import annotations

import shlex
from typing import TYPE_CHECKING, Final

from pm_link_auto.domain.ports import LinkCommands
from pm_link_auto.domain.types import PackageManager

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

LOCKFILES: Final[tuple[tuple[str, PackageManager], ...]] = (
    ("pnpm-lock.yaml", PackageManager.PNPM),
    ("yarn.lock", PackageManager.YARN),
)


def detect_package_manager(project_dir: Path) -> PackageManager:
    """Pick the manager whose lockfile sits in ``project_dir``; npm otherwise."""

    for lockfile, manager in LOCKFILES:
        if (project_dir / lockfile).exists():
            return manager
    return PackageManager.NPM


def _join(names: Sequence[str]) -> str:
    return " ".join(shlex.quote(name) for name in names)


def get_link_commands(manager: PackageManager) -> LinkCommands:
    match manager:
        case PackageManager.PNPM:
            return LinkCommands(
                global_link="pnpm link --global",
                global_unlink=lambda name: f"pnpm unlink --global {shlex.quote(name)}",
                local_link=lambda names: f"pnpm link --global {_join(names)}",
            )
        case PackageManager.YARN:
            # Yarn v1 semantics: `yarn link` registers, `yarn link <name>` consumes.
            return LinkCommands(
                global_link="yarn link",
                global_unlink=lambda name: f"yarn unlink {shlex.quote(name)}",
                local_link=lambda names: f"yarn link {_join(names)}",
            )
        case PackageManager.NPM:
            return LinkCommands(
                global_link="npm link",
                global_unlink=lambda name: f"npm unlink --global {shlex.quote(name)}",
                local_link=lambda names: f"npm link {_join(names)}",
            )
