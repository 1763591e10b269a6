"""Global link registry adapter for npm, pnpm and yarn."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING, Final

from pydantic import ValidationError

from pm_link_auto.domain.ports import CommandError
from pm_link_auto.domain.types import PackageManager

from .schema import PnpmListing
from .tree import parse_link_lines, resolve_symlink

if TYPE_CHECKING:
    from collections.abc import Callable

    from pm_link_auto.domain.ports import CommandRunner
    from pm_link_auto.domain.types import GlobalLinkMap

log = getLogger(__name__)

PNPM_LIST_COMMAND: Final[str] = "pnpm list -g --depth=0 --long --json"
NPM_LIST_COMMAND: Final[str] = "npm list -g --depth=0 --link=true"
NPM_ROOT_COMMAND: Final[str] = "npm root -g"
YARN_GLOBAL_DIR_COMMAND: Final[str] = "yarn global dir"


class RegistryListingError(RuntimeError):
    """Raised internally when a listing command produced unusable output."""


@dataclass(slots=True)
class GlobalLinkRegistry:
    """Snapshot the global link registry of a package manager.

    Never raises: if the manager is missing or its output cannot be used, an
    empty map is returned and every package is treated as not linked yet.
    """

    run_command: CommandRunner
    resolve: Callable[[Path], str] = field(default=resolve_symlink)

    def __call__(self, manager: PackageManager) -> GlobalLinkMap:
        try:
            if manager is PackageManager.PNPM:
                links = self._list_structured()
            else:
                links = self._list_tree(manager)
        except (CommandError, RegistryListingError, ValidationError) as exc:
            log.warning("Could not list global packages. Will attempt to link all anyway.")
            log.warning("  Reason: %s", exc)
            return {}

        log.debug("Global %s links: %s", manager, links)
        return links

    def global_modules_dir(self, manager: PackageManager) -> Path:
        if manager is PackageManager.YARN:
            output = self.run_command(YARN_GLOBAL_DIR_COMMAND).stdout.strip()
            if not output:
                raise RegistryListingError(f"`{YARN_GLOBAL_DIR_COMMAND}` printed nothing")
            return Path(output) / "node_modules"

        output = self.run_command(NPM_ROOT_COMMAND).stdout.strip()
        if not output:
            raise RegistryListingError(f"`{NPM_ROOT_COMMAND}` printed nothing")
        return Path(output)

    def _list_structured(self) -> GlobalLinkMap:
        stdout = self.run_command(PNPM_LIST_COMMAND).stdout
        if not stdout.strip():
            return {}
        records = PnpmListing.validate_json(stdout)
        return {record.name: record.path for record in records if record.name and record.path}

    def _list_tree(self, manager: PackageManager) -> GlobalLinkMap:
        modules_dir = self.global_modules_dir(manager)
        lines = self.run_command(NPM_LIST_COMMAND).stdout.splitlines()
        return parse_link_lines(lines, modules_dir, resolve=self.resolve)
