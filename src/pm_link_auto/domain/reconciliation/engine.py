"""Orchestrator for one reconciliation pass.

The engine composes ports but does not prescribe concrete adapters. It decides
what should happen to every declared package and returns those decisions; it
never runs package-manager commands itself.

Stages, in order:
1) validate declared paths against the manifests on disk
2) offer discovery for invalid entries; a successful discovery patches the
   config file and ends the run so the user can review the new paths
3) snapshot the global link registry once
4) decide one link action per resolved entry, asking the user about conflicts
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING

from pm_link_auto.domain.types import EntryOrigin, ResolvedEntry

from .policy import decide_link_action, settle_conflict
from .validate import validate_entries

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from pm_link_auto.domain.ports import (
        ConfigPatcher,
        ConfirmationPrompt,
        GlobalRegistry,
        ManifestReader,
        PackageDiscoverer,
    )
    from pm_link_auto.domain.types import (
        DeclaredEntry,
        GlobalLinkMap,
        LinkAction,
        PackageManager,
    )

log = getLogger(__name__)


class ReconciliationOutcome(StrEnum):
    """How a reconciliation pass ended."""

    NOTHING_TO_DO = "nothing_to_do"
    NO_VALID_PACKAGES = "no_valid_packages"
    DISCOVERED = "discovered"
    READY = "ready"


@dataclass(slots=True, kw_only=True)
class ReconciliationResult:
    """Decisions of one pass. ``actions`` is only populated for ``READY``."""

    outcome: ReconciliationOutcome
    resolved: tuple[ResolvedEntry, ...] = ()
    excluded: tuple[DeclaredEntry, ...] = ()
    actions: tuple[LinkAction, ...] = ()

    @property
    def should_link(self) -> bool:
        return self.outcome is ReconciliationOutcome.READY


@dataclass(slots=True)
class ReconciliationEngine:
    """Run the reconciliation stages for a list of declared entries."""

    read_name: ManifestReader
    discover: PackageDiscoverer
    list_global_links: GlobalRegistry
    confirm: ConfirmationPrompt
    patch_config: ConfigPatcher

    def reconcile(
        self,
        entries: Sequence[DeclaredEntry],
        *,
        config_path: Path,
        search_root: Path,
        manager: PackageManager,
    ) -> ReconciliationResult:
        if not entries:
            log.warning("No packages configured to link. Nothing to do.")
            return ReconciliationResult(outcome=ReconciliationOutcome.NOTHING_TO_DO)

        log.info("Validating package paths...")
        partition = validate_entries(
            entries, config_dir=config_path.parent, read_name=self.read_name
        )

        excluded: tuple[DeclaredEntry, ...] = ()
        if partition.invalid:
            discovered = self._discover(
                partition.invalid,
                config_path=config_path,
                search_root=search_root,
            )
            if discovered is not None:
                order = {entry.name: index for index, entry in enumerate(entries)}
                merged = sorted(
                    [*partition.valid, *discovered],
                    key=lambda resolved: order[resolved.name],
                )
                log.warning(
                    "Auto-discovery successful. Now please check the paths in %s and rerun. "
                    "Exiting.",
                    config_path.name,
                )
                return ReconciliationResult(
                    outcome=ReconciliationOutcome.DISCOVERED,
                    resolved=tuple(merged),
                )
            excluded = tuple(partition.invalid)

        if not partition.valid:
            log.warning("No valid packages to link. Exiting.")
            return ReconciliationResult(
                outcome=ReconciliationOutcome.NO_VALID_PACKAGES,
                excluded=excluded,
            )

        global_links = self.list_global_links(manager)
        actions = tuple(self._decide(entry, global_links) for entry in partition.valid)
        return ReconciliationResult(
            outcome=ReconciliationOutcome.READY,
            resolved=tuple(partition.valid),
            excluded=excluded,
            actions=actions,
        )

    def _discover(
        self,
        invalid: Sequence[DeclaredEntry],
        *,
        config_path: Path,
        search_root: Path,
    ) -> list[ResolvedEntry] | None:
        should_discover = self.confirm(
            f"Found {len(invalid)} package(s) with missing or invalid paths. "
            f"Do you want to try and auto-discover them in '{search_root}'?",
            default=True,
        )
        if not should_discover:
            log.info(
                "Skipping auto-discovery; not linking: %s",
                ", ".join(entry.name for entry in invalid),
            )
            return None

        # Raises DiscoveryIncompleteError before any patch is written.
        found = self.discover([entry.name for entry in invalid], search_root)

        log.info("Updating %s...", config_path.name)
        discovered: list[ResolvedEntry] = []
        for entry in invalid:
            path = found[entry.name]
            self.patch_config(config_path, entry.name, str(path))
            discovered.append(
                ResolvedEntry(name=entry.name, path=path, origin=EntryOrigin.DISCOVERED)
            )
        return discovered

    def _decide(self, entry: ResolvedEntry, global_links: GlobalLinkMap) -> LinkAction:
        action = decide_link_action(entry, global_links)
        if not action.needs_decision:
            return action

        log.warning("  ! Conflict for '%s':", entry.name)
        log.warning("    - Currently linked from: %s", action.existing_path)
        log.warning("    - You want to link from: %s", entry.path)
        approved = self.confirm(
            f"Do you want to unlink the existing '{entry.name}' and relink it from {entry.path}?",
            default=True,
        )
        return settle_conflict(action, approved=approved)
