"""Application service executing a reconciliation pass against a package manager."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from pm_link_auto.domain.ports import CommandError
from pm_link_auto.domain.types import LinkActionKind

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from pm_link_auto.domain.ports import CommandRunner, LinkCommands
    from pm_link_auto.domain.reconciliation import ReconciliationEngine, ReconciliationResult
    from pm_link_auto.domain.types import DeclaredEntry, LinkAction, PackageManager

log = getLogger(__name__)


@dataclass(slots=True)
class LinkRunResult:
    """Outcome of a full link run."""

    reconciliation: ReconciliationResult
    failed: list[str] = field(default_factory=list[str])
    local_linked: tuple[str, ...] = ()

    @property
    def succeeded(self) -> bool:
        return not self.failed


def link_packages(
    entries: Sequence[DeclaredEntry],
    *,
    config_path: Path,
    search_root: Path,
    manager: PackageManager,
    engine: ReconciliationEngine,
    run_command: CommandRunner,
    commands: LinkCommands,
    project_dir: Path,
) -> LinkRunResult:
    """Reconcile ``entries`` and run the resulting link commands in declaration order."""

    reconciliation = engine.reconcile(
        entries,
        config_path=config_path,
        search_root=search_root,
        manager=manager,
    )
    result = LinkRunResult(reconciliation=reconciliation)
    if not reconciliation.should_link:
        return result

    log.info("Step 1: Registering packages with %s...", manager)
    for action in reconciliation.actions:
        try:
            _apply_action(action, run_command=run_command, commands=commands)
        except CommandError as exc:
            log.error(
                "Failed to globally link '%s' from %s: %s", action.name, action.intended_path, exc
            )
            result.failed.append(action.name)

    log.info("Step 2: Linking packages to this project...")
    names = [entry.name for entry in reconciliation.resolved]
    try:
        run_command(commands.local_link(names), project_dir)
    except CommandError as exc:
        log.error("Failed to link %s into %s: %s", ", ".join(names), project_dir, exc)
        result.failed.extend(name for name in names if name not in result.failed)
        return result

    result.local_linked = tuple(names)
    log.info("  ✓ Successfully linked %d package(s) to this project.", len(names))
    return result


def _apply_action(
    action: LinkAction,
    *,
    run_command: CommandRunner,
    commands: LinkCommands,
) -> None:
    match action.kind:
        case LinkActionKind.LINK_FRESH:
            log.info("  + Linking '%s' globally...", action.name)
            run_command(commands.global_link, action.intended_path)
        case LinkActionKind.ALREADY_CORRECT:
            log.info("  - '%s' is already linked correctly.", action.name)
        case LinkActionKind.RELINK:
            log.info("  - Unlinking existing '%s'...", action.name)
            run_command(commands.global_unlink(action.name))
            log.info("  + Linking new version of '%s'...", action.name)
            run_command(commands.global_link, action.intended_path)
            log.info("  ✓ Successfully relinked '%s'.", action.name)
        case LinkActionKind.SKIP_CONFLICT:
            log.info(
                "  Skipping link for '%s'. It remains linked from %s.",
                action.name,
                action.existing_path,
            )
        case LinkActionKind.CONFLICT:
            raise ValueError(f"Conflict for '{action.name}' reached execution undecided")
