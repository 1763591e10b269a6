"""Application orchestration entry points."""

from __future__ import annotations

from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING

from pm_link_auto.adapters.config_source import (
    load_config,
    offer_default_config,
    update_config_file,
)
from pm_link_auto.adapters.filesystem import glob_manifests
from pm_link_auto.adapters.manifest import postinstall_mentions, read_declared_name
from pm_link_auto.adapters.package_managers import detect_package_manager, get_link_commands
from pm_link_auto.adapters.prompt import RichConfirmationPrompt
from pm_link_auto.adapters.registry import GlobalLinkRegistry
from pm_link_auto.adapters.subprocess_runner import run_command as run_subprocess
from pm_link_auto.config import (
    DEFAULT_CONFIG_FILENAME,
    MODULE_NAME,
    MissingConfigurationError,
    get_package_manager_override,
)
from pm_link_auto.domain.linking import LinkRunResult, link_packages
from pm_link_auto.domain.reconciliation import DiscoverySearcher, ReconciliationEngine

if TYPE_CHECKING:
    from pm_link_auto.domain.ports import (
        CommandRunner,
        ConfirmationPrompt,
        GlobalRegistry,
        PackageDiscoverer,
    )
    from pm_link_auto.domain.types import PackageManager

log = getLogger(__name__)


def run_linker(
    *,
    project_dir: Path | None = None,
    manager: PackageManager | None = None,
    confirm: ConfirmationPrompt | None = None,
    run_command: CommandRunner | None = None,
    registry: GlobalRegistry | None = None,
    discover: PackageDiscoverer | None = None,
) -> LinkRunResult | None:
    """Run one reconciliation pass for the project in ``project_dir``.

    Returns ``None`` when no configuration file existed and one was just
    created from the template; the caller treats that as a failed run.
    Raises ``MissingConfigurationError`` when none exists and none was created.
    """

    cwd = project_dir or Path.cwd()
    prompt = confirm or RichConfirmationPrompt()

    loaded = load_config(cwd)
    if loaded is None:
        if offer_default_config(cwd, prompt) is None:
            raise MissingConfigurationError(f"No {DEFAULT_CONFIG_FILENAME} found above {cwd}")
        return None

    effective_manager = manager or get_package_manager_override() or detect_package_manager(cwd)
    log.info("✓ Using package manager: %s", effective_manager)

    runner = run_command or run_subprocess
    engine = ReconciliationEngine(
        read_name=read_declared_name,
        discover=discover
        or DiscoverySearcher(glob_manifests=glob_manifests, read_name=read_declared_name),
        list_global_links=registry or GlobalLinkRegistry(run_command=runner),
        confirm=prompt,
        patch_config=update_config_file,
    )
    result = link_packages(
        loaded.config.declared_entries(),
        config_path=loaded.path,
        search_root=loaded.config.search_root(base_dir=loaded.path.parent),
        manager=effective_manager,
        engine=engine,
        run_command=runner,
        commands=get_link_commands(effective_manager),
        project_dir=cwd,
    )

    if not result.reconciliation.should_link:
        return result

    if result.local_linked and not postinstall_mentions(cwd, MODULE_NAME):
        log.info(
            "Hint: a fresh `%s install` can remove linked packages. Add `%s` to your "
            "postinstall script to relink automatically.",
            effective_manager,
            MODULE_NAME,
        )
    if result.succeeded:
        log.info("All done!")
    else:
        log.warning("Finished with failures for: %s", ", ".join(result.failed))
    return result
