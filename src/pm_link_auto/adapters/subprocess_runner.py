"""Shell command runner used for every package-manager invocation."""

from __future__ import annotations

import subprocess
from logging import getLogger
from typing import TYPE_CHECKING

from pm_link_auto.domain.ports import CommandError, CommandResult

if TYPE_CHECKING:
    from pathlib import Path

log = getLogger(__name__)


def run_command(command: str, cwd: Path | None = None) -> CommandResult:
    """Run ``command`` through the shell and capture its output.

    No timeout is applied: package managers may legitimately take a while.
    """

    log.info("$ %s%s", command, f" (in {cwd})" if cwd is not None else "")
    try:
        completed = subprocess.run(  # noqa: S602
            command,
            shell=True,
            cwd=cwd,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
        )
    except OSError as exc:
        raise CommandError(command, cwd=cwd, stderr=str(exc)) from exc

    if completed.returncode != 0:
        raise CommandError(
            command,
            cwd=cwd,
            returncode=completed.returncode,
            stderr=completed.stderr,
        )
    return CommandResult(stdout=completed.stdout, stderr=completed.stderr)
