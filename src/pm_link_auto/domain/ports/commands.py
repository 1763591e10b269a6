"""Ports for running package-manager commands."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from pathlib import Path


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Captured output of a finished command."""

    stdout: str
    stderr: str = ""


class CommandError(RuntimeError):
    """Raised when a command cannot be started or exits with a non-zero status."""

    def __init__(
        self,
        command: str,
        *,
        cwd: Path | None = None,
        returncode: int | None = None,
        stderr: str = "",
    ) -> None:
        detail = stderr.strip() or "no error output"
        where = f" (in {cwd})" if cwd is not None else ""
        status = f"exit code {returncode}" if returncode is not None else "could not start"
        super().__init__(f"Command `{command}`{where} failed with {status}: {detail}")
        self.command = command
        self.cwd = cwd
        self.returncode = returncode
        self.stderr = stderr


@runtime_checkable
class CommandRunner(Protocol):
    """Callable port executing a shell command, raising ``CommandError`` on failure."""

    def __call__(self, command: str, cwd: Path | None = None) -> CommandResult: ...


@dataclass(frozen=True, slots=True)
class LinkCommands:
    """Command vocabulary of one package manager.

    ``global_link`` runs inside the package's source directory; ``local_link``
    runs inside the consuming project.
    """

    global_link: str
    global_unlink: Callable[[str], str]
    local_link: Callable[[Sequence[str]], str]


__all__ = ["CommandError", "CommandResult", "CommandRunner", "LinkCommands"]
