"""Domain port definitions for adapters."""

from __future__ import annotations

from .commands import CommandError, CommandResult, CommandRunner, LinkCommands
from .filesystem import ManifestGlobber, ManifestReader, PackageDiscoverer
from .prompting import ConfirmationPrompt
from .registry import ConfigPatcher, GlobalRegistry

__all__ = [
    "CommandError",
    "CommandResult",
    "CommandRunner",
    "ConfigPatcher",
    "ConfirmationPrompt",
    "GlobalRegistry",
    "LinkCommands",
    "ManifestGlobber",
    "ManifestReader",
    "PackageDiscoverer",
]
