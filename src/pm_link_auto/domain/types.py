"""Core value types shared by the reconciliation engine and its adapters."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path  # noqa: TC003 # dataclass field types are resolved at runtime
from typing import TypeAlias

# Package name -> absolute path the global registry links it from.
GlobalLinkMap: TypeAlias = dict[str, str]


class PackageManager(StrEnum):
    """Package managers whose global link registry can be reconciled."""

    NPM = "npm"
    PNPM = "pnpm"
    YARN = "yarn"


@dataclass(frozen=True, slots=True)
class DeclaredEntry:
    """A package the user asked to link, exactly as written in the config file.

    ``path`` may be absolute or relative to the config file's directory, and may
    be missing or point at the wrong directory.
    """

    name: str
    path: str | None = None


class EntryOrigin(StrEnum):
    """How the path of a resolved entry was established."""

    VALIDATED = "validated"
    DISCOVERED = "discovered"


@dataclass(frozen=True, slots=True)
class ResolvedEntry:
    """A package whose absolute ``path`` holds a manifest declaring ``name``."""

    name: str
    path: Path
    origin: EntryOrigin = EntryOrigin.VALIDATED


class LinkActionKind(StrEnum):
    """Decision taken for one resolved entry against the global registry."""

    ALREADY_CORRECT = "already_correct"
    LINK_FRESH = "link_fresh"
    CONFLICT = "conflict"
    RELINK = "relink"
    SKIP_CONFLICT = "skip_conflict"


@dataclass(frozen=True, slots=True, kw_only=True)
class LinkAction:
    """Per-entry link decision.

    ``CONFLICT`` is transient: the engine turns it into ``RELINK`` or
    ``SKIP_CONFLICT`` once the user has answered. ``existing_path`` is set for
    every kind except ``LINK_FRESH``.
    """

    kind: LinkActionKind
    entry: ResolvedEntry
    existing_path: str | None = None

    @property
    def name(self) -> str:
        return self.entry.name

    @property
    def intended_path(self) -> Path:
        return self.entry.path

    @property
    def needs_decision(self) -> bool:
        return self.kind is LinkActionKind.CONFLICT
