"""Link policy: compare a resolved entry with the global registry snapshot.

Both functions are pure; prompting and command execution happen elsewhere.
"""

from __future__ import annotations

import os
from dataclasses import replace
from typing import TYPE_CHECKING

from pm_link_auto.domain.types import LinkAction, LinkActionKind

if TYPE_CHECKING:
    from collections.abc import Mapping

    from pm_link_auto.domain.types import ResolvedEntry


def normalize_path(path: str | os.PathLike[str]) -> str:
    """Absolute, ``.``/``..``-free path in the platform's case convention."""

    return os.path.normcase(os.path.abspath(os.fspath(path)))


def same_location(left: str | os.PathLike[str], right: str | os.PathLike[str]) -> bool:
    return normalize_path(left) == normalize_path(right)


def decide_link_action(entry: ResolvedEntry, global_links: Mapping[str, str]) -> LinkAction:
    existing = global_links.get(entry.name)
    if not existing:
        return LinkAction(kind=LinkActionKind.LINK_FRESH, entry=entry)
    if same_location(existing, entry.path):
        return LinkAction(kind=LinkActionKind.ALREADY_CORRECT, entry=entry, existing_path=existing)
    return LinkAction(kind=LinkActionKind.CONFLICT, entry=entry, existing_path=existing)


def settle_conflict(action: LinkAction, *, approved: bool) -> LinkAction:
    """Turn a ``CONFLICT`` into ``RELINK`` or ``SKIP_CONFLICT`` after the user answered."""

    if not action.needs_decision:
        raise ValueError(f"Action for '{action.name}' is {action.kind}, not a conflict")
    kind = LinkActionKind.RELINK if approved else LinkActionKind.SKIP_CONFLICT
    return replace(action, kind=kind)
