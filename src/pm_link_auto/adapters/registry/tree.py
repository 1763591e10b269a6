"""Scrape the human-oriented ``npm list -g --link=true`` tree.

Each linked package appears as ``├── name@1.2.3 -> ./../../relative/target``.
The relative target is relative to a manager- and version-specific location,
so it is ignored: the package name is joined with the real global modules
directory and that symlink is resolved instead.
"""

from __future__ import annotations

import os
import re
from logging import getLogger
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable
    from pathlib import Path

    from pm_link_auto.domain.types import GlobalLinkMap

log = getLogger(__name__)

LINK_ARROW: Final[str] = "->"
_TREE_PREFIX = re.compile(r"^[└├─│┬+`|\-\s]+")


def resolve_symlink(path: Path) -> str:
    """Real path behind ``path``; raises ``OSError`` when the link is broken."""

    return os.path.realpath(path, strict=True)


def extract_package_name(identifier: str) -> str | None:
    """Package name from a ``name@version`` identifier.

    >>> extract_package_name("@scope/name@1.2.3")
    '@scope/name'
    >>> extract_package_name("name@1.2.3")
    'name'
    """

    tokens = identifier.split()
    if not tokens:
        return None
    token = tokens[0]
    if token.startswith("@"):
        parts = token.split("@")
        return f"@{parts[1]}" if len(parts) > 2 else token
    return token.split("@")[0] or None


def parse_link_lines(
    lines: Iterable[str],
    global_modules_dir: Path,
    *,
    resolve: Callable[[Path], str] = resolve_symlink,
) -> GlobalLinkMap:
    """Map every linked package in the listing to the real path of its global symlink."""

    links: GlobalLinkMap = {}
    for line in lines:
        if LINK_ARROW not in line:
            continue

        identifier = _TREE_PREFIX.sub("", line.split(LINK_ARROW, 1)[0]).strip()
        if not identifier:
            continue

        name = extract_package_name(identifier)
        if not name:
            continue

        symlink = global_modules_dir / name
        try:
            links[name] = resolve(symlink)
        except OSError:
            log.warning(
                "  Could not resolve link for '%s' at %s. It may be a broken symlink. Skipping.",
                name,
                symlink,
            )
    return links
