"""Public interface for the global link registry adapter."""

from __future__ import annotations

from .client import (
    NPM_LIST_COMMAND,
    NPM_ROOT_COMMAND,
    PNPM_LIST_COMMAND,
    YARN_GLOBAL_DIR_COMMAND,
    GlobalLinkRegistry,
)
from .schema import PnpmListing, PnpmListRecord
from .tree import extract_package_name, parse_link_lines, resolve_symlink

__all__ = [
    "NPM_LIST_COMMAND",
    "NPM_ROOT_COMMAND",
    "PNPM_LIST_COMMAND",
    "YARN_GLOBAL_DIR_COMMAND",
    "GlobalLinkRegistry",
    "PnpmListRecord",
    "PnpmListing",
    "extract_package_name",
    "parse_link_lines",
    "resolve_symlink",
]
