"""Public interface for reading and patching JavaScript/TypeScript config sources."""

from __future__ import annotations

from .evaluate import evaluate_default_export
from .loader import (
    LoadedConfig,
    create_default_config,
    find_config_file,
    load_config,
    load_config_file,
    offer_default_config,
)
from .patcher import find_package_entry, patch_config_source, update_config_file
from .syntax import SourceDialect, dialect_for, quote_string, string_value

__all__ = [
    "LoadedConfig",
    "SourceDialect",
    "create_default_config",
    "dialect_for",
    "evaluate_default_export",
    "find_config_file",
    "find_package_entry",
    "load_config",
    "load_config_file",
    "offer_default_config",
    "patch_config_source",
    "quote_string",
    "string_value",
    "update_config_file",
]
