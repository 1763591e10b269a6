"""Read ``package.json`` manifests as opaque documents with an explicit projection."""

from __future__ import annotations

import re
from collections.abc import Mapping
from logging import getLogger
from pathlib import Path
from typing import Final, cast

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

MANIFEST_FILENAME: Final[str] = "package.json"

log = getLogger(__name__)


def _non_blank_string(value: object) -> object:
    if isinstance(value, str):
        return value.strip() or None
    return None


class ManifestModel(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


class ManifestScripts(ManifestModel):
    postinstall: str | None = None

    _normalize_postinstall = field_validator("postinstall", mode="before")(_non_blank_string)


class PackageManifest(ManifestModel):
    """The only manifest fields pm-link-auto relies on."""

    name: str | None = None
    scripts: ManifestScripts | None = None

    _normalize_name = field_validator("name", mode="before")(_non_blank_string)

    @field_validator("scripts", mode="before")
    @classmethod
    def _ignore_malformed_scripts(cls, value: object) -> object:
        if isinstance(value, Mapping):
            return cast(Mapping[str, object], value)
        return None


def load_manifest(directory: Path) -> PackageManifest | None:
    """Parse ``directory/package.json``; ``None`` when absent, unreadable or malformed."""

    manifest_path = directory / MANIFEST_FILENAME
    try:
        raw = manifest_path.read_bytes()
    except (FileNotFoundError, NotADirectoryError):
        return None
    except OSError as exc:
        log.warning("Could not read %s: %s", manifest_path, exc)
        return None

    try:
        return PackageManifest.model_validate_json(raw)
    except ValidationError as exc:
        reason = exc.errors()[0]["msg"] if exc.errors() else str(exc)
        log.warning("Ignoring malformed %s: %s", manifest_path, reason)
        return None


def read_declared_name(directory: Path) -> str | None:
    manifest = load_manifest(directory)
    if manifest is None:
        return None
    if manifest.name is None:
        log.warning("Ignoring %s: no string 'name' field", directory / MANIFEST_FILENAME)
    return manifest.name


def find_nearest_manifest(start: Path) -> Path | None:
    """Closest ``package.json`` in ``start`` or any of its parents."""

    start = start.absolute()
    for directory in (start, *start.parents):
        candidate = directory / MANIFEST_FILENAME
        if candidate.is_file():
            return candidate
    return None


def postinstall_mentions(start: Path, pattern: str | re.Pattern[str]) -> bool:
    """Whether the nearest project's ``postinstall`` script contains ``pattern``."""

    manifest_path = find_nearest_manifest(start)
    if manifest_path is None:
        log.debug("No package.json found above %s", start)
        return False
    manifest = load_manifest(manifest_path.parent)
    if manifest is None or manifest.scripts is None or manifest.scripts.postinstall is None:
        return False
    script = manifest.scripts.postinstall
    if isinstance(pattern, str):
        return pattern in script
    return pattern.search(script) is not None
