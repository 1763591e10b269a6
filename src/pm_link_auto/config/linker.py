"""Schema of the pm-link-auto configuration file."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Final

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pm_link_auto.domain.types import DeclaredEntry

MODULE_NAME: Final[str] = "pm-link-auto"
CONFIG_FILENAMES: Final[tuple[str, ...]] = (
    f"{MODULE_NAME}.config.ts",
    f"{MODULE_NAME}.config.js",
)
DEFAULT_CONFIG_FILENAME: Final[str] = CONFIG_FILENAMES[0]
DEFAULT_SEARCH_ROOT: Final[str] = "~/"


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        return value.strip() or None
    return value


class LinkerConfigModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)


class PackageEntryConfig(LinkerConfigModel):
    name: str = Field(min_length=1)
    path: str | None = None

    _normalize_path = field_validator("path", mode="before")(_blank_to_none)

    def to_declared(self) -> DeclaredEntry:
        return DeclaredEntry(name=self.name, path=self.path)


class LinkerConfig(LinkerConfigModel):
    """``{ packageSearchRoot?: string, packages: { name, path? }[] }``."""

    package_search_root: str = Field(default=DEFAULT_SEARCH_ROOT, alias="packageSearchRoot")
    packages: list[PackageEntryConfig] = Field(default_factory=list[PackageEntryConfig])

    @field_validator("package_search_root", mode="before")
    @classmethod
    def _default_search_root(cls, value: object) -> object:
        return _blank_to_none(value) or DEFAULT_SEARCH_ROOT

    @field_validator("packages", mode="before")
    @classmethod
    def _missing_packages(cls, value: object) -> object:
        return [] if value is None else value

    def declared_entries(self) -> list[DeclaredEntry]:
        return [entry.to_declared() for entry in self.packages]

    def search_root(self, *, base_dir: Path) -> Path:
        """Absolute search root; ``~`` expands to the home directory, relative roots
        are anchored at ``base_dir`` (the config file's directory)."""

        root = Path(self.package_search_root).expanduser()
        return Path(os.path.abspath(base_dir / root))
