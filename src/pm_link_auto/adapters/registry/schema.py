"""Pydantic models describing ``pnpm list --json`` output."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, TypeAdapter


class PnpmListRecord(BaseModel):
    """One global package as reported by ``pnpm list -g --long --json``.

    ``path`` is already absolute and points at the linked source directory.
    """

    model_config = ConfigDict(extra="ignore")

    name: str | None = None
    path: str | None = None


PnpmListing = TypeAdapter(list[PnpmListRecord])
