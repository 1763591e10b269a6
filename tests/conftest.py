from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from tests.helpers.doubles import FakeRegistry, RecordingPatcher, RecordingRunner

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path


@pytest.fixture
def runner() -> RecordingRunner:
    return RecordingRunner()


@pytest.fixture
def registry() -> FakeRegistry:
    return FakeRegistry()


@pytest.fixture
def patcher() -> RecordingPatcher:
    return RecordingPatcher()


@pytest.fixture
def make_package(tmp_path: Path) -> Callable[..., Path]:
    """Create ``tmp_path/<relative>/package.json`` declaring ``name``."""

    def factory(name: str, relative: str | None = None, **extra: object) -> Path:
        directory = tmp_path / (relative or name.replace("@", "").replace("/", "-"))
        directory.mkdir(parents=True, exist_ok=True)
        manifest = {"name": name, "version": "1.0.0", **extra}
        (directory / "package.json").write_text(json.dumps(manifest), encoding="utf-8")
        return directory

    return factory
