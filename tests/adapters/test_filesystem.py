from __future__ import annotations

from typing import TYPE_CHECKING

from pm_link_auto.adapters.filesystem import glob_manifests

if TYPE_CHECKING:
    from pathlib import Path


def _touch_manifest(directory: Path) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    manifest = directory / "package.json"
    manifest.write_text("{}", encoding="utf-8")
    return manifest


def test_walks_in_sorted_order_and_prunes_dependency_trees(tmp_path: Path) -> None:
    root_manifest = _touch_manifest(tmp_path)
    b_manifest = _touch_manifest(tmp_path / "b")
    a_manifest = _touch_manifest(tmp_path / "a" / "nested")
    _touch_manifest(tmp_path / "node_modules" / "dep")
    _touch_manifest(tmp_path / "a" / "node_modules" / "dep")
    _touch_manifest(tmp_path / ".cache" / "pkg")

    assert list(glob_manifests(tmp_path)) == [root_manifest, a_manifest, b_manifest]


def test_symlinked_directories_are_not_followed(tmp_path: Path) -> None:
    real = _touch_manifest(tmp_path / "real" / "pkg")
    (tmp_path / "alias").symlink_to(tmp_path / "real", target_is_directory=True)

    assert list(glob_manifests(tmp_path)) == [real]


def test_missing_root_yields_nothing(tmp_path: Path) -> None:
    assert list(glob_manifests(tmp_path / "absent")) == []
