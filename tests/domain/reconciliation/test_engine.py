from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from pm_link_auto.domain.reconciliation import (
    DiscoveryIncompleteError,
    ReconciliationEngine,
    ReconciliationOutcome,
)
from pm_link_auto.domain.types import DeclaredEntry, EntryOrigin, LinkActionKind, PackageManager
from tests.helpers.doubles import (
    FakeDiscoverer,
    FakeRegistry,
    RecordingPatcher,
    ScriptedPrompt,
)

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from pm_link_auto.domain.reconciliation import ReconciliationResult


def _engine(
    *,
    names: dict[Path, str],
    registry: FakeRegistry,
    patcher: RecordingPatcher,
    prompt: ScriptedPrompt | None = None,
    discoverer: FakeDiscoverer | None = None,
) -> ReconciliationEngine:
    def read_name(directory: Path) -> str | None:
        return names.get(directory)

    return ReconciliationEngine(
        read_name=read_name,
        discover=discoverer or FakeDiscoverer(),
        list_global_links=registry,
        confirm=prompt or ScriptedPrompt(),
        patch_config=patcher,
    )


@pytest.fixture
def reconcile(tmp_path: Path) -> Callable[..., ReconciliationResult]:
    def run(engine: ReconciliationEngine, entries: list[DeclaredEntry]) -> ReconciliationResult:
        return engine.reconcile(
            entries,
            config_path=tmp_path / "pm-link-auto.config.ts",
            search_root=tmp_path / "search",
            manager=PackageManager.NPM,
        )

    return run


def test_no_entries_is_nothing_to_do(
    registry: FakeRegistry,
    patcher: RecordingPatcher,
    reconcile: Callable[..., ReconciliationResult],
) -> None:
    engine = _engine(names={}, registry=registry, patcher=patcher)

    result = reconcile(engine, [])

    assert result.outcome is ReconciliationOutcome.NOTHING_TO_DO
    assert not result.should_link
    assert registry.calls == []


def test_valid_unlinked_packages_are_linked_fresh(
    tmp_path: Path,
    registry: FakeRegistry,
    patcher: RecordingPatcher,
    reconcile: Callable[..., ReconciliationResult],
) -> None:
    engine = _engine(
        names={tmp_path / "a": "a", tmp_path / "b": "b"},
        registry=registry,
        patcher=patcher,
    )

    result = reconcile(
        engine,
        [DeclaredEntry(name="a", path="./a"), DeclaredEntry(name="b", path="./b")],
    )

    assert result.outcome is ReconciliationOutcome.READY
    assert result.should_link
    assert [action.kind for action in result.actions] == [
        LinkActionKind.LINK_FRESH,
        LinkActionKind.LINK_FRESH,
    ]
    assert [action.intended_path for action in result.actions] == [tmp_path / "a", tmp_path / "b"]
    assert registry.calls == [PackageManager.NPM]
    assert patcher.calls == []


def test_already_linked_package_needs_no_action(
    tmp_path: Path,
    registry: FakeRegistry,
    patcher: RecordingPatcher,
    reconcile: Callable[..., ReconciliationResult],
) -> None:
    registry.links = {"a": str(tmp_path / "x" / ".." / "a")}
    engine = _engine(names={tmp_path / "a": "a"}, registry=registry, patcher=patcher)

    result = reconcile(engine, [DeclaredEntry(name="a", path="./a")])

    assert [action.kind for action in result.actions] == [LinkActionKind.ALREADY_CORRECT]


@pytest.mark.parametrize(
    ("answer", "expected"),
    [(True, LinkActionKind.RELINK), (False, LinkActionKind.SKIP_CONFLICT)],
)
def test_conflicts_are_settled_by_the_user(
    tmp_path: Path,
    registry: FakeRegistry,
    patcher: RecordingPatcher,
    reconcile: Callable[..., ReconciliationResult],
    answer: bool,
    expected: LinkActionKind,
) -> None:
    registry.links = {"a": "/old/a"}
    prompt = ScriptedPrompt(answers=[answer])
    engine = _engine(names={tmp_path / "a": "a"}, registry=registry, patcher=patcher, prompt=prompt)

    result = reconcile(engine, [DeclaredEntry(name="a", path="./a")])

    (action,) = result.actions
    assert action.kind is expected
    assert action.existing_path == "/old/a"
    assert len(prompt.messages) == 1
    assert "unlink the existing 'a'" in prompt.messages[0]


def test_declined_discovery_excludes_invalid_entries(
    tmp_path: Path,
    registry: FakeRegistry,
    patcher: RecordingPatcher,
    reconcile: Callable[..., ReconciliationResult],
) -> None:
    prompt = ScriptedPrompt(answers=[False])
    discoverer = FakeDiscoverer()
    engine = _engine(
        names={tmp_path / "a": "a"},
        registry=registry,
        patcher=patcher,
        prompt=prompt,
        discoverer=discoverer,
    )

    result = reconcile(engine, [DeclaredEntry(name="a", path="./a"), DeclaredEntry(name="b")])

    assert result.outcome is ReconciliationOutcome.READY
    assert [entry.name for entry in result.resolved] == ["a"]
    assert [entry.name for entry in result.excluded] == ["b"]
    assert discoverer.calls == []
    assert patcher.calls == []
    assert "Found 1 package(s) with missing or invalid paths" in prompt.messages[0]
    assert str(tmp_path / "search") in prompt.messages[0]


def test_declined_discovery_without_valid_entries_stops(
    registry: FakeRegistry,
    patcher: RecordingPatcher,
    reconcile: Callable[..., ReconciliationResult],
) -> None:
    engine = _engine(
        names={},
        registry=registry,
        patcher=patcher,
        prompt=ScriptedPrompt(answers=[False]),
    )

    result = reconcile(engine, [DeclaredEntry(name="b")])

    assert result.outcome is ReconciliationOutcome.NO_VALID_PACKAGES
    assert not result.should_link
    assert registry.calls == []


def test_successful_discovery_patches_config_and_ends_the_run(
    tmp_path: Path,
    registry: FakeRegistry,
    patcher: RecordingPatcher,
    reconcile: Callable[..., ReconciliationResult],
) -> None:
    found_b = tmp_path / "search" / "b"
    found_c = tmp_path / "search" / "c"
    discoverer = FakeDiscoverer(found={"b": found_b, "c": found_c})
    engine = _engine(
        names={tmp_path / "a": "a"},
        registry=registry,
        patcher=patcher,
        prompt=ScriptedPrompt(answers=[True]),
        discoverer=discoverer,
    )
    entries = [
        DeclaredEntry(name="c", path="./wrong"),
        DeclaredEntry(name="a", path="./a"),
        DeclaredEntry(name="b"),
    ]

    result = reconcile(engine, entries)

    config_path = tmp_path / "pm-link-auto.config.ts"
    assert result.outcome is ReconciliationOutcome.DISCOVERED
    assert not result.should_link
    assert result.actions == ()
    assert [entry.name for entry in result.resolved] == ["c", "a", "b"]
    assert [entry.origin for entry in result.resolved] == [
        EntryOrigin.DISCOVERED,
        EntryOrigin.VALIDATED,
        EntryOrigin.DISCOVERED,
    ]
    assert discoverer.calls == [(["c", "b"], tmp_path / "search")]
    assert patcher.calls == [
        (config_path, "c", str(found_c)),
        (config_path, "b", str(found_b)),
    ]
    assert registry.calls == []


def test_incomplete_discovery_writes_nothing(
    tmp_path: Path,
    registry: FakeRegistry,
    patcher: RecordingPatcher,
    reconcile: Callable[..., ReconciliationResult],
) -> None:
    engine = _engine(
        names={},
        registry=registry,
        patcher=patcher,
        prompt=ScriptedPrompt(answers=[True]),
        discoverer=FakeDiscoverer(found={"a": tmp_path / "a"}),
    )

    with pytest.raises(DiscoveryIncompleteError) as excinfo:
        reconcile(engine, [DeclaredEntry(name="a"), DeclaredEntry(name="b")])

    assert excinfo.value.missing == ("b",)
    assert patcher.calls == []
    assert registry.calls == []
