from __future__ import annotations

import logging
from pathlib import Path

import pytest

from pm_link_auto.adapters.package_managers import get_link_commands
from pm_link_auto.domain.linking import link_packages
from pm_link_auto.domain.reconciliation import ReconciliationEngine, ReconciliationOutcome
from pm_link_auto.domain.types import DeclaredEntry, PackageManager
from tests.helpers.doubles import (
    FakeDiscoverer,
    FakeRegistry,
    RecordingPatcher,
    RecordingRunner,
    ScriptedPrompt,
)

PROJECT = Path("/work/app")


def _run(
    tmp_path: Path,
    entries: list[DeclaredEntry],
    *,
    runner: RecordingRunner,
    registry: FakeRegistry,
    prompt: ScriptedPrompt | None = None,
    discoverer: FakeDiscoverer | None = None,
    manager: PackageManager = PackageManager.NPM,
):
    names = {tmp_path / "a": "a", tmp_path / "b": "@scope/b"}
    engine = ReconciliationEngine(
        read_name=names.get,
        discover=discoverer or FakeDiscoverer(),
        list_global_links=registry,
        confirm=prompt or ScriptedPrompt(),
        patch_config=RecordingPatcher(),
    )
    return link_packages(
        entries,
        config_path=tmp_path / "pm-link-auto.config.ts",
        search_root=tmp_path,
        manager=manager,
        engine=engine,
        run_command=runner,
        commands=get_link_commands(manager),
        project_dir=PROJECT,
    )


ENTRIES = [DeclaredEntry(name="a", path="./a"), DeclaredEntry(name="@scope/b", path="./b")]


def test_fresh_links_register_then_consume(
    tmp_path: Path,
    runner: RecordingRunner,
    registry: FakeRegistry,
) -> None:
    result = _run(tmp_path, ENTRIES, runner=runner, registry=registry)

    assert runner.calls == [
        ("npm link", tmp_path / "a"),
        ("npm link", tmp_path / "b"),
        ("npm link a @scope/b", PROJECT),
    ]
    assert result.succeeded
    assert result.local_linked == ("a", "@scope/b")


def test_pnpm_uses_its_own_vocabulary(
    tmp_path: Path,
    runner: RecordingRunner,
    registry: FakeRegistry,
) -> None:
    registry.links = {"a": "/old/a"}

    _run(
        tmp_path,
        ENTRIES[:1],
        runner=runner,
        registry=registry,
        prompt=ScriptedPrompt(answers=[True]),
        manager=PackageManager.PNPM,
    )

    assert runner.calls == [
        ("pnpm unlink --global a", None),
        ("pnpm link --global", tmp_path / "a"),
        ("pnpm link --global a", PROJECT),
    ]


def test_declined_conflict_only_links_locally(
    tmp_path: Path,
    runner: RecordingRunner,
    registry: FakeRegistry,
    caplog: pytest.LogCaptureFixture,
) -> None:
    registry.links = {"a": "/old/a"}

    with caplog.at_level(logging.INFO):
        result = _run(
            tmp_path,
            ENTRIES[:1],
            runner=runner,
            registry=registry,
            prompt=ScriptedPrompt(answers=[False]),
        )

    assert runner.calls == [("npm link a", PROJECT)]
    assert result.succeeded
    assert "It remains linked from /old/a" in caplog.text


def test_second_run_issues_no_global_commands(
    tmp_path: Path,
    runner: RecordingRunner,
    registry: FakeRegistry,
) -> None:
    registry.links = {"a": str(tmp_path / "a"), "@scope/b": str(tmp_path / "b")}

    _run(tmp_path, ENTRIES, runner=runner, registry=registry)

    assert runner.calls == [("npm link a @scope/b", PROJECT)]


def test_failed_global_link_does_not_stop_the_run(
    tmp_path: Path,
    runner: RecordingRunner,
    registry: FakeRegistry,
    caplog: pytest.LogCaptureFixture,
) -> None:
    runner.fail_on = {("npm link", tmp_path / "a")}

    result = _run(tmp_path, ENTRIES, runner=runner, registry=registry)

    assert [command for command, _ in runner.calls] == [
        "npm link",
        "npm link",
        "npm link a @scope/b",
    ]
    assert result.failed == ["a"]
    assert not result.succeeded
    assert result.local_linked == ("a", "@scope/b")
    assert "Failed to globally link 'a'" in caplog.text


def test_failed_local_link_marks_every_package(
    tmp_path: Path,
    runner: RecordingRunner,
    registry: FakeRegistry,
) -> None:
    runner.fail_on = {("npm link a @scope/b", PROJECT)}

    result = _run(tmp_path, ENTRIES, runner=runner, registry=registry)

    assert result.failed == ["a", "@scope/b"]
    assert result.local_linked == ()


def test_discovery_run_executes_no_commands(
    tmp_path: Path,
    runner: RecordingRunner,
    registry: FakeRegistry,
) -> None:
    result = _run(
        tmp_path,
        [DeclaredEntry(name="c")],
        runner=runner,
        registry=registry,
        prompt=ScriptedPrompt(answers=[True]),
        discoverer=FakeDiscoverer(found={"c": tmp_path / "c"}),
    )

    assert result.reconciliation.outcome is ReconciliationOutcome.DISCOVERED
    assert runner.calls == []
