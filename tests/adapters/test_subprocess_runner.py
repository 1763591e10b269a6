from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from pm_link_auto.adapters.subprocess_runner import run_command
from pm_link_auto.domain.ports import CommandError

if TYPE_CHECKING:
    from pathlib import Path


def test_captures_stdout_in_the_requested_directory(tmp_path: Path) -> None:
    (tmp_path / "marker.txt").write_text("", encoding="utf-8")

    result = run_command("ls", tmp_path)

    assert "marker.txt" in result.stdout


def test_non_zero_exit_raises_with_stderr() -> None:
    with pytest.raises(CommandError) as excinfo:
        run_command("echo nope >&2; exit 3")

    assert excinfo.value.returncode == 3
    assert "nope" in excinfo.value.stderr
    assert "exit code 3" in str(excinfo.value)


def test_missing_working_directory_raises(tmp_path: Path) -> None:
    with pytest.raises(CommandError) as excinfo:
        run_command("true", tmp_path / "absent")

    assert excinfo.value.returncode is None


def test_undecodable_output_is_replaced_not_raised() -> None:
    result = run_command("printf 'a\\377b'")

    assert result.stdout == "a\ufffdb"
