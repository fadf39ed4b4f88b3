# tests/test_shell.py

from __future__ import annotations

import os
import time
from pathlib import Path

import pytest

from taskwright.core.errors import ErrorKind, FatalError


def _touch_cmd(marker: Path) -> str:
    return f'touch "{marker}"'


def _set_mtime(path: Path, ts: float) -> None:
    os.utime(path, (ts, ts))


def test_run_command_success(builder) -> None:
    assert builder.run_command("true") is True


def test_run_command_failure_is_fatal_by_default(builder) -> None:
    with pytest.raises(FatalError) as exc:
        builder.run_command("false")
    assert exc.value.kind == ErrorKind.COMMAND_FAILED


def test_run_command_failure_can_continue(builder) -> None:
    assert builder.run_command("exit 3", continue_if_failed=True) is False


def test_run_command_inherits_cwd(builder, tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    builder.run_command("touch here.txt")
    assert (tmp_path / "here.txt").exists()


@pytest.fixture()
def pair(tmp_path: Path) -> tuple[Path, Path, Path]:
    source = tmp_path / "main.c"
    dest = tmp_path / "main.o"
    marker = tmp_path / "ran"
    source.write_text("int main(void) { return 0; }")
    return source, dest, marker


def test_compile_runs_when_destination_missing(builder, pair) -> None:
    source, dest, marker = pair
    assert builder.compile(_touch_cmd(marker), source, dest) is True
    assert marker.exists()


def test_compile_runs_when_source_newer(builder, pair) -> None:
    source, dest, marker = pair
    dest.write_text("old")
    now = time.time()
    _set_mtime(dest, now - 100)
    _set_mtime(source, now)

    assert builder.compile(_touch_cmd(marker), source, dest) is True
    assert marker.exists()


def test_compile_skips_when_destination_newer(builder, pair) -> None:
    source, dest, marker = pair
    dest.write_text("fresh")
    now = time.time()
    _set_mtime(source, now - 100)
    _set_mtime(dest, now)

    assert builder.compile(_touch_cmd(marker), source, dest) is False
    assert not marker.exists()


def test_compile_missing_source_is_fatal_without_running(builder, tmp_path: Path) -> None:
    marker = tmp_path / "ran"
    with pytest.raises(FatalError) as exc:
        builder.compile(_touch_cmd(marker), tmp_path / "nope.c", tmp_path / "nope.o")
    assert exc.value.kind == ErrorKind.MISSING_SOURCE
    assert not marker.exists()


def test_compile_failing_command_is_fatal(builder, pair) -> None:
    source, dest, _ = pair
    with pytest.raises(FatalError):
        builder.compile("false", source, dest)
