# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from taskwright.builder import Builder
from taskwright.core.diagnostics import Diagnostics
from taskwright.core.state import BuildState


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with BuildState and Builder.

    We intentionally use a SimpleNamespace rather than reading the real
    environment, to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="taskwright-test",
        log_level="DEBUG",
        log_dir=None,
        verbose=False,
        allow_external=False,
        remote_host="127.0.0.1",
        remote_port=8086,
        build_file=tmp_path / "build.py",
    )


@pytest.fixture()
def state(settings: SimpleNamespace) -> BuildState:
    return BuildState(settings=settings)


@pytest.fixture()
def diagnostics(state: BuildState) -> Diagnostics:
    return Diagnostics(state)


@pytest.fixture()
def builder(state: BuildState) -> Builder:
    """Builder sharing the `state` fixture, so tests can inspect the call stack."""
    return Builder(state=state)
