# src/taskwright/builder.py

"""
Builder: the object a build script talks to.

Wires one BuildState, its Diagnostics and a TaskRegistry together and
exposes tasks, options, shell/filesystem helpers and remote dispatch
through a single surface.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any, NoReturn

from .config import DEFAULT_REMOTE_PORT, Settings
from .core.diagnostics import Diagnostics
from .core.errors import ErrorKind
from .core.state import BuildState, create_build_state
from .logging_setup import setup_logging
from .remote import client as remote_client
from .remote import server as remote_server
from .tasks.registry import TaskRegistry
from .tasks.task_models import Option, TaskArgs, TaskHandler
from .tools import fs, shell


class Builder:
    def __init__(self, settings: Settings | None = None, *, state: BuildState | None = None) -> None:
        self.state = state if state is not None else create_build_state(settings=settings)
        self.diagnostics = Diagnostics(self.state)
        self.registry = TaskRegistry(self.diagnostics, prog=self.state.settings.app_name)

    # ---- diagnostics ----

    def info(self, *parts: object) -> None:
        self.diagnostics.info(*parts)

    def verbose(self, *parts: object) -> None:
        self.diagnostics.verbose(*parts)

    def warn(self, *parts: object) -> None:
        self.diagnostics.warn(*parts)

    def error(self, *parts: object) -> None:
        self.diagnostics.error(*parts)

    def fatal(self, *parts: object, kind: ErrorKind = ErrorKind.USAGE) -> NoReturn:
        self.diagnostics.fatal(*parts, kind=kind)

    def assert_that(self, cond: object, *parts: object) -> None:
        self.diagnostics.assert_that(cond, *parts)

    # ---- tasks ----

    def register_task(self, name: str, description: str, handler: TaskHandler) -> None:
        self.registry.register_task(name, description, handler)

    def task(self, name: str | None = None, description: str = "") -> Callable[[TaskHandler], TaskHandler]:
        """
        Decorator form of register_task:

            @builder.task("clean", "Remove build output")
            def clean(args): ...
        """

        def decorator(fn: TaskHandler) -> TaskHandler:
            self.register_task(name or fn.__name__, description or (fn.__doc__ or "").strip(), fn)
            return fn

        return decorator

    def register_option(self, option: Option | None = None, /, **kwargs: Any) -> None:
        if option is None:
            option = Option(**kwargs)
        self.registry.register_option(option)

    def run_task(self, name: str, args: TaskArgs | None = None) -> int:
        return self.registry.run_task(name, args if args is not None else {})

    def _ensure_logging(self) -> None:
        # Build scripts run directly (not through the taskwright command)
        # still get task-tagged console output.
        if not logging.getLogger().handlers:
            setup_logging(log_dir=self.state.settings.log_dir)

    def begin(self, argv: Sequence[str]) -> int:
        self._ensure_logging()
        return self.registry.begin(argv)

    # ---- shell / filesystem ----

    def run_command(self, command: str, continue_if_failed: bool = False) -> bool:
        return shell.run_command(self.diagnostics, command, continue_if_failed)

    def compile(self, command: str, source: str | Path, destination: str | Path) -> bool:
        return shell.run_if_newer(self.diagnostics, command, source, destination)

    def copy(self, source: str | Path, dest: str | Path) -> bool:
        return fs.copy(self.diagnostics, source, dest)

    def remove(self, path: str | Path) -> None:
        fs.remove(self.diagnostics, path)

    def create_directory(self, path: str | Path, should_create: bool = True) -> None:
        fs.create_directory(self.diagnostics, path, should_create)

    def scan_directory(
        self,
        path: str | Path,
        matches: fs.Pattern | None = None,
        ignores: fs.Pattern | None = None,
    ) -> list[str]:
        return fs.scan_directory(path, matches, ignores)

    join_path = staticmethod(fs.join_path)
    extension = staticmethod(fs.extension)
    just_file = staticmethod(fs.just_file)

    # ---- remote dispatch ----

    def allow_external(self) -> None:
        """Send dispatch() commands to the remote server instead of running them here."""
        self.state.allow_external = True

    def listen(self, port: int = DEFAULT_REMOTE_PORT) -> None:
        self._ensure_logging()
        remote_server.listen(self.diagnostics, port)

    def dispatch(self, command: str, address: str | None = None, port: int | None = None) -> bool:
        return remote_client.dispatch(self.diagnostics, command, address, port)
