# src/taskwright/tasks/registry.py

from __future__ import annotations

import argparse
import copy
import logging
from collections.abc import Sequence

from ..core.diagnostics import Diagnostics
from ..core.errors import ErrorKind
from .task_models import Option, Task, TaskArgs, TaskHandler

logger = logging.getLogger(__name__)


class TaskRegistry:
    """Named build tasks and the command line options that feed them."""

    def __init__(self, diagnostics: Diagnostics, *, prog: str | None = None) -> None:
        self.diagnostics = diagnostics
        self.prog = prog
        self._tasks: list[Task] = []
        self._options: list[Option] = []

    @property
    def state(self):
        return self.diagnostics.state

    @property
    def tasks(self) -> tuple[Task, ...]:
        return tuple(self._tasks)

    @property
    def options(self) -> tuple[Option, ...]:
        return tuple(self._options)

    def register_task(self, name: str, description: str, handler: TaskHandler) -> None:
        if self.find_task(name) is not None:
            # First registration keeps winning; make the shadowing visible.
            self.diagnostics.warn(f'Task "{name}" is already registered; the new handler is ignored')
        self._tasks.append(Task(name=name, description=description, handler=handler))

    def register_option(self, option: Option) -> None:
        self._options.append(copy.deepcopy(option))

    def find_task(self, name: str) -> Task | None:
        for task in self._tasks:
            if task.name == name:
                return task
        return None

    def run_task(self, name: str, args: TaskArgs) -> int:
        """
        Run a task by name and return the handler's result.

        An unknown name is fatal. A negative result is reported as an
        error but returned to the caller like any other value.
        """
        task = self.find_task(name)
        if task is None:
            self.diagnostics.fatal(f'Failed to run task "{name}"', kind=ErrorKind.UNKNOWN_TASK)

        self.diagnostics.verbose(f"Starting task \x1b[33m{task.name}\x1b[0m...")
        self.state.push_task(task.name)
        try:
            resp = task.handler(args)
        finally:
            self.state.pop_task()

        if resp is None:
            resp = 0
        elif not isinstance(resp, int):
            try:
                resp = int(resp)
            except (TypeError, ValueError):
                self.diagnostics.error(f'Task "{task.name}" returned a non-numeric result: {resp!r}')
                resp = -1
        if resp < 0:
            self.diagnostics.error(f'Failed task "{task.name}"')
        return resp

    # ------------------------------------------------------------
    # command line
    # ------------------------------------------------------------

    def _common_parser(self) -> argparse.ArgumentParser:
        # Shared by the top-level parser and every task subparser, so options
        # are accepted both before and after the task name.
        p = argparse.ArgumentParser(add_help=False)
        p.add_argument(
            "-v",
            "--verbose",
            action="store_true",
            default=argparse.SUPPRESS,
            help="Show informational and verbose output.",
        )
        for opt in self._options:
            kwargs: dict = {"dest": opt.dest, "default": argparse.SUPPRESS, "help": opt.description}
            if opt.requires_arg:
                if opt.type is not None:
                    kwargs["type"] = opt.type
                if opt.choices is not None:
                    kwargs["choices"] = list(opt.choices)
            else:
                kwargs["action"] = "store_true"
            p.add_argument(*opt.flags(), **kwargs)
        return p

    def build_parser(self) -> argparse.ArgumentParser:
        common = self._common_parser()
        parser = argparse.ArgumentParser(prog=self.prog, parents=[common])

        sub = parser.add_subparsers(dest="task", metavar="<task>", required=True)
        seen: set[str] = set()
        for task in self._tasks:
            if task.name in seen:
                continue
            seen.add(task.name)
            sub.add_parser(task.name, help=task.description, description=task.description, parents=[common])

        return parser

    def parse(self, argv: Sequence[str]) -> tuple[str, TaskArgs]:
        """Parse argv into (task name, arguments). Bad input exits via argparse."""
        parser = self.build_parser()
        ns = parser.parse_args(list(argv))
        args = vars(ns)
        name = args.pop("task")

        args.setdefault("verbose", False)
        missing: list[str] = []
        for opt in self._options:
            if opt.dest in args:
                continue
            if opt.required:
                missing.append(opt.flags()[0])
            args[opt.dest] = opt.default_value()
        if missing:
            parser.error(f"the following arguments are required: {', '.join(missing)}")

        return name, args

    def begin(self, argv: Sequence[str]) -> int:
        """Parse argv, apply --verbose, and run exactly one task."""
        name, args = self.parse(argv)
        if args.get("verbose"):
            self.state.verbose = True
        logger.debug("Parsed arguments for %s: %s", name, args)
        return self.run_task(name, args)
