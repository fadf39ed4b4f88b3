# src/taskwright/core/diagnostics.py

"""
Build diagnostics.

Five severities, each tagged with the innermost running task:
- info / verbose: only when the build is verbose
- warn / error: always
- fatal: always, then raises FatalError
"""

from __future__ import annotations

import logging
from typing import NoReturn

from ..logging_setup import VERBOSE
from .errors import ErrorKind, FatalError
from .state import BuildState

logger = logging.getLogger("taskwright.build")


def _join(parts: tuple[object, ...]) -> str:
    return " ".join(str(p) for p in parts)


class Diagnostics:
    def __init__(self, state: BuildState) -> None:
        self.state = state

    def _log(self, level: int, parts: tuple[object, ...]) -> None:
        logger.log(level, "%s", _join(parts), extra={"task": self.state.current_task or "*"})

    def info(self, *parts: object) -> None:
        if self.state.verbose:
            self._log(logging.INFO, parts)

    def verbose(self, *parts: object) -> None:
        if self.state.verbose:
            self._log(VERBOSE, parts)

    def warn(self, *parts: object) -> None:
        self._log(logging.WARNING, parts)

    def error(self, *parts: object) -> None:
        self._log(logging.ERROR, parts)

    def fatal(self, *parts: object, kind: ErrorKind = ErrorKind.USAGE) -> NoReturn:
        stack = self.state.task_stack()
        self._log(logging.CRITICAL, parts)

        if stack and self.state.verbose:
            lines = [" Task stack:"]
            for i, name in enumerate(reversed(stack)):
                marker = "\x1b[91m>" if i == 0 else "\x1b[37m-"
                lines.append(f"  {marker} {name}\x1b[0m")
            self._log(logging.CRITICAL, ("\n".join(lines),))

        raise FatalError(kind, _join(parts), stack)

    def assert_that(self, cond: object, *parts: object) -> None:
        if not cond:
            self.fatal(*parts, kind=ErrorKind.ASSERTION)
