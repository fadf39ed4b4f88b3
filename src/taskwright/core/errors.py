# src/taskwright/core/errors.py

from __future__ import annotations

from enum import StrEnum


class ErrorKind(StrEnum):
    """Why a build stopped."""

    UNKNOWN_TASK = "unknown_task"
    COMMAND_FAILED = "command_failed"
    MISSING_SOURCE = "missing_source"
    ASSERTION = "assertion"
    REMOTE = "remote"
    USAGE = "usage"


class FatalError(Exception):
    """
    A fatal diagnostic.

    Core code raises this instead of exiting; the outermost driver decides
    whether the process terminates. `task_stack` is the call stack at the
    moment of failure, innermost task last.
    """

    def __init__(self, kind: ErrorKind, message: str, task_stack: tuple[str, ...] = ()) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.task_stack = task_stack

    @property
    def task(self) -> str | None:
        return self.task_stack[-1] if self.task_stack else None

    def __str__(self) -> str:
        return f"[{self.kind}] {self.message}"
