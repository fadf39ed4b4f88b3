# src/taskwright/core/state.py

from __future__ import annotations

from dataclasses import dataclass, field

from ..config import Settings, get_settings


@dataclass
class BuildState:
    # Store Settings on the state for easy access in other modules later.
    settings: Settings

    verbose: bool = False
    allow_external: bool = False

    # Task names currently in progress, innermost last.
    _task_stack: list[str] = field(default_factory=list, init=False, repr=False)

    @property
    def current_task(self) -> str | None:
        return self._task_stack[-1] if self._task_stack else None

    def task_stack(self) -> tuple[str, ...]:
        """Read-only snapshot of the call stack."""
        return tuple(self._task_stack)

    def push_task(self, name: str) -> None:
        self._task_stack.append(name)

    def pop_task(self) -> str:
        return self._task_stack.pop()


def create_build_state(*, settings: Settings | None = None) -> BuildState:
    """
    Create BuildState from the provided settings.

    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    return BuildState(
        settings=settings,
        verbose=settings.verbose,
        allow_external=settings.allow_external,
    )
