# src/taskwright/tasks/task_models.py

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any

TaskArgs = dict[str, Any]
TaskHandler = Callable[[TaskArgs], "int | None"]


@dataclass(frozen=True, slots=True)
class Task:
    name: str
    description: str
    handler: TaskHandler


@dataclass(slots=True)
class Option:
    """
    A user-declared command line option.

    - requires_arg=True  -> `--name VALUE` (converted with `type`)
    - requires_arg=False -> boolean switch `--name`

    The registry keeps its own copy, so mutating an Option after
    registering it has no effect on the parser.
    """

    name: str
    description: str = ""
    requires_arg: bool = True

    aliases: list[str] = field(default_factory=list)
    type: Callable[[str], Any] | None = None
    default: Any = None
    required: bool = False
    choices: Sequence[Any] | None = None

    @property
    def dest(self) -> str:
        return self.name.lstrip("-").replace("-", "_")

    def flags(self) -> list[str]:
        out = [self.name if self.name.startswith("-") else f"--{self.name}"]
        for alias in self.aliases:
            if alias.startswith("-"):
                out.append(alias)
            else:
                out.append(f"-{alias}" if len(alias) == 1 else f"--{alias}")
        return out

    def default_value(self) -> Any:
        if self.default is None and not self.requires_arg:
            return False
        return self.default
