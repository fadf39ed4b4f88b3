# src/taskwright/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

VERBOSE = 15
logging.addLevelName(VERBOSE, "VERBOSE")

# level -> ANSI colour of the level tag
_LEVEL_COLOURS = {
    "INFO": "1",
    "VERBOSE": "1;92",
    "WARNING": "1;93",
    "ERROR": "1;91",
    "CRITICAL": "1;95",
}
_LEVEL_TAGS = {"WARNING": "WARN", "CRITICAL": "FATAL"}


class TaskContextFormatter(logging.Formatter):
    """
    Console format for build output: `LEVEL(task): message`.

    The task name comes from `extra={"task": ...}`; records without it
    (third-party or plain module loggers) show `*`.
    """

    def __init__(self, *, colour: bool = True) -> None:
        super().__init__()
        self.colour = colour

    def format(self, record: logging.LogRecord) -> str:
        level = record.levelname
        tag = _LEVEL_TAGS.get(level, level)
        task = getattr(record, "task", None) or "*"
        message = record.getMessage()
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"

        if not self.colour:
            return f"{tag}({task}): {message}"
        code = _LEVEL_COLOURS.get(level, "0")
        return f"\x1b[{code}m{tag}\x1b[0m(\x1b[33m{task}\x1b[0m): {message}"


class _ConsoleNoiseFilter(logging.Filter):
    """
    Keep build output readable:
    - allow all taskwright logs
    - aiohttp access/server chatter only at WARNING+
    - any other third party only at ERROR+
    """

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name

        if name == "taskwright" or name.startswith("taskwright."):
            return True

        if name.startswith("aiohttp"):
            return record.levelno >= logging.WARNING

        return record.levelno >= logging.ERROR


def setup_logging(
    *,
    log_dir: str | Path | None = None,
    console_level: int = VERBOSE,
    file_level: int = logging.DEBUG,
    colour: bool | None = None,
) -> None:
    """
    Configure logging with:
    - Console handler: task-context format, filtered
    - File handler (only when log_dir is given): full timestamped logs

    Call this ONCE, before the build script registers anything.
    """
    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    # Remove any pre-existing handlers to avoid duplicates.
    for h in list(root.handlers):
        root.removeHandler(h)

    if colour is None:
        colour = sys.stderr.isatty()

    # Console (build output)
    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(console_level)
    ch.setFormatter(TaskContextFormatter(colour=colour))
    ch.addFilter(_ConsoleNoiseFilter())
    root.addHandler(ch)

    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)

        fmt = logging.Formatter(
            fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s [%(task)s]: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
            defaults={"task": "*"},
        )
        fh = logging.FileHandler(str(log_dir / "taskwright.log"), encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(fmt)
        root.addHandler(fh)

    logging.captureWarnings(True)
