# src/taskwright/cli/main.py

"""
CLI entrypoint.

Initializes logging, loads the build script, then either:
- runs exactly one task from the remaining arguments, or
- serves remote commands (--serve) until interrupted.

This is the only place a FatalError turns into a process exit status.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from ..builder import Builder
from ..config import get_settings
from ..core.errors import FatalError
from ..logging_setup import setup_logging
from .bootstrap import create_builder, load_build_script

logger = logging.getLogger(__name__)


def run(builder: Builder, argv: Sequence[str]) -> int:
    """Run one task and map the outcome to an exit status."""
    try:
        result = builder.begin(argv)
    except FatalError as e:
        logger.debug("Build stopped: %s (task stack: %s)", e, list(e.task_stack))
        return 1
    return 1 if result < 0 else 0


_DRIVER_VALUE_FLAGS = ("--file", "--port")


def _split_driver_argv(argv: Sequence[str]) -> tuple[list[str], list[str]]:
    """
    Split argv at the first bare token (the task name, or the value of a
    task option given before it). Driver options are only read from the
    head, so a build script may declare its own --port/--file.
    """
    argv = list(argv)
    i = 0
    while i < len(argv):
        token = argv[i]
        if not token.startswith("-"):
            break
        i += 2 if token in _DRIVER_VALUE_FLAGS else 1
    return argv[:i], argv[i:]


def _parse_driver_args(argv: Sequence[str], settings) -> tuple[argparse.Namespace, list[str]]:
    p = argparse.ArgumentParser(prog=settings.app_name, add_help=False, allow_abbrev=False)
    p.add_argument("--file", type=Path, default=settings.build_file, help="Build script to load.")
    p.add_argument("--serve", action="store_true", help="Run the remote command server.")
    p.add_argument("--port", type=int, default=settings.remote_port, help="Remote command server port.")
    p.add_argument("-v", "--verbose", action="store_true", help="Show informational and verbose output.")

    head, tail = _split_driver_argv(argv)
    known, extra = p.parse_known_args(head)
    return known, extra + tail


def main(argv: Sequence[str] | None = None) -> int:
    settings = get_settings()
    if argv is None:
        argv = sys.argv[1:]

    level_name = str(settings.log_level).upper()
    file_level = getattr(logging, level_name, logging.INFO)
    setup_logging(log_dir=settings.log_dir, file_level=file_level)

    known, rest = _parse_driver_args(argv, settings)
    builder = create_builder(settings=settings)

    if known.serve:
        if known.verbose:
            builder.state.verbose = True
        builder.listen(known.port)
        return 0

    try:
        builder = load_build_script(builder, known.file)
    except FatalError:
        return 1

    if known.verbose:
        # hand it back so the task sees verbose=True in its arguments
        rest = ["--verbose", *rest]
    return run(builder, rest)


if __name__ == "__main__":
    sys.exit(main())
