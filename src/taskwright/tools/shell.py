# src/taskwright/tools/shell.py

from __future__ import annotations

import os
import subprocess
from pathlib import Path

from ..core.diagnostics import Diagnostics
from ..core.errors import ErrorKind


def run_command(diag: Diagnostics, command: str, continue_if_failed: bool = False) -> bool:
    """
    Run a shell command with inherited stdio, blocking until it exits.

    On failure: fatal unless continue_if_failed, in which case False.
    """
    diag.verbose(command)

    try:
        proc = subprocess.run(command, shell=True, check=False)  # noqa: S602
        ok = proc.returncode == 0
    except OSError as e:
        diag.warn(f"Could not start command: {e}")
        ok = False

    if ok:
        return True
    if not continue_if_failed:
        diag.fatal(f"Failed command \x1b[32m{command}\x1b[0m", kind=ErrorKind.COMMAND_FAILED)
    return False


def _mtime(path: str | Path) -> float | None:
    try:
        return os.stat(path).st_mtime
    except OSError:
        return None


def run_if_newer(diag: Diagnostics, command: str, source: str | Path, destination: str | Path) -> bool:
    """
    Run `command` when `source` is newer than `destination` (or it is missing).

    Returns True when the command ran.
    """
    if not os.path.exists(source):
        diag.fatal(
            f'"{source}" doesn\'t exist, despite being used in \x1b[94mcompile\x1b[0m()',
            kind=ErrorKind.MISSING_SOURCE,
        )

    if not os.path.exists(destination):
        run_command(diag, command)
        return True

    src_mtime = _mtime(source)
    dest_mtime = _mtime(destination) or 0.0
    if src_mtime is None or src_mtime > dest_mtime:
        run_command(diag, command)
        return True

    diag.verbose(f"Up to date: \x1b[32m{destination}\x1b[0m")
    return False
