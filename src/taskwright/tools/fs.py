# src/taskwright/tools/fs.py

from __future__ import annotations

import os
import re
import shutil
from pathlib import Path

from ..core.diagnostics import Diagnostics

Pattern = str | re.Pattern[str]


def copy(diag: Diagnostics, source: str | Path, dest: str | Path) -> bool:
    """Copy a file. False if the source is missing or the copy failed."""
    if not os.path.exists(source):
        return False
    try:
        shutil.copyfile(source, dest)
    except OSError as e:
        diag.warn(e)
        return False
    return True


def remove(diag: Diagnostics, path: str | Path) -> None:
    """Remove a file or directory tree if it exists, otherwise do nothing."""
    if not os.path.lexists(path):
        return

    diag.verbose(f"Removing \x1b[32m{path}\x1b[0m")
    if os.path.isdir(path) and not os.path.islink(path):
        shutil.rmtree(path)
    else:
        os.remove(path)


def create_directory(diag: Diagnostics, path: str | Path, should_create: bool = True) -> None:
    """Create a directory (and missing parents) if it doesn't exist."""
    if not should_create:
        return

    if not os.path.exists(path):
        diag.verbose(f"Creating \x1b[32m{path}\x1b[0m")
        os.makedirs(path, exist_ok=True)


def _compile(pattern: Pattern | None) -> re.Pattern[str] | None:
    if pattern is None or isinstance(pattern, re.Pattern):
        return pattern
    return re.compile(pattern)


def scan_directory(
    path: str | Path,
    matches: Pattern | None = None,
    ignores: Pattern | None = None,
) -> list[str]:
    """
    Recursively list files under `path`, joined onto `path`.

    Patterns are searched against the file name only. Directories are
    always descended into, in name order, at the point they are reached.
    Symlinks are reported as entries and never followed.
    """
    match_re = _compile(matches)
    ignore_re = _compile(ignores)
    return _scan(str(path), match_re, ignore_re)


def _scan(path: str, matches: re.Pattern[str] | None, ignores: re.Pattern[str] | None) -> list[str]:
    with os.scandir(path) as it:
        entries = sorted(it, key=lambda e: e.name)

    out: list[str] = []
    for entry in entries:
        full = os.path.join(path, entry.name)
        # links are listed, not followed
        if entry.is_dir(follow_symlinks=False):
            out.extend(_scan(full, matches, ignores))
            continue
        if ignores is not None and ignores.search(entry.name):
            continue
        if matches is not None and not matches.search(entry.name):
            continue
        out.append(full)

    return out


def join_path(*parts: str | Path) -> str:
    return os.path.normpath(os.path.join(*parts))


def extension(path: str | Path, ext: str) -> str:
    """Replace the extension of `path` with `ext` (e.g. ".o")."""
    root, _ = os.path.splitext(str(path))
    return root + ext


def just_file(path: str | Path) -> str:
    return os.path.basename(path)
