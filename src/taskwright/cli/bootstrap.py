# src/taskwright/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- builds the Builder from injected settings,
- loads the user's build script and lets it register tasks/options.
"""

from __future__ import annotations

import importlib.util
import logging
from pathlib import Path

from ..builder import Builder
from ..config import Settings, get_settings
from ..core.errors import ErrorKind

logger = logging.getLogger(__name__)


def create_builder(*, settings: Settings | None = None) -> Builder:
    """
    Create a Builder from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()
    return Builder(settings)


def load_build_script(builder: Builder, path: str | Path) -> Builder:
    """
    Import a build script and hand it the builder.

    The script either defines `configure(builder)` or creates its own
    module-level `builder`; in the latter case that Builder is returned.
    """
    path = Path(path)
    if not path.is_file():
        builder.fatal(f'Build script "{path}" not found', kind=ErrorKind.USAGE)

    spec = importlib.util.spec_from_file_location(f"_taskwright_build_{path.stem}", path)
    if spec is None or spec.loader is None:
        builder.fatal(f'Cannot load build script "{path}"', kind=ErrorKind.USAGE)

    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    logger.debug("Loaded build script %s", path)

    configure = getattr(module, "configure", None)
    if callable(configure):
        configure(builder)
        return builder

    own = getattr(module, "builder", None)
    if isinstance(own, Builder):
        return own

    builder.fatal(f'"{path}" defines neither configure(builder) nor a module-level builder', kind=ErrorKind.USAGE)
