# src/taskwright/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object per build invocation, passed explicitly to the state.
- Malformed values never crash a build script; they fall back to defaults.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import find_dotenv, load_dotenv

ENV_PREFIX = "TASKWRIGHT"

DEFAULT_REMOTE_HOST = "127.0.0.1"
DEFAULT_REMOTE_PORT = 8086


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Optional[Path]) -> Optional[Path]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str = "taskwright"
    log_level: str = "INFO"
    log_dir: Optional[Path] = None

    # ---- Global switches ----
    verbose: bool = False
    allow_external: bool = False

    # ---- Remote dispatch ----
    remote_host: str = DEFAULT_REMOTE_HOST
    remote_port: int = DEFAULT_REMOTE_PORT

    # ---- Build script ----
    build_file: Path = Path("build.py")

    @staticmethod
    def from_env(*, load_env_file: bool = True) -> "Settings":
        if load_env_file:
            load_dotenv(find_dotenv(usecwd=True), override=False)

        return Settings(
            app_name=_env(_k("APP_NAME"), "taskwright") or "taskwright",
            log_level=_env(_k("LOG_LEVEL"), "INFO"),
            log_dir=_env_path(_k("LOG_DIR"), None),
            verbose=_env_bool(_k("VERBOSE"), False),
            allow_external=_env_bool(_k("ALLOW_EXTERNAL"), False),
            remote_host=_env(_k("REMOTE_HOST"), DEFAULT_REMOTE_HOST).strip() or DEFAULT_REMOTE_HOST,
            remote_port=_env_int(_k("REMOTE_PORT"), DEFAULT_REMOTE_PORT),
            build_file=_env_path(_k("BUILD_FILE"), Path("build.py")) or Path("build.py"),
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    """Process default settings, read from the environment on first use."""
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = Settings.from_env()
    return _SETTINGS
