"""Helpers for locating configuration files on each platform."""

from __future__ import annotations

import os
import sys
from pathlib import Path

CONFIG_FILENAME = "askme.yml"


def _platform(platform: str | None) -> str:
    return sys.platform if platform is None else platform


def global_config_path(platform: str | None = None) -> Path | None:
    """Return the system-wide configuration path for the running platform.

    Windows resolves under ``%ProgramData%`` and yields ``None`` when that
    variable is unset; macOS uses ``/Library/Application Support``; every
    other platform uses ``/etc``.
    """

    name = _platform(platform)
    if name == "win32":
        program_data = os.environ.get("ProgramData")
        if not program_data:
            return None
        return Path(program_data) / "askme" / CONFIG_FILENAME
    if name == "darwin":
        return Path("/Library/Application Support/askme") / CONFIG_FILENAME
    return Path("/etc") / CONFIG_FILENAME


def user_config_dir(platform: str | None = None) -> Path | None:
    """Return the per-user configuration directory, if one can be determined."""

    name = _platform(platform)
    if name == "win32":
        app_data = os.environ.get("APPDATA")
        return Path(app_data) if app_data else None

    try:
        home = Path.home()
    except RuntimeError:
        return None

    if name == "darwin":
        return home / "Library" / "Application Support"

    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config and Path(xdg_config).is_absolute():
        return Path(xdg_config)
    return home / ".config"


def local_config_candidates(cwd: Path | None = None) -> list[Path]:
    """Return implicit local config locations in priority order."""

    base = Path.cwd() if cwd is None else cwd
    candidates = [base / CONFIG_FILENAME]
    user_dir = user_config_dir()
    if user_dir is not None:
        candidates.append(user_dir / CONFIG_FILENAME)
    return candidates
