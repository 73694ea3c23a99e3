"""
Path Utilities
==============

OS-aware path handling utilities with security considerations.
"""

from __future__ import annotations

import os
import platform
import stat
from pathlib import Path
from typing import Final

APP_NAME: Final[str] = "ConfigVault"


def supports_posix_permissions() -> bool:
    """Whether chmod-style permission bits are meaningful on this OS."""
    return platform.system().lower() != "windows"


def get_app_config_dir(app_name: str = APP_NAME) -> Path:
    """
    Get the OS-appropriate application configuration directory.

    Args:
        app_name: Name of the application

    Returns:
        Path to application configuration directory
    """
    system = platform.system().lower()

    if system == "windows":
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
    elif system == "darwin":
        base = Path.home() / "Library" / "Application Support"
    else:
        base = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))

    return base / app_name


def get_app_log_dir(app_name: str = APP_NAME) -> Path:
    """Get the OS-appropriate application log directory."""
    system = platform.system().lower()

    if system == "windows":
        base = Path(os.environ.get("LOCALAPPDATA", Path.home() / "AppData" / "Local"))
        return base / app_name / "Logs"
    elif system == "darwin":
        return Path.home() / "Library" / "Logs" / app_name
    else:
        base = Path(os.environ.get("XDG_STATE_HOME", Path.home() / ".local" / "state"))
        return base / app_name / "logs"


def ensure_private_directory(path: Path) -> Path:
    """
    Create a directory (and parents) if missing.

    A directory created here is restricted to its owner (700) on
    Unix-like systems. Existing directories are left as they are.
    """
    if not path.is_dir():
        path.mkdir(mode=0o700, parents=True, exist_ok=True)
        if supports_posix_permissions():
            path.chmod(stat.S_IRWXU)
    return path


def restrict_file_permissions(path: Path) -> None:
    """Set owner read/write only (600); no-op where unsupported."""
    if supports_posix_permissions():
        path.chmod(stat.S_IRUSR | stat.S_IWUSR)
