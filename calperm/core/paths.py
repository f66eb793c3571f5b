"""
Filesystem locations for settings and logs.
"""

import os
import sys
from pathlib import Path


def get_app_dir() -> Path:
    """Get the directory where the app is located (for user-writable files)."""
    if getattr(sys, "frozen", False):
        return Path(sys.executable).parent
    return Path(__file__).parent.parent.parent


def get_bundle_dir() -> Path:
    """Get the directory where bundled resources are located (PyInstaller)."""
    if getattr(sys, "frozen", False):
        # PyInstaller extracts bundled files to _MEIPASS temp directory
        return Path(sys._MEIPASS)
    return Path(__file__).parent.parent.parent


def get_settings_path() -> Path:
    """Get path to the settings file."""
    return get_app_dir() / "settings.json"


def get_log_dir() -> Path:
    """Get the log directory (CALPERM_LOG_DIR wins over the default)."""
    override = os.environ.get("CALPERM_LOG_DIR", "")
    if override:
        return Path(override)
    return get_app_dir() / "logs"
