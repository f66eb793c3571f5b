"""
Configuration management for Calendar Permission Manager.

Config file:
- settings.json (next to the app): tenant/app registration for sign-in,
  logging, and display preferences.

Environment variables override the file:
- CALPERM_TENANT_ID, CALPERM_CLIENT_ID: app registration used for sign-in
- CALPERM_ACCESS_TOKEN: pre-acquired bearer token (skips interactive sign-in)
- CALPERM_LOG_DIR: log directory
- CALPERM_COLOR: force a colour mode (none, native, 4bit, 8bit)
"""

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .core.paths import get_log_dir, get_settings_path

DEFAULT_CLIENT_ID = "14d82eec-204b-4c2f-b7e8-296a70dab67e"  # Microsoft Graph Command Line Tools
DEFAULT_TENANT = "organizations"
COLOR_MODES = ("none", "native", "4bit", "8bit")


@dataclass
class AppSettings:
    """User-editable settings."""
    tenant_id: str = DEFAULT_TENANT
    client_id: str = DEFAULT_CLIENT_ID
    log_dir: str = ""
    log_level: str = "INFO"
    color_mode: str = ""  # Empty means auto-detect
    notify_by_default: bool = True
    access_token: str = ""  # Never written to disk
    path: Optional[Path] = None

    def to_dict(self) -> dict:
        return {
            "tenant_id": self.tenant_id,
            "client_id": self.client_id,
            "log_dir": self.log_dir,
            "log_level": self.log_level,
            "color_mode": self.color_mode,
            "notify_by_default": self.notify_by_default,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "AppSettings":
        color_mode = str(data.get("color_mode", "")).lower()
        return cls(
            tenant_id=data.get("tenant_id", DEFAULT_TENANT) or DEFAULT_TENANT,
            client_id=data.get("client_id", DEFAULT_CLIENT_ID) or DEFAULT_CLIENT_ID,
            log_dir=data.get("log_dir", ""),
            log_level=data.get("log_level", "INFO"),
            color_mode=color_mode if color_mode in COLOR_MODES else "",
            notify_by_default=bool(data.get("notify_by_default", True)),
        )

    @classmethod
    def load(cls, path: Path = None, environ: dict = None) -> "AppSettings":
        """Load settings from file, then apply environment overrides."""
        path = path or get_settings_path()
        environ = os.environ if environ is None else environ
        settings = cls()

        if path.exists():
            try:
                with open(path, encoding="utf-8") as f:
                    settings = cls.from_dict(json.load(f))
            except (json.JSONDecodeError, IOError, AttributeError, TypeError) as e:
                print(f"Warning: Could not load {path.name}: {e}")

        settings.path = path
        settings.apply_environment(environ)
        return settings

    def apply_environment(self, environ: dict):
        """Apply CALPERM_* environment overrides."""
        if environ.get("CALPERM_TENANT_ID"):
            self.tenant_id = environ["CALPERM_TENANT_ID"]
        if environ.get("CALPERM_CLIENT_ID"):
            self.client_id = environ["CALPERM_CLIENT_ID"]
        if environ.get("CALPERM_ACCESS_TOKEN"):
            self.access_token = environ["CALPERM_ACCESS_TOKEN"]
        if environ.get("CALPERM_LOG_DIR"):
            self.log_dir = environ["CALPERM_LOG_DIR"]
        color = environ.get("CALPERM_COLOR", "").lower()
        if color in COLOR_MODES:
            self.color_mode = color

    def save(self):
        """Save settings to file."""
        if not self.path:
            return
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2)

    @property
    def resolved_log_dir(self) -> Path:
        return Path(self.log_dir) if self.log_dir else get_log_dir()
