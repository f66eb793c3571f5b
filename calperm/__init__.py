"""
Calendar Permission Manager - administer calendar sharing on hosted mailboxes.

Interactive console tool for viewing, granting, changing and revoking
calendar folder permissions through the mailbox service's admin API.

Import from submodules directly:
    from calperm.config import AppSettings
    from calperm.mailbox import GraphMailboxService
    from calperm.ui.widgets import Menu, InputPrompt
    from calperm.app import CalendarApp
"""


def _get_version():
    """Read version from VERSION file."""
    from pathlib import Path
    from .core.paths import get_bundle_dir
    # Source checkout first, then the frozen bundle
    for base in [Path(__file__).parent.parent, get_bundle_dir()]:
        version_file = base / "VERSION"
        if version_file.exists():
            return version_file.read_text().strip()
    return "0.0.0"


__version__ = _get_version()

APP_NAME = "Calendar Permission Manager"
