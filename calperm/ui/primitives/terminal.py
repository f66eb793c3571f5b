"""
Terminal capability detection and low-level screen control.
"""

import os
import shutil
import sys
from enum import Enum

from ...core.logger import get_logger
from .colors import Colors

logger = get_logger(__name__)

ENABLE_VIRTUAL_TERMINAL_PROCESSING = 0x0004
STD_OUTPUT_HANDLE = -11


class CapabilityMode(Enum):
    NO_COLOR = "none"
    NATIVE_COLOR = "native"
    ANSI_4BIT = "4bit"
    ANSI_8BIT = "8bit"

    @property
    def uses_escapes(self) -> bool:
        return self in (CapabilityMode.ANSI_4BIT, CapabilityMode.ANSI_8BIT)


# Environment variables set by hosts that turn on VT processing themselves
_VT_HOST_HINTS = ("WT_SESSION", "ConEmuANSI", "TERM_PROGRAM", "ANSICON")


def detect_capability(env: dict = None, stream=None, platform: str = None) -> CapabilityMode:
    """
    Work out which styling tier the terminal supports.

    Never raises; anything unexpected ends in NO_COLOR.
    """
    env = os.environ if env is None else env
    stream = sys.stdout if stream is None else stream
    platform = platform or sys.platform

    try:
        forced = env.get("CALPERM_COLOR", "").lower()
        if forced:
            for mode in CapabilityMode:
                if mode.value == forced:
                    return mode

        if "NO_COLOR" in env:
            return CapabilityMode.NO_COLOR

        isatty = getattr(stream, "isatty", None)
        if not isatty or not isatty():
            return CapabilityMode.NO_COLOR

        if platform == "win32":
            if any(env.get(hint) for hint in _VT_HOST_HINTS):
                return CapabilityMode.ANSI_8BIT
            if enable_virtual_terminal():
                return CapabilityMode.ANSI_8BIT
            return CapabilityMode.NATIVE_COLOR

        term = env.get("TERM", "")
        if not term or term == "dumb":
            return CapabilityMode.NO_COLOR
        if "256color" in term or env.get("COLORTERM"):
            return CapabilityMode.ANSI_8BIT
        return CapabilityMode.ANSI_4BIT
    except Exception as e:
        logger.warning(f"Terminal capability detection failed: {e}")
        return CapabilityMode.NO_COLOR


def enable_virtual_terminal() -> bool:
    """Best-effort switch of a legacy Windows console into VT mode."""
    if os.name != 'nt':
        return False
    try:
        import ctypes
        from ctypes import wintypes

        kernel32 = ctypes.windll.kernel32
        handle = kernel32.GetStdHandle(STD_OUTPUT_HANDLE)
        mode = wintypes.DWORD()
        if not kernel32.GetConsoleMode(handle, ctypes.byref(mode)):
            return False
        if mode.value & ENABLE_VIRTUAL_TERMINAL_PROCESSING:
            return True
        return bool(kernel32.SetConsoleMode(handle, mode.value | ENABLE_VIRTUAL_TERMINAL_PROCESSING))
    except (AttributeError, OSError):
        return False


class NativeConsole:
    """Windows console attribute calls; a no-op everywhere else."""

    DEFAULT_ATTRIBUTES = 0x07

    def __init__(self):
        self._kernel32 = None
        self._handle = None
        if os.name == 'nt':
            try:
                import ctypes
                self._kernel32 = ctypes.windll.kernel32
                self._handle = self._kernel32.GetStdHandle(STD_OUTPUT_HANDLE)
            except (AttributeError, OSError):
                self._kernel32 = None

    def set_attributes(self, foreground: int = None, background: int = None):
        if not self._kernel32:
            return
        fg = self.DEFAULT_ATTRIBUTES if foreground is None else foreground
        bg = 0 if background is None else background
        self._kernel32.SetConsoleTextAttribute(self._handle, fg | (bg << 4))

    def reset(self):
        self.set_attributes()

    def set_title(self, title: str):
        if self._kernel32:
            self._kernel32.SetConsoleTitleW(title)


def terminal_width(default: int = 80) -> int:
    """Current terminal width in columns."""
    return shutil.get_terminal_size((default, 24)).columns


def clear_screen(mode: CapabilityMode, stream=None):
    """Clear the terminal screen."""
    stream = stream or sys.stdout
    if mode.uses_escapes:
        stream.write(Colors.CLEAR)
        stream.flush()
    elif getattr(stream, "isatty", lambda: False)():
        os.system("cls" if os.name == "nt" else "clear")


def set_window_title(title: str, mode: CapabilityMode, stream=None, console: NativeConsole = None):
    """Push a title to the terminal window (OSC 0 or the console API)."""
    stream = stream or sys.stdout
    if mode.uses_escapes:
        stream.write(f"\x1b]0;{title}\x07")
        stream.flush()
    elif mode is CapabilityMode.NATIVE_COLOR and console:
        console.set_title(title)
