"""
Low-level terminal primitives.

Colour palette, capability detection, keyboard input and the styled text
renderer.
"""

from .colors import PALETTE, PaletteEntry, Colors, Theme, resolve_color_name, brighten
from .terminal import (
    CapabilityMode,
    NativeConsole,
    detect_capability,
    terminal_width,
    clear_screen,
    set_window_title,
)
from .keyboard import (
    KeyReader,
    TerminalKeyReader,
    ScriptedKeyReader,
    getch,
    KEY_UP,
    KEY_DOWN,
    KEY_LEFT,
    KEY_RIGHT,
    KEY_ENTER,
    KEY_ESC,
    KEY_BACKSPACE,
    KEY_TAB,
    KEY_SPACE,
)
from .render import (
    Style,
    NoStyle,
    ForAllSegments,
    PerSegment,
    NO_STYLE,
    RenderRequest,
    StyledTextRenderer,
    resolve_log_path,
)

__all__ = [
    # Colors
    "PALETTE",
    "PaletteEntry",
    "Colors",
    "Theme",
    "resolve_color_name",
    "brighten",
    # Terminal
    "CapabilityMode",
    "NativeConsole",
    "detect_capability",
    "terminal_width",
    "clear_screen",
    "set_window_title",
    # Keyboard
    "KeyReader",
    "TerminalKeyReader",
    "ScriptedKeyReader",
    "getch",
    "KEY_UP",
    "KEY_DOWN",
    "KEY_LEFT",
    "KEY_RIGHT",
    "KEY_ENTER",
    "KEY_ESC",
    "KEY_BACKSPACE",
    "KEY_TAB",
    "KEY_SPACE",
    # Rendering
    "Style",
    "NoStyle",
    "ForAllSegments",
    "PerSegment",
    "NO_STYLE",
    "RenderRequest",
    "StyledTextRenderer",
    "resolve_log_path",
]
