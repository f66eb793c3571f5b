"""
Colour palette for terminal output.

Every logical colour name maps to one PaletteEntry holding its rendering in
each colour model: Windows console attribute, 4-bit SGR code, its bright
4-bit variant, and an 8-bit (256 colour) index.
"""

from typing import NamedTuple, Optional


class PaletteEntry(NamedTuple):
    native: int        # Console attribute (0-15)
    ansi4: int         # SGR foreground code (30-37, 90-97)
    ansi4_bright: int  # SGR code used when the line is bold
    ansi8: int         # 256-colour index


DEFAULT_FOREGROUND = "Gray"
NO_BACKGROUND = "None"

PALETTE: dict[str, PaletteEntry] = {
    # Base console colours
    "Black": PaletteEntry(0, 30, 90, 0),
    "DarkBlue": PaletteEntry(1, 34, 94, 4),
    "DarkGreen": PaletteEntry(2, 32, 92, 2),
    "DarkCyan": PaletteEntry(3, 36, 96, 6),
    "DarkRed": PaletteEntry(4, 31, 91, 1),
    "DarkMagenta": PaletteEntry(5, 35, 95, 5),
    "DarkYellow": PaletteEntry(6, 33, 93, 3),
    "Gray": PaletteEntry(7, 37, 97, 7),
    "DarkGray": PaletteEntry(8, 90, 37, 8),
    "Blue": PaletteEntry(9, 94, 94, 12),
    "Green": PaletteEntry(10, 92, 92, 10),
    "Cyan": PaletteEntry(11, 96, 96, 14),
    "Red": PaletteEntry(12, 91, 91, 9),
    "Magenta": PaletteEntry(13, 95, 95, 13),
    "Yellow": PaletteEntry(14, 93, 93, 11),
    "White": PaletteEntry(15, 97, 97, 15),
    # Extended shades (nearest base colour outside 8-bit mode)
    "LightBlue": PaletteEntry(9, 94, 94, 117),
    "LightGreen": PaletteEntry(10, 92, 92, 120),
    "LightCyan": PaletteEntry(11, 96, 96, 159),
    "LightRed": PaletteEntry(12, 91, 91, 210),
    "LightMagenta": PaletteEntry(13, 95, 95, 213),
    "LightYellow": PaletteEntry(14, 93, 93, 229),
    "LightGray": PaletteEntry(7, 37, 97, 250),
    "Orange": PaletteEntry(6, 33, 93, 214),
    "DarkOrange": PaletteEntry(6, 33, 93, 208),
    "Gold": PaletteEntry(14, 93, 93, 220),
    "Pink": PaletteEntry(13, 95, 95, 218),
    "Purple": PaletteEntry(5, 35, 95, 129),
    "Violet": PaletteEntry(13, 95, 95, 177),
    "Teal": PaletteEntry(3, 36, 96, 30),
    "Navy": PaletteEntry(1, 34, 94, 17),
    "Maroon": PaletteEntry(4, 31, 91, 88),
    "Olive": PaletteEntry(6, 33, 93, 100),
    "Lime": PaletteEntry(10, 92, 92, 118),
    "Silver": PaletteEntry(7, 37, 97, 145),
    "Brown": PaletteEntry(6, 33, 93, 130),
}

_LOOKUP = {name.lower(): name for name in PALETTE}

ANSI4_FOREGROUND_CODES = frozenset(range(30, 38)) | frozenset(range(90, 98))
ANSI8_RANGE = range(0, 256)


def resolve_color_name(name: str) -> Optional[str]:
    """Canonical palette spelling of name (case-insensitive), or None."""
    if not isinstance(name, str):
        return None
    return _LOOKUP.get(name.strip().lower())


def brighten(name: str) -> str:
    """
    Brighter palette neighbour of a colour, used for bold lines in 8-bit mode.

    "DarkRed" -> "Red", "Red" -> "LightRed"; names without a brighter
    neighbour come back unchanged.
    """
    if name.startswith("Dark") and name[4:] in PALETTE:
        return name[4:]
    if f"Light{name}" in PALETTE:
        return f"Light{name}"
    return name


class Colors:
    """Raw escape codes for fixed chrome that bypasses the renderer."""
    RESET = "\x1b[0m"
    BOLD = "\x1b[1m"
    DIM = "\x1b[2m"
    CLEAR = "\x1b[2J\x1b[H"


class Theme:
    """Palette names for the menu chrome."""
    BORDER = "Purple"
    TITLE = "White"
    POINTER = "Pink"
    SELECTED = "White"
    HOTKEY = "Violet"
    MUTED = "DarkGray"
    VALUE = "Cyan"
    BACK = "DarkYellow"
    QUIT = "DarkRed"
