"""
Box drawing primitives.

Unicode box-drawing characters and helpers for rendering bordered UI elements.
"""

from typing import NamedTuple


class BoxChars(NamedTuple):
    tl: str   # Top-left
    tr: str   # Top-right
    bl: str   # Bottom-left
    br: str   # Bottom-right
    h: str    # Horizontal
    v: str    # Vertical
    ml: str   # Left T-junction (dividers)
    mr: str   # Right T-junction (dividers)


BOX_STYLES = {
    "rounded": BoxChars("╭", "╮", "╰", "╯", "─", "│", "├", "┤"),
    "single": BoxChars("┌", "┐", "└", "┘", "─", "│", "├", "┤"),
    "double": BoxChars("╔", "╗", "╚", "╝", "═", "║", "╠", "╣"),
    "heavy": BoxChars("┏", "┓", "┗", "┛", "━", "┃", "┣", "┫"),
    "ascii": BoxChars("+", "+", "+", "+", "-", "|", "+", "+"),
}

DEFAULT_BOX_STYLE = "rounded"


def box_chars(style: str = DEFAULT_BOX_STYLE) -> BoxChars:
    """Character set for a border style (unknown styles fall back to rounded)."""
    return BOX_STYLES.get(style, BOX_STYLES[DEFAULT_BOX_STYLE])


def box_row(left: str, fill: str, right: str, width: int) -> str:
    """
    Create a box row.

    Args:
        left: Left border character
        fill: Fill character (repeated)
        right: Right border character
        width: Total width including borders

    Returns:
        String of exactly max(width, 2) characters
    """
    return f"{left}{fill * max(0, width - 2)}{right}"


def border(width: int, style: str = DEFAULT_BOX_STYLE) -> tuple[str, str, str]:
    """Top, divider and bottom rows of a box, each exactly width wide."""
    c = box_chars(style)
    return (
        box_row(c.tl, c.h, c.tr, width),
        box_row(c.ml, c.h, c.mr, width),
        box_row(c.bl, c.h, c.br, width),
    )
