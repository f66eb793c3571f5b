"""
Application header component.

Double-bordered banner with the app name and version.
"""

from ..primitives import Style, Theme
from .box import border, box_chars
from .layout import split_padding

HEADER_WIDTH = 48


def print_header(ctx):
    """Print the banner. Call once after ctx.clear()."""
    from ... import APP_NAME, __version__

    r = ctx.renderer
    width = max(HEADER_WIDTH, len(APP_NAME) + 6)
    top, _, bottom = border(width, "double")
    v = box_chars("double").v

    r.line((top, Theme.BORDER))
    for text, color, styles in (
        (APP_NAME, Theme.TITLE, (Style.BOLD,)),
        (f"v{__version__}", Theme.MUTED, ()),
    ):
        left, right = split_padding(width - 2, len(text))
        r.line(
            (v, Theme.BORDER),
            " " * left,
            (text, color, None, styles),
            " " * right,
            (v, Theme.BORDER),
        )
    r.line((bottom, Theme.BORDER))
    r.newline()
