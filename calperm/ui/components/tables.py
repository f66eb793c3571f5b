"""
Plain column tables.

Columns are sized to their widest cell; each cell can carry its own colour.
"""

from ..primitives import Style, Theme
from .layout import pad

COLUMN_GAP = 3


def print_table(ctx, headers: list[str], rows: list[list], indent: int = 2):
    """
    Print a table.

    Args:
        headers: Column titles
        rows: Each row is a list of cells; a cell is a string or (text, colour)
        indent: Leading spaces
    """
    cells = [[c if isinstance(c, tuple) else (str(c), None) for c in row] for row in rows]
    widths = [len(h) for h in headers]
    for row in cells:
        for i, (text, _) in enumerate(row):
            widths[i] = max(widths[i], len(text))

    r = ctx.renderer
    header_parts = []
    for i, h in enumerate(headers):
        gap = pad(widths[i], len(h)) + (COLUMN_GAP if i < len(headers) - 1 else 0)
        header_parts.append((h + " " * gap, Theme.TITLE, None, (Style.UNDERLINE,)))
    r.line(*header_parts, spaces=indent)

    for row in cells:
        parts = []
        for i, (text, color) in enumerate(row):
            gap = pad(widths[i], len(text)) + (COLUMN_GAP if i < len(row) - 1 else 0)
            parts.append((text, color))
            if gap:
                parts.append((" " * gap, None))
        r.line(*parts, spaces=indent)
