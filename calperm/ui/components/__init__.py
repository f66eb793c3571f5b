"""
Reusable visual building blocks.

Non-interactive components for rendering UI elements.
"""

from .box import (
    BOX_STYLES,
    BoxChars,
    box_chars,
    box_row,
    border,
)
from .layout import (
    pad,
    center_offset,
    split_padding,
)

# Note: renderer-backed components imported lazily to avoid circular import
# with the primitives package (the renderer uses the layout helpers)


def __getattr__(name):
    """Lazy import for components that draw through the renderer."""
    if name == "print_header":
        from .header import print_header
        return print_header
    if name == "print_status_bar":
        from .status import print_status_bar
        return print_status_bar
    if name == "print_table":
        from .tables import print_table
        return print_table
    if name == "messages":
        import importlib
        return importlib.import_module(f"{__name__}.messages")
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    # Box drawing
    "BOX_STYLES",
    "BoxChars",
    "box_chars",
    "box_row",
    "border",
    # Layout
    "pad",
    "center_offset",
    "split_padding",
    # Renderer-backed (lazy loaded)
    "print_header",
    "print_status_bar",
    "print_table",
    "messages",
]
