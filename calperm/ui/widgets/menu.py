"""
Menu system for Calendar Permission Manager.

Provides interactive terminal menus with arrow key navigation. A menu blocks
until exactly one outcome is reached: an option was selected, the Back or
Quit entry was chosen, or Esc cancelled.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional, Union

from ..components import border, box_chars, pad, split_padding
from ..components.header import print_header
from ..components.status import print_status_bar
from ..primitives import (
    KEY_DOWN,
    KEY_ENTER,
    KEY_ESC,
    KEY_LEFT,
    KEY_RIGHT,
    KEY_UP,
    Style,
    Theme,
)
from ...core.formatting import truncate


class MenuOutcome(Enum):
    SELECT = "select"
    BACK = "back"
    QUIT = "quit"
    CANCEL = "cancel"


ITEM_OPTION = "option"
ITEM_BACK = "back"
ITEM_QUIT = "quit"


@dataclass
class MenuItem:
    label: str
    value: Any = None
    description: Optional[str] = None
    color: Optional[str] = None  # Palette name for the label
    kind: str = ITEM_OPTION      # "option", "back" or "quit"

    def __post_init__(self):
        if self.value is None:
            self.value = self.label


@dataclass
class MenuResult:
    """Result from a menu run."""
    outcome: MenuOutcome
    index: Optional[int] = None
    item: Optional[MenuItem] = None

    @property
    def value(self):
        return self.item.value if self.item else None

    @property
    def selected(self) -> bool:
        return self.outcome is MenuOutcome.SELECT


PreviewLines = list  # list of lines; a line is a list of (text, colour) segments
PreviewSource = Union[PreviewLines, Callable[[MenuItem], PreviewLines], None]


@dataclass
class Menu:
    """Interactive terminal menu with arrow key navigation."""

    title: str = ""
    items: list = field(default_factory=list)
    subtitle: str = ""
    footer: str = ""
    allow_back: bool = False
    allow_quit: bool = False
    back_label: str = "Back"
    quit_label: str = "Quit"
    show_status: bool = True
    preview: PreviewSource = None  # Static lines, or built from the highlighted item
    summary: list = field(default_factory=list)  # (label, value[, colour]) rows
    min_width: int = 40
    _selected: int = 0

    def add_item(self, item: MenuItem):
        self.items.append(item)

    @property
    def selected_index(self) -> int:
        return self._selected

    def entries(self) -> list[MenuItem]:
        """Caller items followed by the Back / Quit entries the flags enable."""
        entries = list(self.items)
        if self.allow_back:
            entries.append(MenuItem(self.back_label, kind=ITEM_BACK))
        if self.allow_quit:
            entries.append(MenuItem(self.quit_label, kind=ITEM_QUIT))
        return entries

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _width(self, ctx, entries: list[MenuItem]) -> int:
        w = self.min_width
        if self.title:
            w = max(w, len(self.title) + 8)
        if self.subtitle:
            w = max(w, len(self.subtitle) + 8)
        if self.footer:
            w = max(w, len(self.footer) + 8)
        for item in entries:
            length = len(item.label) + (len(item.description) + 3 if item.description else 0) + 8
            w = max(w, length)
        return max(12, min(w + 4, ctx.width - 2))

    def _row(self, ctx, w: int, parts: list, visible: int):
        """Print one bordered content row; visible is the plain length of parts."""
        v = box_chars().v
        ctx.renderer.line(
            (f"{v} ", Theme.BORDER),
            *parts,
            " " * pad(w - 4, visible),
            (f" {v}", Theme.BORDER),
        )

    def _centered_row(self, ctx, w: int, text: str, color: str, styles=()):
        text = truncate(text, w - 4)
        left, right = split_padding(w - 4, len(text))
        self._row(ctx, w, [" " * left, (text, color, None, styles), " " * right], w - 4)

    def _render_item(self, ctx, index: int, item: MenuItem, w: int):
        selected = index == self._selected
        prefix = ("▸ ", Theme.POINTER) if selected else ("  ", None)

        desc_len = len(item.description) + 3 if item.description else 0
        max_label_len = w - 4 - 2 - desc_len - 1
        label_text = truncate(item.label, max_label_len) if max_label_len > 3 else item.label

        if item.kind == ITEM_BACK:
            color = Theme.BACK
        elif item.kind == ITEM_QUIT:
            color = Theme.QUIT
        else:
            color = item.color or (Theme.SELECTED if selected else None)
        styles = (Style.BOLD,) if selected else ()

        parts = [prefix, (label_text, color, None, styles)]
        visible = 2 + len(label_text)
        if item.description:
            parts.append((f" ({item.description})", Theme.MUTED))
            visible += desc_len
        self._row(ctx, w, parts, visible)

    def _preview_lines(self, entries: list[MenuItem]) -> PreviewLines:
        if callable(self.preview):
            item = entries[self._selected]
            return self.preview(item) if item.kind == ITEM_OPTION else []
        return self.preview or []

    def _render(self, ctx, entries: list[MenuItem]):
        """Clear screen and render the full menu."""
        r = ctx.renderer
        ctx.clear()
        print_header(ctx)

        # Decorations above the box, in fixed order
        if self.show_status:
            print_status_bar(ctx)

        preview = self._preview_lines(entries)
        if preview:
            r.line(("Preview", Theme.MUTED, None, (Style.UNDERLINE,)), spaces=2)
            for segments in preview:
                r.line(*segments, spaces=4)
            r.newline()

        if self.summary:
            label_width = max(len(row[0]) for row in self.summary)
            for row in self.summary:
                label, value = row[0], row[1]
                color = row[2] if len(row) > 2 else Theme.VALUE
                r.line(
                    (label + " " * pad(label_width, len(label)) + " : ", Theme.MUTED),
                    (str(value), color),
                    spaces=2,
                )
            r.newline()

        w = self._width(ctx, entries)
        top, divider, bottom = border(w)

        r.line((top, Theme.BORDER))

        if self.title:
            self._centered_row(ctx, w, self.title, Theme.TITLE, (Style.BOLD,))
            if self.subtitle:
                self._centered_row(ctx, w, self.subtitle, Theme.MUTED)
            r.line((divider, Theme.BORDER))

        for i, item in enumerate(entries):
            if i > 0 and item.kind != ITEM_OPTION and entries[i - 1].kind == ITEM_OPTION:
                r.line((divider, Theme.BORDER))
            self._render_item(ctx, i, item, w)

        if self.footer:
            r.line((divider, Theme.BORDER))
            self._centered_row(ctx, w, self.footer, Theme.MUTED)

        r.line((bottom, Theme.BORDER))

        r.line(
            ("↑/↓ Navigate  ", Theme.MUTED),
            ("Enter", Theme.HOTKEY), (" Select  ", Theme.MUTED),
            ("Esc", Theme.HOTKEY), (" Cancel", Theme.MUTED),
            spaces=2,
        )

    # ------------------------------------------------------------------
    # Input loop
    # ------------------------------------------------------------------

    def run(self, ctx, initial_index: int = 0) -> MenuResult:
        """
        Run the menu until an outcome is reached.

        Args:
            ctx: UIContext to draw on and read keys from
            initial_index: Index to start selection at (for maintaining position)

        Raises:
            ValueError: If the menu has no entries at all
        """
        entries = self.entries()
        if not entries:
            raise ValueError("Menu has no entries")

        self._selected = initial_index if 0 <= initial_index < len(entries) else 0

        while True:
            # Entries (and so the box width) are rebuilt on every frame
            entries = self.entries()
            self._render(ctx, entries)

            key = ctx.keys.read_key()

            if key == KEY_ESC:
                return MenuResult(MenuOutcome.CANCEL)

            elif key in (KEY_UP, KEY_LEFT):
                self._selected = (self._selected - 1) % len(entries)

            elif key in (KEY_DOWN, KEY_RIGHT):
                self._selected = (self._selected + 1) % len(entries)

            elif key == KEY_ENTER:
                item = entries[self._selected]
                if item.kind == ITEM_BACK:
                    return MenuResult(MenuOutcome.BACK, self._selected, item)
                if item.kind == ITEM_QUIT:
                    return MenuResult(MenuOutcome.QUIT, self._selected, item)
                return MenuResult(MenuOutcome.SELECT, self._selected, item)
