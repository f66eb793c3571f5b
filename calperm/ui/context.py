"""
UI context: everything a screen needs to draw itself and read input.

One UIContext is built at startup and passed to every menu, prompt and
workflow, instead of reaching for process-wide globals.
"""

import sys
from dataclasses import dataclass

from .. import APP_NAME
from ..core.state import OperationStateTracker
from .primitives import (
    CapabilityMode,
    KeyReader,
    StyledTextRenderer,
    TerminalKeyReader,
    clear_screen,
    detect_capability,
    set_window_title,
)


@dataclass
class UIContext:
    renderer: StyledTextRenderer
    keys: KeyReader
    state: OperationStateTracker
    clear_between_screens: bool = True

    @property
    def mode(self) -> CapabilityMode:
        return self.renderer.mode

    @property
    def width(self) -> int:
        return self.renderer.width

    def clear(self):
        """Clear the screen before drawing a new frame."""
        if self.clear_between_screens:
            clear_screen(self.renderer.mode, self.renderer.stream)

    @classmethod
    def create(cls, settings, stream=None, keys: KeyReader = None) -> "UIContext":
        """Build the context for a real terminal session."""
        stream = stream or sys.stdout
        env = {"CALPERM_COLOR": settings.color_mode} if settings.color_mode else None
        mode = detect_capability(env=env, stream=stream)
        renderer = StyledTextRenderer(mode, stream=stream, log_dir=settings.resolved_log_dir)

        def push_title(title: str):
            set_window_title(title, mode, stream, renderer.console)

        state = OperationStateTracker(APP_NAME, on_change=push_title)
        return cls(renderer=renderer, keys=keys or TerminalKeyReader(), state=state)
