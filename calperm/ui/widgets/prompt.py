"""
Validated text input.

Free-text entry, then validation, then a Confirm / Retry / Cancel menu:

    input -> validate --(invalid)--> input
                 |
                 v
           confirm menu --Retry--> input
                 |--Confirm--> value
                 |--Cancel / Esc--> cancelled
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..components.header import print_header
from ..components.status import print_status_bar
from ..primitives import Style, Theme
from ...core.errors import CancelInput
from ...core.validation import is_valid_email
from .menu import Menu, MenuItem


class ValidationKind(Enum):
    NONE = "none"
    EMAIL = "email"


class ConfirmationChoice(Enum):
    CONFIRM = "confirm"
    RETRY = "retry"
    CANCEL = "cancel"


@dataclass
class PromptResult:
    value: Optional[str] = None
    cancelled: bool = False

    @classmethod
    def cancel(cls) -> "PromptResult":
        return cls(value=None, cancelled=True)

    @property
    def ok(self) -> bool:
        return not self.cancelled


@dataclass
class InputPrompt:
    """A single validated text field."""
    prompt: str
    title: str = ""
    validation: ValidationKind = ValidationKind.NONE
    allow_empty: bool = False
    help_text: str = ""
    show_status: bool = True

    def validate(self, value: str) -> Optional[str]:
        """Error message for value, or None if it is acceptable."""
        if not value:
            return None if self.allow_empty else "A value is required."
        if self.validation is ValidationKind.EMAIL and not is_valid_email(value):
            return f"'{value}' is not a valid email address."
        return None

    def run(self, ctx) -> PromptResult:
        """Collect a value. Esc while typing or Cancel in the confirm step cancels."""
        error = None

        while True:
            self._render(ctx, error)
            try:
                raw = ctx.keys.read_line(echo=ctx.renderer.write)
            except CancelInput:
                return PromptResult.cancel()

            value = raw.strip()
            error = self.validate(value)
            if error:
                continue

            choice = self.confirm(ctx, value)
            if choice is ConfirmationChoice.CONFIRM:
                return PromptResult(value=value)
            if choice is ConfirmationChoice.CANCEL:
                return PromptResult.cancel()
            # Retry: back to input with a clean slate

    def confirm(self, ctx, value: str) -> ConfirmationChoice:
        """Confirm / Retry / Cancel sub-menu for an entered value."""
        menu = Menu(
            title=self.title or self.prompt,
            subtitle=f"You entered: {value}" if value else "You entered nothing",
            items=[
                MenuItem("Confirm", value=ConfirmationChoice.CONFIRM, color="Green"),
                MenuItem("Retry", value=ConfirmationChoice.RETRY, color="Yellow"),
                MenuItem("Cancel", value=ConfirmationChoice.CANCEL, color="Red"),
            ],
            show_status=self.show_status,
        )
        result = menu.run(ctx)
        if not result.selected:
            return ConfirmationChoice.CANCEL
        return result.value

    def _render(self, ctx, error: Optional[str]):
        r = ctx.renderer
        ctx.clear()
        print_header(ctx)
        if self.show_status:
            print_status_bar(ctx)

        if self.title:
            r.line((self.title, Theme.TITLE, None, (Style.BOLD,)), spaces=2)
        if self.help_text:
            r.line((self.help_text, Theme.MUTED), spaces=2)
        r.line(("Press Esc to cancel", Theme.MUTED), spaces=2)
        r.newline()

        if error:
            r.line(("✗ ", "Red"), (error, "Red"), spaces=2)
            r.newline()

        r.line((f"{self.prompt}: ", Theme.VALUE), spaces=2, no_newline=True)


def pause(ctx, message: str = "Press any key to continue...") -> str:
    """Wait for one key press before handing control back."""
    ctx.renderer.line((message, Theme.MUTED), spaces=2, lines_before=1, no_newline=True)
    key = ctx.keys.read_key()
    ctx.renderer.newline()
    return key
