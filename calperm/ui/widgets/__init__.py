"""
Interactive UI widgets.

Reusable interactive components with their own input handling and state.
"""

from .menu import (
    Menu,
    MenuItem,
    MenuOutcome,
    MenuResult,
    ITEM_OPTION,
    ITEM_BACK,
    ITEM_QUIT,
)
from .confirm import ConfirmDialog
from .prompt import (
    InputPrompt,
    PromptResult,
    ValidationKind,
    ConfirmationChoice,
    pause,
)

__all__ = [
    # Menu
    "Menu",
    "MenuItem",
    "MenuOutcome",
    "MenuResult",
    "ITEM_OPTION",
    "ITEM_BACK",
    "ITEM_QUIT",
    # Confirm
    "ConfirmDialog",
    # Prompt
    "InputPrompt",
    "PromptResult",
    "ValidationKind",
    "ConfirmationChoice",
    "pause",
]
