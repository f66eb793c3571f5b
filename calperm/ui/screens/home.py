"""
Home screen - main menu of the application.
"""

from enum import Enum
from typing import Optional

from ..widgets import Menu, MenuItem


class MainAction(Enum):
    VIEW = "view"
    ADD = "add"
    MODIFY = "modify"
    REMOVE = "remove"


MAIN_MENU_ITEMS = (
    (MainAction.VIEW, "View permissions", "See who can access a calendar", "Cyan"),
    (MainAction.ADD, "Add permission", "Give a user access", "Green"),
    (MainAction.MODIFY, "Modify permission", "Change a user's access level", "Yellow"),
    (MainAction.REMOVE, "Remove permission", "Revoke a user's access", "Red"),
)


def show_main_menu(ctx, signed_in_as: str = "", selected_index: int = 0) -> tuple[Optional[MainAction], int]:
    """
    Show the main menu.

    Returns:
        (action, menu_position); action is None when the user quits
    """
    menu = Menu(
        title="Main Menu",
        subtitle=f"Signed in as {signed_in_as}" if signed_in_as else "",
        items=[MenuItem(label, value=action, description=desc, color=color)
               for action, label, desc, color in MAIN_MENU_ITEMS],
        allow_quit=True,
        show_status=False,
    )
    result = menu.run(ctx, initial_index=selected_index)
    position = result.index if result.index is not None else selected_index

    # Esc on the main menu quits like the Quit entry
    if not result.selected:
        return None, position
    return result.value, position
