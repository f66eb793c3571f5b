"""
Application screens.

The main menu and one screen per permission workflow.
"""

from .home import MAIN_MENU_ITEMS, MainAction, show_main_menu
from .common import WorkflowScreen, choose_access_level, choose_delegate, choose_level_and_flags
from .view import ViewPermissionsScreen
from .add import AddPermissionScreen
from .modify import ModifyPermissionScreen
from .remove import RemovePermissionScreen

__all__ = [
    "MAIN_MENU_ITEMS",
    "MainAction",
    "show_main_menu",
    "WorkflowScreen",
    "choose_access_level",
    "choose_delegate",
    "choose_level_and_flags",
    "ViewPermissionsScreen",
    "AddPermissionScreen",
    "ModifyPermissionScreen",
    "RemovePermissionScreen",
]
