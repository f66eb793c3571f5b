"""
User interface package.

Layers, bottom up:
- primitives: colours, terminal detection, keyboard input, styled rendering
- components: non-interactive building blocks (boxes, header, tables)
- widgets: interactive menu, confirm dialog and validated input
- screens: the main menu and the permission workflows
"""

from .context import UIContext

# Note: screens imported lazily so the primitives can be used without
# pulling in the mailbox layer


def __getattr__(name):
    """Lazy import for screens."""
    if name in ("show_main_menu", "MainAction", "ViewPermissionsScreen", "AddPermissionScreen",
                "ModifyPermissionScreen", "RemovePermissionScreen"):
        from . import screens
        return getattr(screens, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "UIContext",
    # Screens (lazy loaded)
    "show_main_menu",
    "MainAction",
    "ViewPermissionsScreen",
    "AddPermissionScreen",
    "ModifyPermissionScreen",
    "RemovePermissionScreen",
]
