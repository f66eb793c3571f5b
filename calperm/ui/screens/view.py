"""
View screen - lists who has access to a calendar.
"""

from ..components import print_table
from ..primitives import Style, Theme
from ..widgets import pause
from ...mailbox import PermissionEntry
from ...permissions import access_level_color, format_sharing_flags
from .common import WorkflowScreen


class ViewPermissionsScreen(WorkflowScreen):
    """Read-only table of a calendar's permission entries."""

    action = "View permissions"

    def steps(self) -> bool:
        calendar = self.calendar_target()
        if not calendar:
            return False

        self.ctx.state.set(step="Permissions")
        entries = self.service.list_permissions(calendar.folder_path)

        r = self.ctx.renderer
        self.message_screen()
        r.line((calendar.folder_path, Theme.TITLE, None, (Style.BOLD,)), spaces=2)
        r.newline()

        if entries:
            print_table(self.ctx, ["User", "Access", "Sharing"], [_row(e) for e in entries])
        else:
            r.line(("No permission entries", Theme.MUTED), spaces=2)

        pause(self.ctx)
        return True


def _row(entry: PermissionEntry) -> list:
    color = access_level_color(entry.access_rights)
    return [
        entry.label,
        (entry.access_rights, color),
        (format_sharing_flags(entry.sharing_flags), Theme.MUTED),
    ]
