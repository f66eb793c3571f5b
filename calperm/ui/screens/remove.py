"""
Remove screen - revokes a user's access to a calendar.
"""

from ..components import messages
from ..widgets import ConfirmDialog, pause
from .common import WorkflowScreen


class RemovePermissionScreen(WorkflowScreen):

    action = "Remove permission"

    def steps(self) -> bool:
        calendar = self.calendar_target()
        if not calendar:
            return False

        while True:
            self.ctx.state.set(step="Select user", acting_user=None)
            entries = [
                e for e in self.service.list_permissions(calendar.folder_path)
                if e.user_identity and e.removable
            ]
            if not entries:
                self.message_screen()
                messages.info(self.ctx, f"No removable permissions on {calendar.folder_path}")
                pause(self.ctx)
                return False

            entry = self.choose_entry(calendar, entries, "Select permission to remove")
            if not entry:
                return False
            self.ctx.state.set(acting_user=entry.user_identity, step="Confirm")

            dialog = ConfirmDialog(
                f"Remove {entry.user_identity}?",
                message=f"{entry.access_rights} access to {calendar.folder_path}",
            )
            if not dialog.run(self.ctx):
                continue

            self.service.revoke_permission(calendar.folder_path, entry.user_identity)
            self.done(f"Removed {entry.user_identity} from {calendar.folder_path}")
            return True
