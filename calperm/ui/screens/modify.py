"""
Modify screen - changes the access level of an existing entry.
"""

from ..components import messages
from ..widgets import ConfirmDialog, pause
from ...permissions import format_sharing_flags
from .common import WorkflowScreen, choose_level_and_flags


class ModifyPermissionScreen(WorkflowScreen):

    action = "Modify permission"

    def steps(self) -> bool:
        calendar = self.calendar_target()
        if not calendar:
            return False

        # Backing out of any step below returns to the entry list
        while True:
            self.ctx.state.set(step="Select user", acting_user=None)
            entries = [e for e in self.service.list_permissions(calendar.folder_path) if e.user_identity]
            if not entries:
                self.message_screen()
                messages.info(self.ctx, f"No user permissions on {calendar.folder_path}")
                pause(self.ctx)
                return False

            entry = self.choose_entry(calendar, entries, "Select permission to change")
            if not entry:
                return False
            self.ctx.state.set(acting_user=entry.user_identity)

            chosen = choose_level_and_flags(self.ctx, entry.user_identity, entry.access_level)
            if not chosen:
                continue
            level, sharing_flags = chosen

            self.ctx.state.set(step="Confirm")
            summary = [
                ("Calendar", calendar.folder_path),
                ("User", entry.label),
                ("From", f"{entry.access_rights} ({format_sharing_flags(entry.sharing_flags)})"),
                ("To", f"{level} ({sharing_flags})", level.color),
            ]
            dialog = ConfirmDialog("Apply this change?", summary=summary, default_yes=True)
            if not dialog.run(self.ctx):
                continue

            notify = ConfirmDialog(f"Notify {entry.user_identity}?").run(self.ctx)
            self.service.modify_permission(calendar.folder_path, entry.user_identity, level, notify, sharing_flags)
            self.done(f"{entry.user_identity} now has {level} access to {calendar.folder_path}")
            return True
