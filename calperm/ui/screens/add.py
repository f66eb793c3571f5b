"""
Add screen - grants a user access to a calendar.

Target mailbox -> calendar -> grantee -> access level (-> delegate options
for Editor) -> notify? -> summary and confirm -> grant.
"""

from ..widgets import ConfirmDialog
from ...core.errors import PermissionExistsError
from .common import WorkflowScreen, choose_level_and_flags


class AddPermissionScreen(WorkflowScreen):

    action = "Add permission"

    def __init__(self, ctx, service, notify_by_default: bool = True):
        super().__init__(ctx, service)
        self.notify_by_default = notify_by_default

    def steps(self) -> bool:
        calendar = self.calendar_target()
        if not calendar:
            return False

        self.ctx.state.set(step="User")
        user = self.prompt_identity("User", "Who should get access?")
        if not user or not self.resolve(user):
            return False
        self.ctx.state.set(acting_user=user)

        chosen = choose_level_and_flags(self.ctx, user)
        if not chosen:
            return False
        level, sharing_flags = chosen

        self.ctx.state.set(step="Notify")
        notify = ConfirmDialog(
            f"Send a sharing notification to {user}?",
            default_yes=self.notify_by_default,
        ).run(self.ctx)

        self.ctx.state.set(step="Confirm")
        summary = [
            ("Calendar", calendar.folder_path),
            ("User", user),
            ("Access", level.value, level.color),
            ("Sharing", sharing_flags),
            ("Notify", "Yes" if notify else "No"),
        ]
        if not ConfirmDialog("Grant this permission?", summary=summary, default_yes=True).run(self.ctx):
            return False

        try:
            self.service.grant_permission(calendar.folder_path, user, level, notify, sharing_flags)
        except PermissionExistsError as e:
            self.fail(f"{e}. Use Modify to change it.")
            return False

        self.done(f"{user} now has {level} access to {calendar.folder_path}")
        return True
