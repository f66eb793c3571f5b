"""
Application controller.

Connects to the mailbox service, runs the main menu loop and dispatches to
the workflow screens. The operation state is cleared every time control
comes back to the main menu.
"""

from typing import Optional

from .core.errors import ConnectionFailedError
from .core.logger import get_logger
from .mailbox import MailboxService, Session
from .ui.components import messages, print_header
from .ui.screens import (
    AddPermissionScreen,
    MainAction,
    ModifyPermissionScreen,
    RemovePermissionScreen,
    ViewPermissionsScreen,
    show_main_menu,
)

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1


class CalendarApp:
    """Main application controller."""

    def __init__(self, ctx, service: MailboxService, admin_identity: str, notify_by_default: bool = True):
        self.ctx = ctx
        self.service = service
        self.admin_identity = admin_identity
        self.notify_by_default = notify_by_default
        self.session: Optional[Session] = None

    def connect(self) -> bool:
        """Open the admin session, reporting failure on screen."""
        self.ctx.clear()
        print_header(self.ctx)
        messages.status(self.ctx, f"Connecting as {self.admin_identity}...")
        try:
            self.session = self.service.connect(self.admin_identity)
        except ConnectionFailedError as e:
            logger.error(f"Connection failed: {e}")
            messages.error(self.ctx, str(e))
            return False
        return True

    def disconnect(self):
        if self.session:
            self.service.disconnect(self.session)
            self.session = None

    def screen_for(self, action: MainAction):
        if action is MainAction.VIEW:
            return ViewPermissionsScreen(self.ctx, self.service)
        if action is MainAction.ADD:
            return AddPermissionScreen(self.ctx, self.service, self.notify_by_default)
        if action is MainAction.MODIFY:
            return ModifyPermissionScreen(self.ctx, self.service)
        return RemovePermissionScreen(self.ctx, self.service)

    def main_loop(self):
        selected_index = 0  # Keep the menu position between workflows
        signed_in_as = self.session.admin_identity if self.session else self.admin_identity

        while True:
            self.ctx.state.reset()
            action, selected_index = show_main_menu(self.ctx, signed_in_as, selected_index)
            if action is None:
                break
            self.screen_for(action).run()

    def run(self) -> int:
        """Run until the user quits. Returns the process exit code."""
        if not self.connect():
            return EXIT_FAILURE

        try:
            self.main_loop()
        finally:
            self.disconnect()
            self.ctx.state.reset()

        self.ctx.renderer.line(("Goodbye!", "Gray"), lines_before=1)
        return EXIT_OK
