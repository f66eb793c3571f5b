"""
Steps shared by the permission workflows.

Each workflow starts the same way: ask for the target mailbox, resolve it,
then pick one of its calendars. Failures are shown on screen and the user
presses a key before control returns to the main menu.
"""

from typing import Optional

from ..components import messages, print_header, print_status_bar
from ..primitives import Theme
from ..widgets import InputPrompt, Menu, MenuItem, ValidationKind, pause
from ...core.errors import MailboxNotFoundError, MailboxServiceError
from ...core.formatting import format_count, format_size
from ...core.logger import get_logger
from ...mailbox import Calendar, MailboxInfo, MailboxService, PermissionEntry
from ...permissions import AccessLevel, DelegateChoice, sample_preview

logger = get_logger(__name__)


class WorkflowScreen:
    """
    Base class for one permission workflow.

    Subclasses implement steps(); run() wraps it so any service failure is
    reported instead of escaping to the main loop.
    """

    action = ""

    def __init__(self, ctx, service: MailboxService):
        self.ctx = ctx
        self.service = service

    def run(self) -> bool:
        """Run the workflow. Returns True if a change (or view) completed."""
        self.ctx.state.set(action=self.action)
        logger.info(f"Starting: {self.action}")
        try:
            return self.steps()
        except MailboxServiceError as e:
            logger.error(f"{self.action} failed: {e}")
            self.fail(str(e))
            return False

    def steps(self) -> bool:
        raise NotImplementedError

    # ------------------------------------------------------------------
    # Screens
    # ------------------------------------------------------------------

    def message_screen(self):
        """Fresh frame for a message: header and status bar only."""
        self.ctx.clear()
        print_header(self.ctx)
        print_status_bar(self.ctx)

    def fail(self, message: str):
        self.message_screen()
        messages.error(self.ctx, message)
        pause(self.ctx)

    def done(self, message: str):
        self.ctx.state.set(step="Done")
        self.message_screen()
        messages.success(self.ctx, message)
        pause(self.ctx)

    # ------------------------------------------------------------------
    # Shared steps
    # ------------------------------------------------------------------

    def prompt_identity(self, prompt: str, title: str) -> Optional[str]:
        result = InputPrompt(
            prompt=prompt,
            title=title,
            validation=ValidationKind.EMAIL,
            help_text="Enter an email address, e.g. alice@contoso.com",
        ).run(self.ctx)
        return result.value if result.ok else None

    def resolve(self, identity: str) -> Optional[MailboxInfo]:
        """Look up a mailbox; shows the error and returns None if it does not exist."""
        try:
            return self.service.resolve_mailbox(identity)
        except MailboxNotFoundError as e:
            logger.warning(str(e))
            self.fail(str(e))
            return None

    def target_mailbox(self) -> Optional[MailboxInfo]:
        """Ask for and resolve the mailbox whose calendar is being managed."""
        self.ctx.state.set(step="Target mailbox")
        identity = self.prompt_identity("Mailbox", "Which mailbox's calendar?")
        if not identity:
            return None

        mailbox = self.resolve(identity)
        if mailbox:
            self.ctx.state.set(target_mailbox=mailbox.primary_address or identity)
        return mailbox

    def select_calendar(self, mailbox: MailboxInfo) -> Optional[Calendar]:
        """
        Pick a calendar of the mailbox.

        A mailbox with only its default calendar skips the menu.
        """
        self.ctx.state.set(step="Calendar")
        calendars = self.service.list_calendars(mailbox.primary_address or mailbox.identity)

        if not calendars:
            self.fail(f"No calendars found for {mailbox.label}")
            return None
        if len(calendars) == 1 and calendars[0].is_default:
            return calendars[0]

        menu = Menu(
            title="Select calendar",
            subtitle=mailbox.label,
            items=[MenuItem(c.name, value=c, description=_calendar_details(c)) for c in calendars],
            allow_back=True,
        )
        result = menu.run(self.ctx)
        return result.value if result.selected else None

    def calendar_target(self) -> Optional[Calendar]:
        """Target mailbox then calendar; None if the user backed out or it failed."""
        mailbox = self.target_mailbox()
        if not mailbox:
            return None
        return self.select_calendar(mailbox)

    def choose_entry(self, calendar: Calendar, entries: list[PermissionEntry], title: str) -> Optional[PermissionEntry]:
        menu = Menu(
            title=title,
            subtitle=calendar.folder_path,
            items=[
                MenuItem(e.label, value=e, description=e.access_rights, color=_entry_color(e))
                for e in entries
            ],
            allow_back=True,
        )
        result = menu.run(self.ctx)
        return result.value if result.selected else None


# ============================================================================
# Access level and delegate menus
# ============================================================================

def choose_access_level(ctx, user: str, current: Optional[AccessLevel] = None) -> Optional[AccessLevel]:
    """Access level menu with a live preview of the highlighted level."""
    ctx.state.set(step="Access level")
    levels = list(AccessLevel)
    menu = Menu(
        title=f"Access level for {user}",
        subtitle=f"Currently {current}" if current else "",
        items=[
            MenuItem(level.value, value=level, description=level.description, color=level.color)
            for level in levels
        ],
        preview=lambda item: sample_preview(item.value),
        allow_back=True,
    )
    result = menu.run(ctx, initial_index=levels.index(current) if current else 0)
    return result.value if result.selected else None


def choose_delegate(ctx) -> Optional[DelegateChoice]:
    """Delegate options, only asked for Editor."""
    ctx.state.set(step="Delegate options")
    menu = Menu(
        title="Delegate options",
        items=[MenuItem(c.label, value=c, description=c.description) for c in DelegateChoice],
        allow_back=True,
    )
    result = menu.run(ctx)
    return result.value if result.selected else None


def choose_level_and_flags(ctx, user: str, current: Optional[AccessLevel] = None):
    """
    Access level plus sharing flags.

    Returns:
        (level, sharing_flags) or None if the user backed out
    """
    level = choose_access_level(ctx, user, current)
    if level is None:
        return None
    if level is not AccessLevel.EDITOR:
        return level, DelegateChoice.STANDARD.sharing_flags

    choice = choose_delegate(ctx)
    if choice is None:
        return None
    return level, choice.sharing_flags


def _calendar_details(calendar: Calendar) -> str:
    parts = ["default"] if calendar.is_default else []
    if calendar.item_count is not None:
        parts.append(format_count(calendar.item_count, "item"))
    if calendar.size_bytes is not None:
        parts.append(format_size(calendar.size_bytes))
    return ", ".join(parts)


def _entry_color(entry: PermissionEntry) -> str:
    level = entry.access_level
    return level.color if level else Theme.MUTED
