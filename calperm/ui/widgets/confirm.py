"""
Yes/No question rendered as a two-entry menu.
"""

from .menu import Menu, MenuItem


class ConfirmDialog:
    """
    Ask a yes/no question before a change is sent to the mailbox service.

    Usage:
        if ConfirmDialog("Remove this permission?", "This cannot be undone").run(ctx):
            service.revoke_permission(...)
    """

    def __init__(self, title: str, message: str = None, summary: list = None, default_yes: bool = False):
        """
        Args:
            title: Question shown in the menu box
            message: Subtitle under the question
            summary: (label, value[, colour]) rows drawn above the box
            default_yes: Highlight "Yes" first so Enter accepts
        """
        self.title = title
        self.message = message or ""
        self.summary = summary or []
        self.default_yes = default_yes

    def run(self, ctx) -> bool:
        """True only when "Yes" was chosen; "No" and Esc both decline."""
        yes = MenuItem("Yes", value=True)
        no = MenuItem("No", value=False)
        menu = Menu(
            title=self.title,
            subtitle=self.message,
            summary=self.summary,
            items=[yes, no] if self.default_yes else [no, yes],
        )

        result = menu.run(ctx)
        return bool(result.value) if result.selected else False
