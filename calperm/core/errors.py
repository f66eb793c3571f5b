"""
Exception types for Calendar Permission Manager.
"""


class CalpermError(Exception):
    """Base class for all application errors."""
    pass


class CancelInput(CalpermError):
    """Raised when user cancels input with ESC."""
    pass


class ColorSpecError(CalpermError, TypeError):
    """A color argument was neither a name nor a numeric code."""
    pass


class RenderWarning(UserWarning):
    """Non-fatal problem while resolving colors or styles for a line."""
    pass


# ============================================================================
# Mailbox service errors
# ============================================================================

class MailboxServiceError(CalpermError):
    """A call to the remote mailbox service failed."""
    pass


class ConnectionFailedError(MailboxServiceError):
    """The admin session could not be established."""
    pass


class AuthenticationError(ConnectionFailedError):
    """Sign-in was refused or timed out."""
    pass


class MailboxNotFoundError(MailboxServiceError):
    """The given identity does not resolve to a mailbox."""

    def __init__(self, identity: str):
        super().__init__(f"Mailbox '{identity}' was not found")
        self.identity = identity


class PermissionExistsError(MailboxServiceError):
    """The user already has an entry on the calendar."""

    def __init__(self, user: str, access_rights: str = ""):
        message = f"{user} already has permission on this calendar"
        if access_rights:
            message += f" ({access_rights})"
        super().__init__(message)
        self.user = user
        self.access_rights = access_rights


class PermissionNotFoundError(MailboxServiceError):
    """The user has no entry on the calendar."""

    def __init__(self, user: str):
        super().__init__(f"{user} has no permission entry on this calendar")
        self.user = user
