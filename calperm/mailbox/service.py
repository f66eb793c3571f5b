"""
Mailbox service interface.

The UI consumes the remote admin API only through this interface. Every
method may block on the network; none of them retries on the caller's
behalf beyond what an implementation does internally.
"""

from abc import ABC, abstractmethod

from ..permissions import AccessLevel
from .models import Calendar, MailboxInfo, PermissionEntry, Session


class MailboxService(ABC):
    """Capabilities the workflows need from the mailbox service."""

    @abstractmethod
    def connect(self, admin_identity: str) -> Session:
        """
        Open an admin session.

        Raises:
            ConnectionFailedError: If the session cannot be established
        """

    @abstractmethod
    def disconnect(self, session: Session) -> None:
        """Close the session (safe to call more than once)."""

    @abstractmethod
    def resolve_mailbox(self, identity: str) -> MailboxInfo:
        """
        Look up a mailbox or user.

        Raises:
            MailboxNotFoundError: If nothing matches identity
        """

    @abstractmethod
    def list_calendars(self, mailbox_identity: str) -> list[Calendar]:
        """Calendar folders of a mailbox, default calendar first."""

    @abstractmethod
    def list_permissions(self, calendar_path: str) -> list[PermissionEntry]:
        """Permission entries on a calendar."""

    @abstractmethod
    def grant_permission(
        self,
        calendar_path: str,
        user_identity: str,
        access_level: AccessLevel,
        notify: bool,
        sharing_flags: str,
    ) -> PermissionEntry:
        """
        Add a permission entry.

        Raises:
            PermissionExistsError: If the user already has an entry
        """

    @abstractmethod
    def modify_permission(
        self,
        calendar_path: str,
        user_identity: str,
        access_level: AccessLevel,
        notify: bool,
        sharing_flags: str,
    ) -> PermissionEntry:
        """
        Change an existing entry.

        Raises:
            PermissionNotFoundError: If the user has no entry
        """

    @abstractmethod
    def revoke_permission(self, calendar_path: str, user_identity: str) -> None:
        """
        Remove an entry.

        Raises:
            PermissionNotFoundError: If the user has no entry
        """
