"""
Data models for mailboxes, calendars and permission entries.

All of these are read-only snapshots of remote state.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..permissions import AccessLevel, SharingFlag, parse_sharing_flags

DEFAULT_CALENDAR_TYPE = "Calendar"
USER_CALENDAR_TYPE = "UserCreated"


@dataclass
class MailboxInfo:
    """A resolved mailbox."""
    identity: str
    display_name: str = ""
    primary_address: str = ""

    @property
    def label(self) -> str:
        if self.display_name and self.primary_address:
            return f"{self.display_name} <{self.primary_address}>"
        return self.primary_address or self.display_name or self.identity


@dataclass
class Calendar:
    """A calendar folder inside a mailbox."""
    name: str
    folder_path: str           # "mailbox:\Name", the path permission calls take
    folder_type: str = DEFAULT_CALENDAR_TYPE
    item_count: Optional[int] = None  # None when the service does not report it
    size_bytes: Optional[int] = None
    identity: str = ""         # Service-side id

    @property
    def is_default(self) -> bool:
        return self.folder_type == DEFAULT_CALENDAR_TYPE


def calendar_path(mailbox: str, name: str) -> str:
    """Folder path for a calendar, e.g. "alice@contoso.com:\\Calendar"."""
    return f"{mailbox}:\\{name}"


def split_calendar_path(path: str) -> tuple[str, str]:
    """Inverse of calendar_path(); the name part may be empty."""
    mailbox, _, name = path.partition(":\\")
    return mailbox, name


@dataclass
class PermissionEntry:
    """One user's access to a calendar."""
    user_display_name: str
    access_rights: str                      # One of the ten levels, or a raw service value
    sharing_flags: tuple = (SharingFlag.NONE,)
    user_identity: str = ""                 # Address, empty for Default/Anonymous
    permission_id: str = ""
    removable: bool = True

    @property
    def access_level(self) -> Optional[AccessLevel]:
        return AccessLevel.parse(self.access_rights)

    @property
    def label(self) -> str:
        if self.user_identity and self.user_identity != self.user_display_name:
            return f"{self.user_display_name} <{self.user_identity}>"
        return self.user_display_name

    @classmethod
    def from_values(cls, user: str, access_rights: str, flags: str = "None", **kwargs) -> "PermissionEntry":
        return cls(user, access_rights, parse_sharing_flags(flags), **kwargs)


@dataclass
class Session:
    """An established admin session."""
    admin_identity: str
    token: str = field(default="", repr=False)
    display_name: str = ""
    connected_at: datetime = field(default_factory=datetime.now)
