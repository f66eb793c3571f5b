"""
Mailbox service layer.

The workflows talk to the remote admin API only through MailboxService;
GraphMailboxService is the Microsoft Graph implementation.
"""

from .models import (
    DEFAULT_CALENDAR_TYPE,
    USER_CALENDAR_TYPE,
    Calendar,
    MailboxInfo,
    PermissionEntry,
    Session,
    calendar_path,
    split_calendar_path,
)
from .service import MailboxService
from .auth import DeviceCodeAuth, DeviceCodeAuthConfig
from .graph import GraphClientConfig, GraphMailboxService, level_for_role, role_for

__all__ = [
    # Models
    "DEFAULT_CALENDAR_TYPE",
    "USER_CALENDAR_TYPE",
    "Calendar",
    "MailboxInfo",
    "PermissionEntry",
    "Session",
    "calendar_path",
    "split_calendar_path",
    # Service
    "MailboxService",
    # Graph
    "DeviceCodeAuth",
    "DeviceCodeAuthConfig",
    "GraphClientConfig",
    "GraphMailboxService",
    "level_for_role",
    "role_for",
]
