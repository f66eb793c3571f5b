"""Pytest configuration and fixtures."""

import io

import pytest

from calperm.core.errors import MailboxNotFoundError, PermissionExistsError, PermissionNotFoundError
from calperm.core.state import OperationStateTracker
from calperm.mailbox import Calendar, MailboxInfo, MailboxService, PermissionEntry, Session, calendar_path
from calperm.permissions import parse_sharing_flags
from calperm.ui.context import UIContext
from calperm.ui.primitives import CapabilityMode, ScriptedKeyReader, StyledTextRenderer


class FakeMailboxService(MailboxService):
    """
    In-memory mailbox service that records every call.

    mailboxes maps address -> display name; calendars maps address -> list
    of (name, is_default); permissions maps calendar path -> list of
    PermissionEntry.
    """

    def __init__(self, mailboxes=None, calendars=None, permissions=None, fail_connect=None):
        self.mailboxes = dict(mailboxes or {})
        self.calendars = dict(calendars or {})
        self.permissions = {k: list(v) for k, v in (permissions or {}).items()}
        self.fail_connect = fail_connect
        self.calls = []

    def calls_to(self, name):
        return [args for call, args in self.calls if call == name]

    def connect(self, admin_identity):
        self.calls.append(("connect", (admin_identity,)))
        if self.fail_connect:
            raise self.fail_connect
        return Session(admin_identity=admin_identity, token="token")

    def disconnect(self, session):
        self.calls.append(("disconnect", (session.admin_identity,)))

    def resolve_mailbox(self, identity):
        self.calls.append(("resolve_mailbox", (identity,)))
        if identity.lower() not in self.mailboxes:
            raise MailboxNotFoundError(identity)
        return MailboxInfo(identity, self.mailboxes[identity.lower()], identity.lower())

    def list_calendars(self, mailbox_identity):
        self.calls.append(("list_calendars", (mailbox_identity,)))
        result = []
        for name, is_default in self.calendars.get(mailbox_identity, [("Calendar", True)]):
            result.append(Calendar(
                name=name,
                folder_path=calendar_path(mailbox_identity, name),
                folder_type="Calendar" if is_default else "UserCreated",
                item_count=12,
                size_bytes=2048,
            ))
        return result

    def list_permissions(self, calendar_path):
        self.calls.append(("list_permissions", (calendar_path,)))
        return list(self.permissions.get(calendar_path, []))

    def _find(self, calendar_path, user_identity):
        for entry in self.permissions.get(calendar_path, []):
            if entry.user_identity.lower() == user_identity.lower():
                return entry
        return None

    def grant_permission(self, calendar_path, user_identity, access_level, notify, sharing_flags):
        self.calls.append(("grant_permission", (calendar_path, user_identity, access_level, notify, sharing_flags)))
        existing = self._find(calendar_path, user_identity)
        if existing:
            raise PermissionExistsError(user_identity, existing.access_rights)
        entry = PermissionEntry(user_identity, str(access_level), parse_sharing_flags(sharing_flags), user_identity)
        self.permissions.setdefault(calendar_path, []).append(entry)
        return entry

    def modify_permission(self, calendar_path, user_identity, access_level, notify, sharing_flags):
        self.calls.append(("modify_permission", (calendar_path, user_identity, access_level, notify, sharing_flags)))
        existing = self._find(calendar_path, user_identity)
        if not existing:
            raise PermissionNotFoundError(user_identity)
        existing.access_rights = str(access_level)
        existing.sharing_flags = parse_sharing_flags(sharing_flags)
        return existing

    def revoke_permission(self, calendar_path, user_identity):
        self.calls.append(("revoke_permission", (calendar_path, user_identity)))
        existing = self._find(calendar_path, user_identity)
        if not existing:
            raise PermissionNotFoundError(user_identity)
        self.permissions[calendar_path].remove(existing)


@pytest.fixture
def stream():
    return io.StringIO()


@pytest.fixture
def make_renderer(stream, tmp_path):
    """Build a renderer for a given mode that writes into the stream fixture."""
    def _make(mode=CapabilityMode.NO_COLOR, width=80):
        return StyledTextRenderer(mode, stream=stream, log_dir=tmp_path, width=width)
    return _make


@pytest.fixture
def make_ctx(make_renderer):
    """Build a UIContext that replays a key script."""
    def _make(script, mode=CapabilityMode.NO_COLOR):
        return UIContext(
            renderer=make_renderer(mode),
            keys=ScriptedKeyReader(script),
            state=OperationStateTracker("Calendar Permission Manager"),
            clear_between_screens=False,
        )
    return _make


@pytest.fixture
def contoso():
    """alice has one default calendar; bob and carol exist."""
    return FakeMailboxService(
        mailboxes={
            "alice@contoso.com": "Alice",
            "bob@contoso.com": "Bob",
            "carol@contoso.com": "Carol",
        },
    )
