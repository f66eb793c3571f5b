"""
Microsoft Graph implementation of the mailbox service.

Handles all HTTP interactions with the Graph REST API: user lookup,
calendar listing and calendarPermission CRUD.
"""

import time
from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote

import requests

from ..core.errors import (
    ConnectionFailedError,
    MailboxNotFoundError,
    MailboxServiceError,
    PermissionExistsError,
    PermissionNotFoundError,
)
from ..core.logger import get_logger
from ..permissions import AccessLevel, SharingFlag, parse_sharing_flags
from .auth import DeviceCodeAuth
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

logger = get_logger(__name__)


# ============================================================================
# Access level <-> Graph calendar role
# ============================================================================

GRAPH_ROLES = {
    AccessLevel.OWNER: "write",
    AccessLevel.PUBLISHING_EDITOR: "write",
    AccessLevel.EDITOR: "write",
    AccessLevel.PUBLISHING_AUTHOR: "write",
    AccessLevel.AUTHOR: "write",
    AccessLevel.NON_EDITING_AUTHOR: "read",
    AccessLevel.REVIEWER: "read",
    AccessLevel.CONTRIBUTOR: "freeBusyRead",
    AccessLevel.AVAILABILITY_ONLY: "freeBusyRead",
    AccessLevel.LIMITED_DETAILS: "limitedRead",
}

# Levels Graph can represent without loss
EXACT_ROLES = {
    AccessLevel.EDITOR,
    AccessLevel.REVIEWER,
    AccessLevel.AVAILABILITY_ONLY,
    AccessLevel.LIMITED_DETAILS,
}

LEVELS_BY_ROLE = {
    "freeBusyRead": (AccessLevel.AVAILABILITY_ONLY.value, (SharingFlag.NONE,)),
    "limitedRead": (AccessLevel.LIMITED_DETAILS.value, (SharingFlag.NONE,)),
    "read": (AccessLevel.REVIEWER.value, (SharingFlag.NONE,)),
    "write": (AccessLevel.EDITOR.value, (SharingFlag.NONE,)),
    "delegateWithoutPrivateEventAccess": (AccessLevel.EDITOR.value, (SharingFlag.DELEGATE,)),
    "delegateWithPrivateEventAccess": (
        AccessLevel.EDITOR.value,
        (SharingFlag.DELEGATE, SharingFlag.CAN_VIEW_PRIVATE_ITEMS),
    ),
    "none": ("None", (SharingFlag.NONE,)),
    "custom": ("Custom", (SharingFlag.NONE,)),
}


def role_for(level: AccessLevel, sharing_flags: str = "None") -> str:
    """Graph role for an access level plus delegate flags."""
    flags = parse_sharing_flags(sharing_flags)
    if level is AccessLevel.EDITOR and SharingFlag.DELEGATE in flags:
        if SharingFlag.CAN_VIEW_PRIVATE_ITEMS in flags:
            return "delegateWithPrivateEventAccess"
        return "delegateWithoutPrivateEventAccess"

    role = GRAPH_ROLES[level]
    if level not in EXACT_ROLES:
        logger.info(f"No exact Graph role for {level}; using '{role}'")
    return role


def level_for_role(role: str) -> tuple[str, tuple]:
    """Access rights string and sharing flags for a Graph role."""
    return LEVELS_BY_ROLE.get(role, (role or "None", (SharingFlag.NONE,)))


# ============================================================================
# Client
# ============================================================================

@dataclass
class GraphClientConfig:
    """Configuration for GraphMailboxService."""
    timeout: int = 60
    max_retries: int = 3


class GraphMailboxService(MailboxService):
    """
    Mailbox service backed by Microsoft Graph.

    Calendar paths ("mailbox:\\Name") are mapped to Graph calendar ids as
    calendars are listed.
    """

    API_BASE = "https://graph.microsoft.com/v1.0"

    def __init__(self, auth: DeviceCodeAuth, config: GraphClientConfig = None, sleep=time.sleep):
        """
        Initialize the Graph client.

        Args:
            auth: Token source used by connect()
            config: Client configuration
            sleep: Backoff sleep (injected for tests)
        """
        self.auth = auth
        self.config = config or GraphClientConfig()
        self._sleep = sleep
        self._token: Optional[str] = None
        self._api_calls = 0
        self._calendar_ids: dict[str, tuple[str, str]] = {}

    @property
    def api_calls(self) -> int:
        """Total API calls made by this client."""
        return self._api_calls

    def _get_headers(self) -> dict:
        """Get request headers."""
        if not self._token:
            raise MailboxServiceError("Not connected")
        return {"Authorization": f"Bearer {self._token}", "Content-Type": "application/json"}

    def _request_with_retry(self, method: str, path: str, **kwargs) -> requests.Response:
        """Make a request, retrying timeouts, throttling and server errors."""
        url = path if path.startswith("http") else f"{self.API_BASE}{path}"
        timeout = kwargs.pop("timeout", self.config.timeout)
        headers = {**self._get_headers(), **kwargs.pop("headers", {})}

        attempts = max(1, self.config.max_retries)
        for attempt in range(attempts):
            last = attempt == attempts - 1
            try:
                response = requests.request(method, url, headers=headers, timeout=timeout, **kwargs)
                self._api_calls += 1
            except (requests.exceptions.Timeout, requests.exceptions.ConnectionError) as e:
                if not last:
                    self._sleep(2 ** attempt)
                    continue
                raise MailboxServiceError(f"{method} {path} failed: {e}") from e
            except requests.exceptions.RequestException as e:
                raise MailboxServiceError(f"{method} {path} failed: {e}") from e

            if response.status_code == 429 or response.status_code >= 500:
                if not last:
                    retry_after = response.headers.get("Retry-After", "")
                    self._sleep(int(retry_after) if retry_after.isdigit() else 2 ** attempt)
                    continue
            return response

    def _call(self, method: str, path: str, not_found: Exception = None, **kwargs) -> dict:
        """Request and decode JSON, mapping HTTP failures to service errors."""
        response = self._request_with_retry(method, path, **kwargs)

        if response.status_code == 404 and not_found is not None:
            raise not_found
        if response.status_code in (401, 403):
            raise MailboxServiceError(f"Access denied: {_graph_error(response)}")
        if not response.ok:
            raise MailboxServiceError(f"{method} {path} failed: {_graph_error(response)}")

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as e:
            raise MailboxServiceError(f"{method} {path} returned a response that is not JSON") from e

    def _paged(self, path: str, **kwargs) -> list:
        """Follow @odata.nextLink pagination."""
        items = []
        next_url = path
        while next_url:
            data = self._call("GET", next_url, **kwargs)
            items.extend(data.get("value", []))
            next_url = data.get("@odata.nextLink")
        return items

    # ------------------------------------------------------------------
    # Session
    # ------------------------------------------------------------------

    def connect(self, admin_identity: str) -> Session:
        try:
            self._token = self.auth.get_token()
            me = self._call("GET", "/me?$select=displayName,userPrincipalName,mail")
        except MailboxServiceError as e:
            self._token = None
            raise ConnectionFailedError(f"Could not connect as {admin_identity}: {e}") from e

        signed_in = me.get("userPrincipalName") or me.get("mail") or ""
        if admin_identity and signed_in and signed_in.lower() != admin_identity.lower():
            logger.warning(f"Requested admin {admin_identity} but signed in as {signed_in}")

        logger.info(f"Connected as {signed_in or admin_identity}")
        return Session(
            admin_identity=signed_in or admin_identity,
            token=self._token,
            display_name=me.get("displayName", ""),
        )

    def disconnect(self, session: Session) -> None:
        self._token = None
        self._calendar_ids.clear()
        self.auth.clear()
        logger.info(f"Disconnected {session.admin_identity}")

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def resolve_mailbox(self, identity: str) -> MailboxInfo:
        path = f"/users/{quote(identity)}?$select=id,displayName,mail,userPrincipalName"
        try:
            data = self._call("GET", path, not_found=MailboxNotFoundError(identity))
        except MailboxServiceError as e:
            if "Request_BadRequest" in str(e):
                raise MailboxNotFoundError(identity) from e
            raise
        return MailboxInfo(
            identity=data.get("id", identity),
            display_name=data.get("displayName", ""),
            primary_address=data.get("mail") or data.get("userPrincipalName") or identity,
        )

    def list_calendars(self, mailbox_identity: str) -> list[Calendar]:
        raw = self._paged(
            f"/users/{quote(mailbox_identity)}/calendars?$select=id,name,isDefaultCalendar",
            not_found=MailboxNotFoundError(mailbox_identity),
        )
        calendars = []
        for item in raw:
            path = calendar_path(mailbox_identity, item.get("name", ""))
            self._calendar_ids[path.lower()] = (mailbox_identity, item["id"])
            calendars.append(Calendar(
                name=item.get("name", ""),
                folder_path=path,
                folder_type=DEFAULT_CALENDAR_TYPE if item.get("isDefaultCalendar") else USER_CALENDAR_TYPE,
                item_count=None,
                size_bytes=None,
                identity=item["id"],
            ))
        calendars.sort(key=lambda c: (not c.is_default, c.name.lower()))
        return calendars

    def _locate(self, path: str) -> tuple[str, str]:
        """(mailbox, calendar id) for a calendar path."""
        key = path.lower()
        if key not in self._calendar_ids:
            mailbox, _ = split_calendar_path(path)
            self.list_calendars(mailbox)
        if key not in self._calendar_ids:
            raise MailboxServiceError(f"Calendar {path} was not found")
        return self._calendar_ids[key]

    def _permissions_path(self, path: str) -> str:
        mailbox, calendar_id = self._locate(path)
        return f"/users/{quote(mailbox)}/calendars/{calendar_id}/calendarPermissions"

    def list_permissions(self, calendar_path: str) -> list[PermissionEntry]:
        return [_entry_from_graph(p) for p in self._paged(self._permissions_path(calendar_path))]

    def _find_permission(self, calendar_path: str, user_identity: str) -> Optional[PermissionEntry]:
        wanted = user_identity.lower()
        for entry in self.list_permissions(calendar_path):
            if entry.user_identity.lower() == wanted:
                return entry
        return None

    # ------------------------------------------------------------------
    # Changes
    # ------------------------------------------------------------------

    def grant_permission(self, calendar_path, user_identity, access_level, notify, sharing_flags):
        existing = self._find_permission(calendar_path, user_identity)
        if existing:
            raise PermissionExistsError(user_identity, existing.access_rights)

        body = {
            "emailAddress": {"address": user_identity},
            "role": role_for(access_level, sharing_flags),
            "isInsideOrganization": True,
            "isRemovable": True,
        }
        data = self._call("POST", self._permissions_path(calendar_path), json=body)
        logger.info(f"Granted {access_level} ({sharing_flags}) on {calendar_path} to {user_identity}")

        if notify:
            self._notify(calendar_path, user_identity, access_level)
        return _entry_from_graph(data)

    def modify_permission(self, calendar_path, user_identity, access_level, notify, sharing_flags):
        existing = self._find_permission(calendar_path, user_identity)
        if not existing:
            raise PermissionNotFoundError(user_identity)

        body = {"role": role_for(access_level, sharing_flags)}
        data = self._call("PATCH", f"{self._permissions_path(calendar_path)}/{existing.permission_id}", json=body)
        logger.info(f"Changed {user_identity} on {calendar_path} to {access_level} ({sharing_flags})")

        if notify:
            self._notify(calendar_path, user_identity, access_level)
        return _entry_from_graph(data)

    def revoke_permission(self, calendar_path, user_identity):
        existing = self._find_permission(calendar_path, user_identity)
        if not existing:
            raise PermissionNotFoundError(user_identity)

        self._call("DELETE", f"{self._permissions_path(calendar_path)}/{existing.permission_id}")
        logger.info(f"Removed {user_identity} from {calendar_path}")

    def _notify(self, calendar_path: str, user_identity: str, access_level: AccessLevel):
        """Mail the grantee about the change; failures are logged, not raised."""
        mailbox, name = split_calendar_path(calendar_path)
        message = {
            "message": {
                "subject": f"You have been given {access_level} access to {mailbox}'s {name}",
                "body": {
                    "contentType": "Text",
                    "content": f"{access_level}: {access_level.description}.",
                },
                "toRecipients": [{"emailAddress": {"address": user_identity}}],
            },
            "saveToSentItems": False,
        }
        try:
            self._call("POST", f"/users/{quote(mailbox)}/sendMail", json=message)
        except MailboxServiceError as e:
            logger.warning(f"Could not notify {user_identity}: {e}")


def _entry_from_graph(data: dict) -> PermissionEntry:
    email = data.get("emailAddress") or {}
    address = email.get("address", "")
    access_rights, flags = level_for_role(data.get("role", ""))
    return PermissionEntry(
        user_display_name=email.get("name") or address or "Default",
        access_rights=access_rights,
        sharing_flags=flags,
        user_identity=address,
        permission_id=data.get("id", ""),
        removable=data.get("isRemovable", True),
    )


def _graph_error(response: requests.Response) -> str:
    try:
        error = response.json().get("error", {})
    except (ValueError, AttributeError):
        return f"HTTP {response.status_code}"
    code = error.get("code", "")
    message = error.get("message", "")
    return f"{code}: {message}" if code else (message or f"HTTP {response.status_code}")
