"""
Sign-in for the Microsoft Graph admin API.

Uses the OAuth 2.0 device code flow: the admin opens a URL on any device,
types a short code and signs in; we poll the token endpoint until that
completes.
"""

import time
from dataclasses import dataclass
from typing import Callable, Optional

import requests

from ..core.errors import AuthenticationError, ConnectionFailedError
from ..core.logger import get_logger

logger = get_logger(__name__)

LOGIN_BASE = "https://login.microsoftonline.com"
GRAPH_SCOPES = (
    "https://graph.microsoft.com/Calendars.ReadWrite.Shared",
    "https://graph.microsoft.com/MailboxSettings.ReadWrite",
    "https://graph.microsoft.com/User.Read.All",
    "https://graph.microsoft.com/Mail.Send",
    "offline_access",
)
DEVICE_CODE_GRANT = "urn:ietf:params:oauth:grant-type:device_code"


@dataclass
class DeviceCodeAuthConfig:
    """Configuration for DeviceCodeAuth."""
    tenant_id: str
    client_id: str
    scopes: tuple = GRAPH_SCOPES
    timeout: int = 30


class DeviceCodeAuth:
    """
    Acquires a bearer token for the admin.

    A pre-acquired token (settings / CALPERM_ACCESS_TOKEN) short-circuits the
    flow entirely.
    """

    def __init__(
        self,
        config: DeviceCodeAuthConfig,
        on_prompt: Callable[[str], None] = None,
        access_token: str = "",
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initialize the authenticator.

        Args:
            config: Tenant/app registration settings
            on_prompt: Receives the "go to URL and enter code" instructions
            access_token: Optional pre-acquired token
            sleep: Injected for tests
        """
        self.config = config
        self.on_prompt = on_prompt or print
        self._token: Optional[str] = access_token or None
        self._sleep = sleep

    @property
    def token_url(self) -> str:
        return f"{LOGIN_BASE}/{self.config.tenant_id}/oauth2/v2.0/token"

    @property
    def device_code_url(self) -> str:
        return f"{LOGIN_BASE}/{self.config.tenant_id}/oauth2/v2.0/devicecode"

    def get_token(self) -> str:
        """
        Get a token, signing in if needed.

        Raises:
            AuthenticationError: If sign-in is refused, expires or times out
            ConnectionFailedError: If the identity platform cannot be reached
        """
        if self._token:
            return self._token

        try:
            flow = self._start_flow()
            self.on_prompt(flow.get("message") or
                           f"Go to {flow['verification_uri']} and enter code {flow['user_code']}")
            self._token = self._poll(flow)
        except requests.exceptions.RequestException as e:
            raise ConnectionFailedError(f"Could not reach the sign-in service: {e}") from e

        logger.info("Signed in with device code flow")
        return self._token

    def clear(self):
        """Forget the token."""
        self._token = None

    def _start_flow(self) -> dict:
        response = requests.post(
            self.device_code_url,
            data={"client_id": self.config.client_id, "scope": " ".join(self.config.scopes)},
            timeout=self.config.timeout,
        )
        if response.status_code != 200:
            raise AuthenticationError(f"Sign-in could not start: {_error_text(response)}")
        return response.json()

    def _poll(self, flow: dict) -> str:
        interval = int(flow.get("interval", 5))
        deadline = time.monotonic() + int(flow.get("expires_in", 900))

        while time.monotonic() < deadline:
            self._sleep(interval)
            response = requests.post(
                self.token_url,
                data={
                    "grant_type": DEVICE_CODE_GRANT,
                    "client_id": self.config.client_id,
                    "device_code": flow["device_code"],
                },
                timeout=self.config.timeout,
            )
            data = response.json() if response.content else {}

            if response.status_code == 200 and data.get("access_token"):
                return data["access_token"]

            error = data.get("error", "")
            if error == "authorization_pending":
                continue
            if error == "slow_down":
                interval += 5
                continue
            raise AuthenticationError(f"Sign-in failed: {data.get('error_description') or error or response.status_code}")

        raise AuthenticationError("Sign-in timed out before the code was entered")


def _error_text(response: requests.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return f"HTTP {response.status_code}"
    return data.get("error_description") or data.get("error") or f"HTTP {response.status_code}"
