"""Authenticated HTTP client for the Config UI X management API."""

from __future__ import annotations

import json
import logging
import time
from collections.abc import Callable
from typing import Any
from urllib.parse import quote

import httpx

from homebridge_openclaw.client.auth import (
    AuthMode,
    HubTokenAuth,
    SignedCredential,
    select_mode,
    sign_admin_token,
)
from homebridge_openclaw.client.errors import (
    ConfigurationError,
    HubConnectionError,
    UpstreamAuthError,
    UpstreamCallError,
)
from homebridge_openclaw.config.constants import (
    DEFAULT_TIMEOUT,
    DEFAULT_UI_URL,
    LOGIN_DEFAULT_TTL,
    LOGIN_EXPIRY_MARGIN,
    SIGNED_TOKEN_REFRESH_AFTER,
)
from homebridge_openclaw.config.secrets import SecretMaterial

logger = logging.getLogger(__name__)


class OutboundAuthBridge:
    """Synchronous client for Config UI X that owns the hub credential.

    The strategy is chosen once here and never changes. The cached
    credential is replaced without a lock: two threads refreshing at the
    same time both produce a valid credential and the last write wins.
    """

    def __init__(
        self,
        secrets: SecretMaterial,
        *,
        base_url: str = DEFAULT_UI_URL,
        username: str | None = None,
        password: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        clock: Callable[[], float] = time.time,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._secret_key = secrets.secret_key
        self._admin_username = secrets.admin_username
        self._username = username
        self._password = password
        self._clock = clock
        self._credential: SignedCredential | None = None
        self.mode = select_mode(secrets, username, password)

        if self.mode is AuthMode.DIRECT_SIGN:
            logger.info("Auth mode: JWT direct (no password needed).")
        elif self.mode is AuthMode.CREDENTIAL_LOGIN:
            logger.info("Auth mode: login (credentials from config).")
        else:
            logger.error("Auth mode: none. Cannot authenticate with Config UI X!")
            logger.error(
                "Ensure .uix-secrets exists or provide homebridge_ui_user/homebridge_ui_pass."
            )

        self._auth = HubTokenAuth(lambda: self.get_credential().token)
        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport or httpx.HTTPTransport(retries=0),
            headers={"Accept": "application/json"},
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> OutboundAuthBridge:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    # -- credential ---------------------------------------------------------

    def get_credential(self) -> SignedCredential:
        """Return a usable credential, refreshing it when it has expired."""
        now = self._clock()
        cached = self._credential
        if self.mode is AuthMode.DIRECT_SIGN:
            if cached is None or not cached.is_valid(now):
                token = sign_admin_token(str(self._secret_key), str(self._admin_username), now)
                cached = SignedCredential(token, now + SIGNED_TOKEN_REFRESH_AFTER)
                self._credential = cached
            return cached
        if self.mode is AuthMode.CREDENTIAL_LOGIN:
            if cached is None or not cached.is_valid(now):
                cached = self._login()
                self._credential = cached
            return cached
        raise ConfigurationError("No authentication method available for Config UI X.")

    def _login(self) -> SignedCredential:
        response = self._send(
            "POST",
            "/api/auth/login",
            json={"username": self._username, "password": self._password, "otp": ""},
        )
        if not response.is_success:
            raise UpstreamAuthError(response.status_code, response.text)
        data = self._decode(response)
        token = data.get("access_token") if isinstance(data, dict) else None
        if not token:
            raise UpstreamAuthError(response.status_code, "Login response had no access_token")
        expires_in = data.get("expires_in") or LOGIN_DEFAULT_TTL
        try:
            lifetime = float(expires_in)
        except (TypeError, ValueError) as exc:
            raise UpstreamAuthError(
                response.status_code, f"Login response had invalid expires_in: {expires_in!r}",
            ) from exc
        return SignedCredential(token, self._clock() + lifetime - LOGIN_EXPIRY_MARGIN)

    # -- transport ------------------------------------------------------------

    def _send(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            return self._client.request(method, path, **kwargs)
        except httpx.ConnectError as exc:
            raise HubConnectionError(
                f"Cannot connect to Config UI X at {self.base_url}: {exc}"
            ) from exc
        except httpx.TimeoutException as exc:
            raise HubConnectionError(
                f"Request to {self.base_url} timed out: {exc}"
            ) from exc
        except (httpx.InvalidURL, httpx.UnsupportedProtocol) as exc:
            raise HubConnectionError(
                f"Invalid URL for Config UI X at {self.base_url}: {exc}"
            ) from exc
        except httpx.TransportError as exc:
            raise HubConnectionError(
                f"Connection to Config UI X at {self.base_url} failed: {exc}"
            ) from exc

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            # Fallback: decode with replacement for non-UTF8 responses
            text = response.content.decode("utf-8", errors="replace")
            try:
                return json.loads(text)
            except json.JSONDecodeError:
                return text

    # -- hub operations ---------------------------------------------------------

    def fetch_device_snapshot(self) -> Any:
        """GET /api/accessories — the full raw accessory/service list."""
        response = self._send("GET", "/api/accessories", auth=self._auth)
        if not response.is_success:
            raise UpstreamCallError(
                response.status_code, response.text, action="GET /api/accessories",
            )
        return self._decode(response)

    def write_characteristic(self, device_id: str, characteristic: str, value: Any) -> Any:
        """PUT /api/accessories/{id} — set a single characteristic."""
        response = self._send(
            "PUT",
            f"/api/accessories/{quote(device_id, safe='')}",
            auth=self._auth,
            json={"characteristicType": characteristic, "value": value},
        )
        if not response.is_success:
            raise UpstreamCallError(
                response.status_code, response.text, action=f"PUT {characteristic}",
            )
        return self._decode(response)
