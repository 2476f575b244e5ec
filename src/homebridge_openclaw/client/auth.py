"""Authentication strategies for Config UI X."""

from __future__ import annotations

import hashlib
from collections.abc import Callable, Generator
from dataclasses import dataclass
from enum import Enum

import httpx
import jwt

from homebridge_openclaw.config.constants import SIGNED_TOKEN_TTL
from homebridge_openclaw.config.secrets import SecretMaterial


class AuthMode(str, Enum):
    """How the gateway obtains its credential for the hub."""

    DIRECT_SIGN = "direct-sign"
    CREDENTIAL_LOGIN = "credential-login"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class SignedCredential:
    """A bearer token for Config UI X and the instant it must be replaced."""

    token: str
    expires_at: float

    def is_valid(self, now: float) -> bool:
        return now < self.expires_at


def select_mode(
    secrets: SecretMaterial,
    username: str | None = None,
    password: str | None = None,
) -> AuthMode:
    """Pick the strategy from the inputs that are available.

    Signing locally needs both the secret key and an admin username; it is
    preferred over logging in even when credentials are configured.
    """
    if secrets.secret_key and secrets.admin_username:
        return AuthMode.DIRECT_SIGN
    if username and password:
        return AuthMode.CREDENTIAL_LOGIN
    return AuthMode.UNAVAILABLE


def instance_id(secret_key: str) -> str:
    return hashlib.sha256(secret_key.encode()).hexdigest()


def sign_admin_token(secret_key: str, admin_username: str, now: float) -> str:
    """Sign a JWT in the format Config UI X issues for its own sessions."""
    payload = {
        "sub": admin_username,
        "username": admin_username,
        "name": admin_username,
        "admin": True,
        "instanceId": instance_id(secret_key),
        "iat": int(now),
        "exp": int(now) + SIGNED_TOKEN_TTL,
    }
    return jwt.encode(payload, secret_key, algorithm="HS256")


class HubTokenAuth(httpx.Auth):
    """Attach the current hub credential as a Bearer header."""

    def __init__(self, token_provider: Callable[[], str]) -> None:
        self.token_provider = token_provider

    def auth_flow(
        self, request: httpx.Request,
    ) -> Generator[httpx.Request, httpx.Response, None]:
        request.headers["Authorization"] = f"Bearer {self.token_provider()}"
        yield request
