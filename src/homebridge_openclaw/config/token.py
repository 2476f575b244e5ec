"""Resolution of the bearer token the gateway accepts from its callers.

Sources are tried in a fixed order and the first usable one wins:

1. the ``OPENCLAW_HB_TOKEN`` environment variable (any non-empty value),
2. the token file in Homebridge storage (at least 16 characters),
3. the ``token`` config field (at least 8 characters),
4. a token derived from the Config UI X secret key, which is then
   written to the token file so the agent can pick it up.
"""

from __future__ import annotations

import hashlib
import hmac
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from homebridge_openclaw.config.constants import (
    DEFAULT_TOKEN_SEED,
    ENV_API_TOKEN,
    GENERATED_TOKEN_LENGTH,
    MIN_CONFIG_TOKEN_LENGTH,
    MIN_FILE_TOKEN_LENGTH,
    TOKEN_DOMAIN,
)
from homebridge_openclaw.config.secrets import SecretMaterial

logger = logging.getLogger(__name__)


class CredentialSource(str, Enum):
    """Where the inbound API token came from."""

    ENV = "env"
    FILE = "file"
    CONFIG = "config"
    AUTO = "auto"


@dataclass(frozen=True)
class ApiToken:
    """The bearer value callers must present, with its provenance."""

    value: str
    source: CredentialSource

    @property
    def masked(self) -> str:
        return self.value[:4] + "..." if len(self.value) > 8 else "***"


def derive_token(secret_key: str | None) -> str:
    """HMAC-SHA256 of the domain string under the secret key, 48 hex chars."""
    seed = secret_key or DEFAULT_TOKEN_SEED
    digest = hmac.new(seed.encode(), TOKEN_DOMAIN.encode(), hashlib.sha256).hexdigest()
    return digest[:GENERATED_TOKEN_LENGTH]


def read_token_file(path: Path) -> str | None:
    """Return the trimmed file token if it is long enough to be trusted."""
    try:
        value = path.read_text(encoding="utf-8").strip()
    except (OSError, UnicodeDecodeError):
        return None
    if len(value) >= MIN_FILE_TOKEN_LENGTH:
        return value
    return None


def persist_token(path: Path, value: str) -> bool:
    """Write the token to *path* with owner-only permissions.

    Returns ``False`` instead of raising when the write fails.
    """
    try:
        fd = os.open(str(path), os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        try:
            os.write(fd, (value + "\n").encode())
        finally:
            os.close(fd)
        os.chmod(path, 0o600)
    except OSError as exc:
        logger.warning("Could not write token file %s: %s. Token only in logs.", path, exc)
        return False
    logger.info("API token auto-generated and saved to %s.", path)
    return True


def resolve_api_token(
    declared_token: str | None,
    secrets: SecretMaterial,
    token_file: Path,
    environ: Mapping[str, str] | None = None,
) -> ApiToken:
    """Resolve the inbound API token. Never raises."""
    env = os.environ if environ is None else environ

    env_token = env.get(ENV_API_TOKEN)
    if env_token:
        logger.info("API token loaded from environment variable %s.", ENV_API_TOKEN)
        return ApiToken(env_token, CredentialSource.ENV)

    file_token = read_token_file(token_file)
    if file_token:
        logger.info("API token loaded from %s.", token_file)
        return ApiToken(file_token, CredentialSource.FILE)

    if declared_token and len(declared_token) >= MIN_CONFIG_TOKEN_LENGTH:
        logger.info("API token loaded from config.")
        return ApiToken(declared_token, CredentialSource.CONFIG)

    generated = derive_token(secrets.secret_key)
    persist_token(token_file, generated)
    logger.info("API Token: %s", generated)
    logger.info("Configure this token in your OpenClaw agent.")
    return ApiToken(generated, CredentialSource.AUTO)
