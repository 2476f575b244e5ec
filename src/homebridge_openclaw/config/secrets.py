"""Read-only access to the Config UI X secret material in Homebridge storage."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from homebridge_openclaw.config.constants import SECRETS_FILE_NAME, USERS_FILE_NAME

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SecretMaterial:
    """Shared secret key and administrator username, either may be missing."""

    secret_key: str | None = None
    admin_username: str | None = None


def _read_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        logger.debug("%s not present", path)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        logger.debug("Could not read %s: %s", path, exc)
    return None


def read_secret_key(storage_path: Path) -> str | None:
    """Return ``secretKey`` from ``.uix-secrets``, or ``None``."""
    secrets = _read_json(storage_path / SECRETS_FILE_NAME)
    if isinstance(secrets, dict):
        key = secrets.get("secretKey")
        if isinstance(key, str) and key:
            return key
    return None


def read_admin_username(storage_path: Path) -> str | None:
    """Return the first administrator username from ``auth.json``, or ``None``."""
    users = _read_json(storage_path / USERS_FILE_NAME)
    if not isinstance(users, list):
        return None
    for user in users:
        if isinstance(user, dict) and user.get("admin") and user.get("username"):
            return str(user["username"])
    return None


def read_secret_material(storage_path: Path) -> SecretMaterial:
    """Read both documents; absence of either is not an error."""
    return SecretMaterial(
        secret_key=read_secret_key(storage_path),
        admin_username=read_admin_username(storage_path),
    )
