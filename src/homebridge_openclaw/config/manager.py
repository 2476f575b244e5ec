"""Configuration manager — read/write TOML config, resolve effective settings."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import tomli_w

from homebridge_openclaw.client.errors import ConfigurationError
from homebridge_openclaw.config.constants import (
    CONFIG_FILE,
    ENV_STORAGE_PATH,
    ENV_UI_PASS,
    ENV_UI_URL,
    ENV_UI_USER,
    SECRETS_FILE_NAME,
    STORAGE_CANDIDATES,
)
from homebridge_openclaw.config.models import GatewayConfig

try:
    import tomllib
except ModuleNotFoundError:
    import tomli as tomllib


def detect_storage_path() -> Path:
    """Locate the Homebridge storage directory.

    ``UIX_STORAGE_PATH`` wins; otherwise the first candidate holding a
    ``.uix-secrets`` file, falling back to ``/var/lib/homebridge``.
    """
    env_path = os.environ.get(ENV_STORAGE_PATH)
    if env_path:
        return Path(env_path)
    for candidate in STORAGE_CANDIDATES:
        if (candidate / SECRETS_FILE_NAME).exists():
            return candidate
    return STORAGE_CANDIDATES[0]


class ConfigManager:
    """Manages gateway configuration on disk and resolves effective settings."""

    def __init__(self, config_path: Path | None = None) -> None:
        self.config_path = config_path or CONFIG_FILE
        self._config: GatewayConfig | None = None

    @property
    def config(self) -> GatewayConfig:
        if self._config is None:
            self._config = self._load()
        return self._config

    def _load(self) -> GatewayConfig:
        if not self.config_path.exists():
            return GatewayConfig()
        raw = self.config_path.read_bytes()
        try:
            data = tomllib.loads(raw.decode())
        except tomllib.TOMLDecodeError as exc:
            raise ConfigurationError(f"Invalid config file {self.config_path}: {exc}") from exc
        return GatewayConfig(**data)

    def save(self) -> None:
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        # Secure directory permissions (owner-only)
        os.chmod(self.config_path.parent, 0o700)
        data: dict[str, Any] = self.config.model_dump(
            mode="json", exclude_none=True, exclude_defaults=True,
        )
        # Atomic write: write to temp file, then rename
        temp = self.config_path.with_suffix(".tmp")
        fd = os.open(str(temp), os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        try:
            os.write(fd, tomli_w.dumps(data).encode())
        finally:
            os.close(fd)
        temp.rename(self.config_path)

    def set_value(self, key: str, value: str) -> GatewayConfig:
        """Update one field, validating the whole model before saving."""
        if key not in GatewayConfig.model_fields:
            raise ConfigurationError(
                f"Unknown setting '{key}'. Valid settings: "
                + ", ".join(sorted(GatewayConfig.model_fields))
            )
        data = self.config.model_dump(exclude_none=True)
        data[key] = value
        self._config = GatewayConfig(**data)
        self.save()
        return self._config

    def resolve(
        self,
        *,
        ui_url: str | None = None,
        storage_path: Path | None = None,
        host: str | None = None,
        port: int | None = None,
        log_level: str | None = None,
    ) -> GatewayConfig:
        """Resolve effective settings.

        Precedence: CLI flags > env vars > config file > defaults.
        """
        base = self.config
        resolved_storage = (
            storage_path
            or (Path(os.environ[ENV_STORAGE_PATH]) if os.environ.get(ENV_STORAGE_PATH) else None)
            or base.storage_path
            or detect_storage_path()
        )
        updates = {
            "homebridge_ui_url": ui_url or os.environ.get(ENV_UI_URL) or base.homebridge_ui_url,
            "homebridge_ui_user": os.environ.get(ENV_UI_USER) or base.homebridge_ui_user,
            "homebridge_ui_pass": os.environ.get(ENV_UI_PASS) or base.homebridge_ui_pass,
            "storage_path": resolved_storage,
            "api_bind": host or base.api_bind,
            "api_port": port or base.api_port,
            "log_level": log_level or base.log_level,
        }
        return GatewayConfig(**{**base.model_dump(), **updates})
