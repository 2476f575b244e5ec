"""Pydantic models for gateway configuration."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from homebridge_openclaw.config.constants import (
    DEFAULT_BIND,
    DEFAULT_DISPLAY_NAME,
    DEFAULT_PORT,
    DEFAULT_TIMEOUT,
    DEFAULT_UI_URL,
)


class GatewayConfig(BaseModel):
    """Settings for the gateway and its connection to Config UI X."""

    name: str = Field(
        default=DEFAULT_DISPLAY_NAME,
        description="Accessory name the gateway registers under; hidden from the catalog",
    )
    token: str | None = Field(
        default=None, description="Declared API token (at least 8 characters)",
    )
    homebridge_ui_url: str = Field(
        default=DEFAULT_UI_URL, description="Config UI X base URL",
    )
    homebridge_ui_user: str | None = Field(default=None, description="Config UI X username")
    homebridge_ui_pass: str | None = Field(default=None, description="Config UI X password")
    api_port: int = Field(default=DEFAULT_PORT, ge=1, le=65535)
    api_bind: str = DEFAULT_BIND
    storage_path: Path | None = Field(
        default=None, description="Homebridge storage directory",
    )
    timeout: float = Field(
        default=DEFAULT_TIMEOUT, gt=0, le=600, description="Upstream request timeout in seconds",
    )
    log_level: str = "INFO"

    @field_validator("homebridge_ui_url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("URL must start with http:// or https://")
        return v.rstrip("/")
