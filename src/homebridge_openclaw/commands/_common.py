"""Shared helpers for CLI commands — config resolution, options, value parsing."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated, Any

import typer

from homebridge_openclaw.client.bridge import OutboundAuthBridge
from homebridge_openclaw.config.manager import ConfigManager, detect_storage_path
from homebridge_openclaw.config.models import GatewayConfig
from homebridge_openclaw.config.secrets import read_secret_material
from homebridge_openclaw.output.formatter import FORMATS

# Shared Typer option type aliases
StorageOpt = Annotated[
    Path | None,
    typer.Option("--storage", "-s", help="Homebridge storage directory"),
]
UiUrlOpt = Annotated[
    str | None,
    typer.Option("--ui-url", help="Config UI X URL override"),
]
FormatOpt = Annotated[
    str,
    typer.Option("--format", "-f", help=f"Output format: {', '.join(FORMATS)}"),
]


def get_manager() -> ConfigManager:
    return ConfigManager()


def resolve_config(ui_url: str | None = None, storage: Path | None = None) -> GatewayConfig:
    """Effective settings from CLI options, env vars, and the config file."""
    return get_manager().resolve(ui_url=ui_url, storage_path=storage)


def make_bridge(config: GatewayConfig) -> OutboundAuthBridge:
    """Create an OutboundAuthBridge for one-off CLI calls."""
    storage = config.storage_path or detect_storage_path()
    return OutboundAuthBridge(
        read_secret_material(storage),
        base_url=config.homebridge_ui_url,
        username=config.homebridge_ui_user,
        password=config.homebridge_ui_pass,
        timeout=config.timeout,
    )


def parse_value(raw: str | None) -> Any:
    """Interpret a CLI value as JSON when possible (``true``, ``50``, ``{"hue": 10}``)."""
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw
