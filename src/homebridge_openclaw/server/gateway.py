"""Wiring of the gateway's collaborators from resolved configuration."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from homebridge_openclaw.client.bridge import OutboundAuthBridge
from homebridge_openclaw.client.errors import OpenClawError
from homebridge_openclaw.config.constants import TOKEN_FILE_NAME
from homebridge_openclaw.config.manager import detect_storage_path
from homebridge_openclaw.config.models import GatewayConfig
from homebridge_openclaw.config.secrets import read_secret_material
from homebridge_openclaw.config.token import ApiToken, resolve_api_token
from homebridge_openclaw.devices.catalog import normalize
from homebridge_openclaw.devices.dispatcher import ControlDispatcher
from homebridge_openclaw.models.device import DeviceRecord

logger = logging.getLogger(__name__)


@dataclass
class Gateway:
    """Everything a request handler needs, built once per process."""

    api_token: ApiToken
    bridge: OutboundAuthBridge
    dispatcher: ControlDispatcher
    self_name: str

    def list_devices(self) -> list[DeviceRecord]:
        """Fetch a fresh snapshot and normalize it; nothing is cached."""
        return normalize(self.bridge.fetch_device_snapshot(), self.self_name)

    def close(self) -> None:
        self.bridge.close()


def build_gateway(config: GatewayConfig) -> Gateway:
    storage_path: Path = config.storage_path or detect_storage_path()
    secrets = read_secret_material(storage_path)
    api_token = resolve_api_token(config.token, secrets, storage_path / TOKEN_FILE_NAME)
    bridge = OutboundAuthBridge(
        secrets,
        base_url=config.homebridge_ui_url,
        username=config.homebridge_ui_user,
        password=config.homebridge_ui_pass,
        timeout=config.timeout,
    )
    return Gateway(
        api_token=api_token,
        bridge=bridge,
        dispatcher=ControlDispatcher(bridge),
        self_name=config.name,
    )


def verify_upstream(gateway: Gateway) -> bool:
    """Try to obtain a hub credential once; failures are logged, not raised."""
    try:
        gateway.bridge.get_credential()
    except OpenClawError as exc:
        logger.error("Config UI X auth failed: %s", exc)
        return False
    logger.info("Connected to Config UI X (%s).", gateway.bridge.mode.value)
    return True
