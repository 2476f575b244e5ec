"""Shared test fixtures."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from homebridge_openclaw.config.manager import ConfigManager
from homebridge_openclaw.config.secrets import SecretMaterial
from homebridge_openclaw.config.token import ApiToken, CredentialSource
from homebridge_openclaw.devices.dispatcher import ControlDispatcher
from homebridge_openclaw.server.gateway import Gateway

UI_URL = "http://hb:8581"
SECRET_KEY = "0123456789abcdef0123456789abcdef0123456789abcdef"
API_TOKEN = "agent-token-0123456789abcdef"

_ENV_VARS = (
    "OPENCLAW_HB_TOKEN",
    "UIX_STORAGE_PATH",
    "OPENCLAW_HB_UI_URL",
    "OPENCLAW_HB_UI_USER",
    "OPENCLAW_HB_UI_PASS",
)


class FakeClock:
    """Manually advanced replacement for ``time.time``."""

    def __init__(self, now: float = 1_700_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's own environment out of the tests."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def storage(tmp_path: Path) -> Path:
    """A Homebridge storage directory with secrets and an admin user."""
    path = tmp_path / "homebridge"
    path.mkdir()
    (path / ".uix-secrets").write_text(json.dumps({"secretKey": SECRET_KEY}))
    (path / "auth.json").write_text(json.dumps([
        {"id": 1, "username": "viewer", "admin": False},
        {"id": 2, "username": "admin", "admin": True},
    ]))
    return path


@pytest.fixture
def empty_storage(tmp_path: Path) -> Path:
    path = tmp_path / "empty-storage"
    path.mkdir()
    return path


@pytest.fixture
def secrets() -> SecretMaterial:
    return SecretMaterial(secret_key=SECRET_KEY, admin_username="admin")


@pytest.fixture
def config_manager(tmp_path: Path) -> ConfigManager:
    """Return a ConfigManager pointed at a temp config file."""
    return ConfigManager(config_path=tmp_path / "config.toml")


@pytest.fixture
def raw_snapshot() -> list[dict]:
    """Sample ``/api/accessories`` response."""
    return [
        {
            "uniqueId": "light-1",
            "serviceName": "Kitchen Light",
            "humanType": "Lightbulb",
            "type": "Lightbulb",
            "values": {"On": 1, "Brightness": 80},
            "serviceCharacteristics": [
                {"type": "On", "canWrite": True},
                {"type": "Brightness", "canWrite": True},
                {"type": "Name", "canWrite": False},
            ],
            "accessoryInformation": {
                "Name": "Kitchen Light",
                "Manufacturer": "Acme",
                "Model": "L100",
            },
        },
        {
            "uniqueId": "info-1",
            "serviceName": "Kitchen Light",
            "humanType": "AccessoryInformation",
            "values": {},
            "serviceCharacteristics": [],
        },
        {
            "uniqueId": "thermo-1",
            "serviceName": "Hallway",
            "humanType": "Thermostat",
            "values": {"CurrentTemperature": 20.5, "TargetHeatingCoolingState": 0},
            "serviceCharacteristics": [
                {"type": "TargetTemperature", "canWrite": True},
                {"type": "TargetHeatingCoolingState", "canWrite": True},
                {"type": "CurrentTemperature", "canWrite": False},
            ],
            "accessoryInformation": {"Manufacturer": "Therm Co", "Model": "T2"},
        },
        {
            "uniqueId": "self-1",
            "serviceName": "OpenClaw API",
            "humanType": "Switch",
            "values": {"On": 0},
            "serviceCharacteristics": [{"type": "On", "canWrite": True}],
        },
        {
            "serviceName": "No Id",
            "humanType": "Switch",
            "values": {},
        },
    ]


@pytest.fixture
def mock_bridge(raw_snapshot: list[dict]) -> MagicMock:
    """A bridge stand-in that serves ``raw_snapshot`` and accepts writes."""
    bridge = MagicMock()
    bridge.fetch_device_snapshot.return_value = raw_snapshot
    bridge.write_characteristic.return_value = {"ok": True}
    return bridge


@pytest.fixture
def gateway(mock_bridge: MagicMock) -> Gateway:
    return Gateway(
        api_token=ApiToken(API_TOKEN, CredentialSource.CONFIG),
        bridge=mock_bridge,
        dispatcher=ControlDispatcher(mock_bridge),
        self_name="OpenClaw API",
    )


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {API_TOKEN}"}
