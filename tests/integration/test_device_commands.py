"""Integration tests for device commands."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import httpx
import pytest
import respx
from typer.testing import CliRunner

from homebridge_openclaw.app import app
from homebridge_openclaw.config.manager import ConfigManager

runner = CliRunner()
UI = "http://hb:8581"


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path):
    with patch(
        "homebridge_openclaw.commands._common.get_manager",
        return_value=ConfigManager(config_path=tmp_path / "config.toml"),
    ):
        yield


@pytest.fixture
def hub_opts(storage: Path) -> list[str]:
    return ["--ui-url", UI, "--storage", str(storage)]


class TestDeviceList:
    @respx.mock
    def test_list_devices(self, hub_opts, raw_snapshot):
        route = respx.get(f"{UI}/api/accessories").mock(
            return_value=httpx.Response(200, json=raw_snapshot)
        )
        result = runner.invoke(app, ["device", "list", *hub_opts, "--format", "json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert [d["id"] for d in data] == ["light-1", "thermo-1"]
        assert route.calls.last.request.headers["Authorization"].startswith("Bearer ")

    @respx.mock
    def test_list_filter_type(self, hub_opts, raw_snapshot):
        respx.get(f"{UI}/api/accessories").mock(return_value=httpx.Response(200, json=raw_snapshot))
        result = runner.invoke(app, ["device", "list", "--type", "thermostat", *hub_opts, "-f", "json"])
        assert result.exit_code == 0
        assert [d["name"] for d in json.loads(result.output)] == ["Hallway"]

    @respx.mock
    def test_list_table(self, hub_opts, raw_snapshot):
        respx.get(f"{UI}/api/accessories").mock(return_value=httpx.Response(200, json=raw_snapshot))
        result = runner.invoke(app, ["device", "list", *hub_opts])
        assert result.exit_code == 0
        assert "light-1" in result.output

    @respx.mock
    def test_upstream_error(self, hub_opts):
        respx.get(f"{UI}/api/accessories").mock(return_value=httpx.Response(500, text="boom"))
        result = runner.invoke(app, ["device", "list", *hub_opts])
        assert result.exit_code == 2

    @respx.mock
    def test_connection_error(self, hub_opts):
        respx.get(f"{UI}/api/accessories").mock(side_effect=httpx.ConnectError("refused"))
        result = runner.invoke(app, ["device", "list", *hub_opts])
        assert result.exit_code == 2

    def test_no_credentials(self, empty_storage):
        result = runner.invoke(app, ["device", "list", "--ui-url", UI, "--storage", str(empty_storage)])
        assert result.exit_code == 6


class TestDeviceShow:
    @respx.mock
    def test_show_device(self, hub_opts, raw_snapshot):
        respx.get(f"{UI}/api/accessories").mock(return_value=httpx.Response(200, json=raw_snapshot))
        result = runner.invoke(app, ["device", "show", "thermo-1", *hub_opts, "-f", "json"])
        assert result.exit_code == 0
        assert json.loads(result.output)["humanType"] == "Thermostat"

    @respx.mock
    def test_show_missing(self, hub_opts, raw_snapshot):
        respx.get(f"{UI}/api/accessories").mock(return_value=httpx.Response(200, json=raw_snapshot))
        result = runner.invoke(app, ["device", "show", "nope", *hub_opts])
        assert result.exit_code == 4


class TestDeviceControl:
    @respx.mock
    def test_brightness(self, hub_opts):
        route = respx.put(f"{UI}/api/accessories/light-1").mock(
            return_value=httpx.Response(200, json={})
        )
        result = runner.invoke(app, ["device", "control", "light-1", "brightness", "150", *hub_opts])
        assert result.exit_code == 0
        assert "1 write(s)" in result.output
        assert json.loads(route.calls.last.request.content) == {
            "characteristicType": "Brightness",
            "value": 100,
        }

    @respx.mock
    def test_color_json_value(self, hub_opts):
        route = respx.put(f"{UI}/api/accessories/light-1").mock(
            return_value=httpx.Response(200, json={})
        )
        result = runner.invoke(
            app, ["device", "control", "light-1", "color", '{"hue": 240, "saturation": 50}', *hub_opts],
        )
        assert result.exit_code == 0
        sent = [json.loads(c.request.content)["characteristicType"] for c in route.calls]
        assert sent == ["Hue", "Saturation"]

    @respx.mock
    def test_thermostat_mode_text(self, hub_opts):
        route = respx.put(f"{UI}/api/accessories/thermo-1").mock(
            return_value=httpx.Response(200, json={})
        )
        result = runner.invoke(app, ["device", "control", "thermo-1", "mode", "heat", *hub_opts])
        assert result.exit_code == 0
        assert json.loads(route.calls.last.request.content)["value"] == 1

    def test_unknown_action(self, hub_opts):
        with respx.mock(assert_all_called=False) as mock:
            route = mock.put(f"{UI}/api/accessories/light-1")
            result = runner.invoke(app, ["device", "control", "light-1", "dance", *hub_opts])
        assert result.exit_code == 7
        assert route.call_count == 0

    @respx.mock
    def test_write_rejected(self, hub_opts):
        respx.put(f"{UI}/api/accessories/light-1").mock(
            return_value=httpx.Response(400, text="bad value")
        )
        result = runner.invoke(app, ["device", "control", "light-1", "on", "true", *hub_opts])
        assert result.exit_code == 2


class TestDeviceActions:
    def test_lists_vocabulary(self):
        result = runner.invoke(app, ["device", "actions"])
        assert result.exit_code == 0
        names = result.output.split()
        assert "brightness" in names
        assert "color" in names
        assert "garageDoor" in names
