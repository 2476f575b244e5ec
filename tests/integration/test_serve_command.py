"""Integration tests for the serve command and root options."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

from fastapi import FastAPI
from typer.testing import CliRunner

from homebridge_openclaw import __version__
from homebridge_openclaw.app import app
from homebridge_openclaw.config.manager import ConfigManager

runner = CliRunner()


def _patch_manager(tmp_path: Path):
    return patch(
        "homebridge_openclaw.commands.serve.get_manager",
        return_value=ConfigManager(config_path=tmp_path / "config.toml"),
    )


class TestServe:
    def test_starts_uvicorn(self, tmp_path: Path, storage: Path):
        with _patch_manager(tmp_path), \
                patch("homebridge_openclaw.commands.serve.setup_logging") as setup_logging, \
                patch("homebridge_openclaw.commands.serve.uvicorn.run") as run:
            result = runner.invoke(app, [
                "serve", "--storage", str(storage), "--host", "127.0.0.1", "--port", "9100",
                "--log-level", "debug", "--plain-logs",
            ])
        assert result.exit_code == 0
        setup_logging.assert_called_once_with("debug", json_format=False)
        run.assert_called_once()
        assert isinstance(run.call_args.args[0], FastAPI)
        assert run.call_args.kwargs["host"] == "127.0.0.1"
        assert run.call_args.kwargs["port"] == 9100
        assert (storage / ".openclaw-token").exists()

    def test_defaults(self, tmp_path: Path, storage: Path):
        with _patch_manager(tmp_path), \
                patch("homebridge_openclaw.commands.serve.setup_logging") as setup_logging, \
                patch("homebridge_openclaw.commands.serve.uvicorn.run") as run:
            result = runner.invoke(app, ["serve", "--storage", str(storage)])
        assert result.exit_code == 0
        setup_logging.assert_called_once_with("INFO", json_format=True)
        assert run.call_args.kwargs["host"] == "0.0.0.0"
        assert run.call_args.kwargs["port"] == 8899

    def test_starts_even_when_hub_auth_unavailable(self, tmp_path: Path, empty_storage: Path):
        with _patch_manager(tmp_path), \
                patch("homebridge_openclaw.commands.serve.setup_logging"), \
                patch("homebridge_openclaw.commands.serve.uvicorn.run") as run:
            result = runner.invoke(app, ["serve", "--storage", str(empty_storage)])
        assert result.exit_code == 0
        run.assert_called_once()

    def test_invalid_port(self, tmp_path: Path, storage: Path):
        with _patch_manager(tmp_path), \
                patch("homebridge_openclaw.commands.serve.setup_logging"), \
                patch("homebridge_openclaw.commands.serve.uvicorn.run") as run:
            result = runner.invoke(app, ["serve", "--storage", str(storage), "--port", "70000"])
        assert result.exit_code == 1
        run.assert_not_called()


class TestRoot:
    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help_lists_commands(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        for name in ("serve", "token", "config", "device"):
            assert name in result.output
