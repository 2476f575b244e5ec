"""Root Typer app — global options and command group registration."""

from __future__ import annotations

from typing import Optional

import typer

from homebridge_openclaw import __version__
from homebridge_openclaw.commands import config_cmd, device, serve, token_cmd

app = typer.Typer(
    name="homebridge-openclaw",
    help="REST gateway letting an OpenClaw agent control Homebridge devices.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def version_callback(value: bool) -> None:
    if value:
        print(f"homebridge-openclaw {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: Optional[bool] = typer.Option(
        None, "--version", "-V", callback=version_callback, is_eager=True, help="Show version and exit."
    ),
) -> None:
    """Homebridge OpenClaw gateway — serve the API, inspect tokens, control devices."""


# Register commands and command groups
app.command("serve")(serve.serve)
app.add_typer(token_cmd.app, name="token")
app.add_typer(config_cmd.app, name="config")
app.add_typer(device.app, name="device")


def main() -> None:
    app()
