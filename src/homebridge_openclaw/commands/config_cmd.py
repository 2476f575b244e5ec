"""Config commands — inspect and edit the gateway configuration file."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.console import Console

from homebridge_openclaw.client.errors import error_handler
from homebridge_openclaw.commands._common import FormatOpt, get_manager
from homebridge_openclaw.output.formatter import output

app = typer.Typer(name="config", help="Manage the gateway configuration.")
console = Console()

_SECRET_FIELDS = ("token", "homebridge_ui_pass")


@app.command()
@error_handler
def show(
    effective: Annotated[
        bool,
        typer.Option("--effective", help="Apply environment overrides and storage detection"),
    ] = False,
    fmt: FormatOpt = "table",
) -> None:
    """Show configuration with secrets masked."""
    mgr = get_manager()
    config = mgr.resolve() if effective else mgr.config
    data = config.model_dump(mode="json", exclude_none=True)
    for key in _SECRET_FIELDS:
        if key in data:
            data[key] = data[key][:4] + "..." if len(data[key]) > 8 else "***"
    output(data, fmt, title="Gateway Configuration")


@app.command("set")
@error_handler
def set_value(
    key: Annotated[str, typer.Argument(help="Setting name, e.g. homebridge_ui_url")],
    value: Annotated[str, typer.Argument(help="New value")],
) -> None:
    """Change one setting and save the config file."""
    mgr = get_manager()
    mgr.set_value(key, value)
    console.print(f"[green]'{key}' updated.[/]")


@app.command()
def path() -> None:
    """Print the config file location."""
    console.print(str(get_manager().config_path))
