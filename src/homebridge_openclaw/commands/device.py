"""Device commands — list, show, control, actions.

These talk to Config UI X directly with the gateway's own credentials,
without going through the REST server.
"""

from __future__ import annotations

from typing import Annotated

import typer
from rich.console import Console

from homebridge_openclaw.client.errors import error_handler
from homebridge_openclaw.commands._common import (
    FormatOpt,
    StorageOpt,
    UiUrlOpt,
    make_bridge,
    parse_value,
    resolve_config,
)
from homebridge_openclaw.devices.actions import supported_actions
from homebridge_openclaw.devices.catalog import filter_by_type, find_device, normalize
from homebridge_openclaw.devices.dispatcher import ControlDispatcher
from homebridge_openclaw.output.formatter import output
from homebridge_openclaw.output.tables import device_state_table, device_table

app = typer.Typer(name="device", help="List and control HomeKit devices.")
console = Console()


@app.command("list")
@error_handler
def list_devices(
    device_type: Annotated[
        str | None,
        typer.Option("--type", "-t", help="Filter by canonical type (lightbulb, switch, ...)"),
    ] = None,
    ui_url: UiUrlOpt = None,
    storage: StorageOpt = None,
    fmt: FormatOpt = "table",
) -> None:
    """List controllable devices."""
    config = resolve_config(ui_url, storage)
    with make_bridge(config) as bridge:
        devices = normalize(bridge.fetch_device_snapshot(), config.name)
    if device_type:
        devices = filter_by_type(devices, device_type)
    output(devices, fmt, table=device_table(devices))


@app.command()
@error_handler
def show(
    device_id: Annotated[str, typer.Argument(help="Device unique id")],
    ui_url: UiUrlOpt = None,
    storage: StorageOpt = None,
    fmt: FormatOpt = "table",
) -> None:
    """Show one device with its current state."""
    config = resolve_config(ui_url, storage)
    with make_bridge(config) as bridge:
        device = find_device(normalize(bridge.fetch_device_snapshot(), config.name), device_id)
    output(device, fmt, table=device_state_table(device))


@app.command()
@error_handler
def control(
    device_id: Annotated[str, typer.Argument(help="Device unique id")],
    action: Annotated[str, typer.Argument(help="Action name, e.g. on, brightness, color")],
    value: Annotated[
        str | None,
        typer.Argument(help='Action value; JSON is parsed (true, 50, {"hue": 240})'),
    ] = None,
    ui_url: UiUrlOpt = None,
    storage: StorageOpt = None,
) -> None:
    """Send one action to a device."""
    config = resolve_config(ui_url, storage)
    with make_bridge(config) as bridge:
        results = ControlDispatcher(bridge).control_one(device_id, action, parse_value(value))
    console.print(
        f"[green]{action} applied to '{device_id}' ({len(results)} write(s)).[/]"
    )


@app.command()
def actions() -> None:
    """List the supported action names."""
    for name in supported_actions():
        console.print(name)
