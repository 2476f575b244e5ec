"""Rich table rendering for devices and key-value data."""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from typing import Any

from rich.markup import escape
from rich.table import Table

from homebridge_openclaw.models.device import DeviceRecord

DEVICE_COLUMNS = ("ID", "Name", "Type", "Hub Type", "Writable")


def plain_cell(value: Any) -> str:
    """Text for one cell; nested dicts and lists become compact JSON."""
    if value is None:
        return ""
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(", ", ": "), default=str)
    return str(value)


def format_cell(value: Any) -> str:
    return escape(plain_cell(value))


def kv_table(data: Mapping[str, Any], *, title: str | None = None) -> Table:
    """Render a mapping as a two-column table."""
    table = Table(title=title, show_header=False)
    table.add_column("Key", style="bold cyan", no_wrap=True)
    table.add_column("Value")
    for key, value in data.items():
        table.add_row(key, format_cell(value))
    return table


def device_table(devices: Iterable[DeviceRecord], *, title: str = "Devices") -> Table:
    """One row per device with its writable characteristics."""
    table = Table(title=title)
    for column in DEVICE_COLUMNS:
        table.add_column(column, no_wrap=column == "ID")
    for device in devices:
        table.add_row(
            format_cell(device.id),
            format_cell(device.name),
            device.type.value,
            format_cell(device.humanType),
            format_cell(", ".join(device.characteristics)),
        )
    return table


def device_state_table(device: DeviceRecord) -> Table:
    """Current characteristic values, writable ones marked with ``*``."""
    table = Table(title=f"{device.name or device.id} ({device.type.value})")
    table.add_column("Characteristic", style="bold cyan", no_wrap=True)
    table.add_column("Value")
    table.add_column("Writable", justify="center")
    writable = set(device.characteristics)
    names = list(device.state) + [c for c in device.characteristics if c not in device.state]
    for name in names:
        table.add_row(
            format_cell(name),
            format_cell(device.state.get(name)),
            "*" if name in writable else "",
        )
    return table
