"""Output dispatcher — renders data in table, JSON, YAML, or CSV format."""

from __future__ import annotations

import csv
import io
import json
from typing import Any

from rich.console import Console
from rich.table import Table

from homebridge_openclaw.output.tables import kv_table, plain_cell

console = Console()

FORMATS = ("table", "json", "yaml", "csv")


def to_plain(data: Any) -> Any:
    """Convert pydantic models (or lists of them) to JSON-compatible data."""
    if hasattr(data, "model_dump"):
        return data.model_dump(mode="json")
    if isinstance(data, (list, tuple)):
        return [to_plain(item) for item in data]
    return data


def output_json(data: Any) -> None:
    console.print_json(json.dumps(data, indent=2, default=str))


def output_yaml(data: Any) -> None:
    import yaml

    console.print(yaml.dump(data, default_flow_style=False, sort_keys=False), end="")


def output_csv(data: Any) -> None:
    """Print records as CSV, one column per field of the first record."""
    records = data if isinstance(data, list) else [data]
    if not records or not all(isinstance(r, dict) for r in records):
        output_json(data)
        return
    buf = io.StringIO()
    writer = csv.DictWriter(buf, fieldnames=list(records[0]), extrasaction="ignore")
    writer.writeheader()
    for record in records:
        writer.writerow({key: plain_cell(value) for key, value in record.items()})
    console.print(buf.getvalue(), end="", markup=False, highlight=False)


def output(
    data: Any,
    fmt: str = "table",
    *,
    table: Table | None = None,
    title: str | None = None,
) -> None:
    """Render *data* in *fmt*.

    ``table`` is the Rich view used for the table format; without one a
    mapping is shown as a key-value table.
    """
    plain = to_plain(data)
    if fmt == "json":
        output_json(plain)
    elif fmt == "yaml":
        output_yaml(plain)
    elif fmt == "csv":
        output_csv(plain)
    elif table is not None:
        console.print(table)
    elif isinstance(plain, dict):
        console.print(kv_table(plain, title=title))
    else:
        console.print(plain)
