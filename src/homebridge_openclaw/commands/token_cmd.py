"""Token commands — show the bearer token the REST API accepts."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.console import Console

from homebridge_openclaw.client.errors import error_handler
from homebridge_openclaw.commands._common import FormatOpt, StorageOpt, resolve_config
from homebridge_openclaw.config.constants import TOKEN_FILE_NAME
from homebridge_openclaw.config.manager import detect_storage_path
from homebridge_openclaw.config.secrets import read_secret_material
from homebridge_openclaw.config.token import resolve_api_token
from homebridge_openclaw.output.formatter import output

app = typer.Typer(name="token", help="Inspect the API token agents must present.")
console = Console()


@app.command()
@error_handler
def show(
    reveal: Annotated[
        bool, typer.Option("--reveal", help="Print the full token instead of a masked one"),
    ] = False,
    storage: StorageOpt = None,
    fmt: FormatOpt = "table",
) -> None:
    """Resolve the API token exactly as the server would.

    When no token is configured anywhere this generates one and writes
    it to the token file, just like server startup.
    """
    config = resolve_config(storage=storage)
    storage_path = config.storage_path or detect_storage_path()
    token_file = storage_path / TOKEN_FILE_NAME
    token = resolve_api_token(config.token, read_secret_material(storage_path), token_file)
    output(
        {
            "token": token.value if reveal else token.masked,
            "source": token.source.value,
            "token_file": str(token_file),
        },
        fmt,
        title="API Token",
    )
