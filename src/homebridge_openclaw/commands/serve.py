"""Serve command — run the REST API for the OpenClaw agent."""

from __future__ import annotations

import logging
from typing import Annotated

import typer
import uvicorn

from homebridge_openclaw.client.errors import error_handler
from homebridge_openclaw.commands._common import StorageOpt, UiUrlOpt, get_manager
from homebridge_openclaw.server.app import create_app, setup_logging
from homebridge_openclaw.server.gateway import build_gateway, verify_upstream

logger = logging.getLogger(__name__)


@error_handler
def serve(
    host: Annotated[str | None, typer.Option("--host", help="Bind address")] = None,
    port: Annotated[int | None, typer.Option("--port", "-p", help="Listen port")] = None,
    ui_url: UiUrlOpt = None,
    storage: StorageOpt = None,
    log_level: Annotated[
        str | None, typer.Option("--log-level", help="DEBUG, INFO, WARNING or ERROR"),
    ] = None,
    plain_logs: Annotated[
        bool, typer.Option("--plain-logs", help="Plain text logs instead of JSON"),
    ] = False,
) -> None:
    """Start the REST API server."""
    config = get_manager().resolve(
        ui_url=ui_url, storage_path=storage, host=host, port=port, log_level=log_level,
    )
    setup_logging(config.log_level, json_format=not plain_logs)
    logger.info("Homebridge storage: %s", config.storage_path)

    gateway = build_gateway(config)
    verify_upstream(gateway)

    logger.info("REST API listening on %s:%s", config.api_bind, config.api_port)
    uvicorn.run(
        create_app(gateway),
        host=config.api_bind,
        port=config.api_port,
        log_config=None,
    )
