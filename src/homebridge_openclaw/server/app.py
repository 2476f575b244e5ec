"""FastAPI application exposing the gateway's REST API."""

from __future__ import annotations

import logging
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pythonjsonlogger import jsonlogger

from homebridge_openclaw import __version__
from homebridge_openclaw.client.errors import OpenClawError
from homebridge_openclaw.config.constants import PLUGIN_NAME
from homebridge_openclaw.models.common import ErrorResponse
from homebridge_openclaw.server import routes
from homebridge_openclaw.server.gateway import Gateway

logger = logging.getLogger(__name__)


def setup_logging(log_level: str = "INFO", json_format: bool = True) -> None:
    """Configure root logging, JSON lines by default.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        json_format: Emit structured JSON instead of plain text
    """
    if json_format:
        formatter: logging.Formatter = jsonlogger.JsonFormatter(  # type: ignore[attr-defined]
            "%(asctime)s %(name)s %(levelname)s %(message)s",
            rename_fields={"asctime": "timestamp", "levelname": "level", "name": "logger"},
        )
    else:
        formatter = logging.Formatter(f"[{PLUGIN_NAME}] %(levelname)s %(name)s: %(message)s")

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(log_level.upper())

    # Reduce noise from httpx
    logging.getLogger("httpx").setLevel(logging.WARNING)


def _error_response(status_code: int, error: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=error, message=message).model_dump(),
    )


async def handle_gateway_error(request: Request, exc: OpenClawError) -> JSONResponse:
    if exc.http_status >= 500:
        logger.warning("%s %s failed: %s", request.method, request.url.path, exc)
    return _error_response(exc.http_status, exc.title, str(exc))


async def handle_request_validation(request: Request, exc: Exception) -> JSONResponse:
    return _error_response(400, "Bad Request", "Malformed request body.")


def create_app(gateway: Gateway) -> FastAPI:
    """Build the application around an already-wired gateway."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info("REST API ready (token source: %s)", gateway.api_token.source.value)
        yield
        gateway.close()
        logger.info("REST API shut down")

    app = FastAPI(title=PLUGIN_NAME, version=__version__, lifespan=lifespan)
    app.state.gateway = gateway
    app.add_exception_handler(OpenClawError, handle_gateway_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.include_router(routes.router)
    app.include_router(routes.api)
    return app
