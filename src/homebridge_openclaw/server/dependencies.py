"""Shared dependencies for the API routes."""

from __future__ import annotations

import hmac

from fastapi import Depends, Request

from homebridge_openclaw.client.errors import UnauthorizedError
from homebridge_openclaw.server.gateway import Gateway


def get_gateway(request: Request) -> Gateway:
    """Dependency to get the gateway stored on the application."""
    return request.app.state.gateway


def require_token(request: Request, gateway: Gateway = Depends(get_gateway)) -> None:
    """Reject the request unless it carries the gateway's bearer token."""
    header = request.headers.get("Authorization", "")
    if not header.startswith("Bearer "):
        raise UnauthorizedError()
    presented = header[len("Bearer "):]
    if not hmac.compare_digest(presented.encode(), gateway.api_token.value.encode()):
        raise UnauthorizedError()
