"""REST endpoints for the OpenClaw agent."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from homebridge_openclaw import __version__
from homebridge_openclaw.client.errors import OpenClawError, ValidationError
from homebridge_openclaw.config.constants import PLUGIN_NAME
from homebridge_openclaw.devices.catalog import filter_by_type, find_device
from homebridge_openclaw.models.common import ErrorResponse, HealthStatus
from homebridge_openclaw.models.control import BatchControlRequest, ControlRequest
from homebridge_openclaw.server.dependencies import get_gateway, require_token
from homebridge_openclaw.server.gateway import Gateway

logger = logging.getLogger(__name__)

router = APIRouter()
api = APIRouter(prefix="/api/devices", dependencies=[Depends(require_token)])


@router.get("/health")
def health(gateway: Gateway = Depends(get_gateway)) -> dict[str, Any]:
    """Liveness plus a device count; reports ``degraded`` instead of failing."""
    device_count = 0
    connected = False
    try:
        device_count = len(gateway.list_devices())
        connected = True
    except OpenClawError as exc:
        logger.debug("Health check could not reach Config UI X: %s", exc)
    return HealthStatus(
        status="ok" if connected else "degraded",
        plugin=PLUGIN_NAME,
        version=__version__,
        timestamp=datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z"),
        devices=device_count,
    ).model_dump()


@api.get("")
def list_devices(gateway: Gateway = Depends(get_gateway)) -> dict[str, Any]:
    devices = gateway.list_devices()
    return {
        "success": True,
        "count": len(devices),
        "devices": [d.model_dump(mode="json") for d in devices],
    }


@api.get("/type/{device_type}")
def list_devices_by_type(
    device_type: str, gateway: Gateway = Depends(get_gateway),
) -> dict[str, Any]:
    devices = filter_by_type(gateway.list_devices(), device_type)
    return {
        "success": True,
        "count": len(devices),
        "devices": [d.model_dump(mode="json") for d in devices],
    }


@api.post("/control")
def control_batch(
    body: BatchControlRequest | None = None, gateway: Gateway = Depends(get_gateway),
) -> dict[str, Any]:
    """Control several devices in order; each gets its own result entry."""
    if body is None or body.devices is None:
        raise ValidationError('Expected "devices" array.')
    results = gateway.dispatcher.control_batch(body.devices)
    return {
        "success": True,
        "results": [r.model_dump(exclude_none=True) for r in results],
    }


@api.get("/{device_id}")
def get_device(device_id: str, gateway: Gateway = Depends(get_gateway)) -> dict[str, Any]:
    device = find_device(gateway.list_devices(), device_id)
    return {"success": True, "device": device.model_dump(mode="json")}


@api.post("/{device_id}/control", response_model=None)
def control_device(
    device_id: str,
    body: ControlRequest | None = None,
    gateway: Gateway = Depends(get_gateway),
) -> dict[str, Any] | JSONResponse:
    request = body or ControlRequest()
    try:
        results = gateway.dispatcher.control_one(device_id, request.action, request.value)
    except ValidationError:
        raise
    except OpenClawError as exc:
        logger.warning("Control of %s failed: %s", device_id, exc)
        return JSONResponse(
            status_code=502,
            content=ErrorResponse(error="Control error", message=str(exc)).model_dump(),
        )
    return {"success": True, "id": device_id, "action": request.action, "results": results}
