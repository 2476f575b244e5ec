"""Pydantic data models for devices, control requests and responses."""

from homebridge_openclaw.models.common import ErrorResponse, HealthStatus
from homebridge_openclaw.models.control import (
    ActionRequest,
    BatchControlRequest,
    CharacteristicOperation,
    ControlRequest,
    ControlResult,
)
from homebridge_openclaw.models.device import DeviceRecord, DeviceType

__all__ = [
    "ActionRequest",
    "BatchControlRequest",
    "CharacteristicOperation",
    "ControlRequest",
    "ControlResult",
    "DeviceRecord",
    "DeviceType",
    "ErrorResponse",
    "HealthStatus",
]
