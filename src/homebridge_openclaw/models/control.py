"""Control request and result models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, model_validator


class CharacteristicOperation(BaseModel):
    """One characteristic write against a single device."""

    characteristicType: str
    value: bool | int | float


class ActionRequest(BaseModel):
    """A semantic action aimed at one device.

    Fields are left loosely typed so a bad entry fails on its own inside a
    batch instead of rejecting the whole request body.
    """

    id: Any = None
    action: Any = None
    value: Any = None

    @model_validator(mode="before")
    @classmethod
    def non_object_entry(cls, data: Any) -> Any:
        return data if isinstance(data, dict) else {}


class ControlRequest(BaseModel):
    """Body of ``POST /api/devices/{id}/control``."""

    action: Any = None
    value: Any = None


class BatchControlRequest(BaseModel):
    """Body of ``POST /api/devices/control``."""

    devices: list[ActionRequest] | None = None


class ControlResult(BaseModel):
    """Per-device outcome of a batch control request."""

    id: str | None = None
    success: bool
    error: str | None = None
