"""Normalized device data models."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class DeviceType(str, Enum):
    """Canonical device types exposed to callers."""

    LIGHTBULB = "lightbulb"
    SWITCH = "switch"
    OUTLET = "outlet"
    THERMOSTAT = "thermostat"
    LOCK = "lock"
    FAN = "fan"
    BLINDS = "blinds"
    GARAGE = "garage"
    MOTION = "motion"
    SENSOR = "sensor"
    CAMERA = "camera"
    OTHER = "other"


class DeviceRecord(BaseModel):
    """A controllable HomeKit service as seen by the agent."""

    id: str
    name: str = ""
    type: DeviceType
    humanType: str
    state: dict[str, Any] = Field(default_factory=dict)
    characteristics: list[str] = Field(default_factory=list)
    manufacturer: str = ""
    model: str = ""
