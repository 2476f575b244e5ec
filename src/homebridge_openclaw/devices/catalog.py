"""Normalization of the Config UI X accessory snapshot into device records."""

from __future__ import annotations

from typing import Any

from homebridge_openclaw.client.errors import NotFoundError
from homebridge_openclaw.config.constants import DEFAULT_DISPLAY_NAME
from homebridge_openclaw.models.device import DeviceRecord, DeviceType

# Service types that describe the accessory rather than something to control
STRUCTURAL_TYPES = frozenset({"AccessoryInformation", "ProtocolInformation"})

# Evaluated top to bottom, first match wins: "Light Switch" is a lightbulb.
TYPE_RULES: tuple[tuple[tuple[str, ...], DeviceType], ...] = (
    (("light", "bulb"), DeviceType.LIGHTBULB),
    (("switch",), DeviceType.SWITCH),
    (("outlet",), DeviceType.OUTLET),
    (("thermostat",), DeviceType.THERMOSTAT),
    (("lock",), DeviceType.LOCK),
    (("fan",), DeviceType.FAN),
    (("window", "blind", "covering"), DeviceType.BLINDS),
    (("garage",), DeviceType.GARAGE),
    (("motion",), DeviceType.MOTION),
    (("temperature",), DeviceType.SENSOR),
    (("humidity",), DeviceType.SENSOR),
    (("contact",), DeviceType.SENSOR),
    (("camera",), DeviceType.CAMERA),
)


def classify(human_type: str | None) -> DeviceType:
    """Map a hub type label such as ``"Lightbulb"`` to a canonical type."""
    label = (human_type or "").lower()
    for needles, device_type in TYPE_RULES:
        if any(needle in label for needle in needles):
            return device_type
    return DeviceType.OTHER


def _service_info(service: dict[str, Any]) -> dict[str, Any]:
    info = service.get("accessoryInformation")
    return info if isinstance(info, dict) else {}


def normalize_service(service: dict[str, Any]) -> DeviceRecord:
    info = _service_info(service)
    human_type = str(service.get("humanType") or service.get("type") or "Unknown")
    characteristics = service.get("serviceCharacteristics") or []
    values = service.get("values")
    return DeviceRecord(
        id=str(service["uniqueId"]),
        name=str(service.get("serviceName") or info.get("Name") or ""),
        type=classify(human_type),
        humanType=human_type,
        state=dict(values) if isinstance(values, dict) else {},
        characteristics=[
            c["type"] for c in characteristics
            if isinstance(c, dict) and c.get("canWrite") and c.get("type")
        ],
        manufacturer=str(info.get("Manufacturer") or ""),
        model=str(info.get("Model") or ""),
    )


def normalize(raw: Any, self_name: str = DEFAULT_DISPLAY_NAME) -> list[DeviceRecord]:
    """Turn a raw ``/api/accessories`` payload into device records.

    Services without a ``uniqueId``, structural services, and the
    gateway's own accessory are left out. Input order is preserved.
    """
    if not isinstance(raw, list):
        return []
    hidden = self_name.lower()
    devices: list[DeviceRecord] = []
    for service in raw:
        if not isinstance(service, dict) or not service.get("uniqueId"):
            continue
        human_type = str(service.get("humanType") or service.get("type") or "Unknown")
        if human_type in STRUCTURAL_TYPES:
            continue
        name = str(service.get("serviceName") or _service_info(service).get("Name") or "")
        if name.lower() == hidden:
            continue
        devices.append(normalize_service(service))
    return devices


def filter_by_type(devices: list[DeviceRecord], type_name: str) -> list[DeviceRecord]:
    wanted = type_name.lower()
    return [d for d in devices if d.type.value == wanted]


def find_device(devices: list[DeviceRecord], device_id: str) -> DeviceRecord:
    for device in devices:
        if device.id == device_id:
            return device
    raise NotFoundError(f"Device '{device_id}' not found.")
