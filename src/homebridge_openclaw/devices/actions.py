"""Translation of semantic actions into HomeKit characteristic writes.

The action names below are a public vocabulary: synonyms such as
``on``/``power`` or ``brightness``/``dim`` are permanent equals.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from homebridge_openclaw.client.errors import ValidationError
from homebridge_openclaw.models.control import CharacteristicOperation

Number = int | float

THERMOSTAT_MODES = {"off": 0, "heat": 1, "cool": 2, "auto": 3}


def to_number(value: Any) -> Number:
    """Read *value* as a number, keeping integers integral."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isfinite(value):
            return value
        raise ValidationError(f"Expected a finite number, got {value!r}.")
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            return to_number(float(text))
        except ValueError:
            pass
    raise ValidationError(f"Expected a numeric value, got {value!r}.")


def clamp(value: Any, low: Number, high: Number) -> Number:
    return max(low, min(high, to_number(value)))


def thermostat_mode(value: Any) -> Number:
    mode = THERMOSTAT_MODES.get(str(value).lower())
    if mode is not None:
        return mode
    return to_number(value)


@dataclass(frozen=True)
class ActionSpec:
    """A single-characteristic action and how its value is transformed."""

    characteristic: str
    transform: Callable[[Any], bool | Number]


def _ranged(low: Number, high: Number) -> Callable[[Any], Number]:
    return lambda value: clamp(value, low, high)


_POWER = ActionSpec("On", bool)
_BRIGHTNESS = ActionSpec("Brightness", _ranged(0, 100))
_COLOR_TEMPERATURE = ActionSpec("ColorTemperature", to_number)
_TARGET_TEMPERATURE = ActionSpec("TargetTemperature", to_number)
_THERMOSTAT_MODE = ActionSpec("TargetHeatingCoolingState", thermostat_mode)
_SPEED = ActionSpec("RotationSpeed", _ranged(0, 100))
_POSITION = ActionSpec("TargetPosition", _ranged(0, 100))
_TILT = ActionSpec("TargetHorizontalTiltAngle", _ranged(-90, 90))
# garage: truthy means "open" which HomeKit encodes as 0
_GARAGE = ActionSpec("TargetDoorState", lambda value: 0 if value else 1)

ACTIONS: dict[str, ActionSpec] = {
    "on": _POWER,
    "power": _POWER,
    "toggle": _POWER,
    "brightness": _BRIGHTNESS,
    "dim": _BRIGHTNESS,
    "hue": ActionSpec("Hue", _ranged(0, 360)),
    "saturation": ActionSpec("Saturation", _ranged(0, 100)),
    "colorTemperature": _COLOR_TEMPERATURE,
    "ct": _COLOR_TEMPERATURE,
    "targetTemperature": _TARGET_TEMPERATURE,
    "temperature": _TARGET_TEMPERATURE,
    "thermostatMode": _THERMOSTAT_MODE,
    "mode": _THERMOSTAT_MODE,
    "lock": ActionSpec("LockTargetState", lambda value: 1 if value else 0),
    "speed": _SPEED,
    "rotationSpeed": _SPEED,
    "position": _POSITION,
    "targetPosition": _POSITION,
    "tilt": _TILT,
    "targetTilt": _TILT,
    "garageDoor": _GARAGE,
    "garage": _GARAGE,
}

COMPOUND_ACTIONS = ("color",)


def resolve_color(value: Any) -> list[CharacteristicOperation]:
    """Hue then saturation, each only when present in *value*."""
    if not isinstance(value, dict):
        return []
    operations = []
    for key, characteristic in (("hue", "Hue"), ("saturation", "Saturation")):
        if value.get(key) is not None:
            operations.append(
                CharacteristicOperation(characteristicType=characteristic, value=to_number(value[key]))
            )
    return operations


def resolve_action(action: str | None, value: Any) -> list[CharacteristicOperation] | None:
    """Resolve an action into ordered characteristic writes.

    Returns ``None`` for an unknown action. An empty list means the action
    is known but asks for nothing, e.g. ``color`` with neither hue nor
    saturation. Non-numeric input to a numeric action raises
    :class:`ValidationError`.
    """
    if action == "color":
        return resolve_color(value)
    spec = ACTIONS.get(action or "")
    if spec is None:
        return None
    return [
        CharacteristicOperation(characteristicType=spec.characteristic, value=spec.transform(value))
    ]


def supported_actions() -> list[str]:
    return [*ACTIONS, *COMPOUND_ACTIONS]
