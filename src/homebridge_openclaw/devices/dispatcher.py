"""Execution of control actions against the hub."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any, Protocol

from homebridge_openclaw.client.errors import OpenClawError, ValidationError
from homebridge_openclaw.devices.actions import resolve_action
from homebridge_openclaw.models.control import (
    ActionRequest,
    CharacteristicOperation,
    ControlResult,
)

logger = logging.getLogger(__name__)


class CharacteristicWriter(Protocol):
    def write_characteristic(self, device_id: str, characteristic: str, value: Any) -> Any: ...


class ControlDispatcher:
    """Applies resolved actions one write at a time, one device at a time.

    Writes are not transactional: when a later write for a device fails,
    the earlier ones stay applied on the hub.
    """

    def __init__(self, writer: CharacteristicWriter) -> None:
        self.writer = writer

    def resolve(self, action: Any, value: Any) -> list[CharacteristicOperation]:
        if action is None or action == "":
            raise ValidationError('Missing "action".')
        operations = resolve_action(action, value) if isinstance(action, str) else None
        if operations is None:
            raise ValidationError(f"Unknown action: {action}.")
        return operations

    def control_one(self, device_id: str, action: Any, value: Any) -> list[Any]:
        """Run one action; returns the hub's response for each write."""
        operations = self.resolve(action, value)
        results = []
        for op in operations:
            results.append(
                self.writer.write_characteristic(device_id, op.characteristicType, op.value)
            )
        logger.debug("%s on %s applied %d write(s)", action, device_id, len(results))
        return results

    def control_batch(self, requests: Iterable[ActionRequest]) -> list[ControlResult]:
        """Run each request in order; a failure only affects its own entry."""
        results: list[ControlResult] = []
        for item in requests:
            if item.id is None or item.id == "":
                results.append(ControlResult(success=False, error='Missing "id".'))
                continue
            device_id = str(item.id)
            try:
                self.control_one(device_id, item.action, item.value)
            except ValidationError as exc:
                results.append(ControlResult(id=device_id, success=False, error=str(exc)))
            except OpenClawError as exc:
                logger.warning("Control of %s failed: %s", device_id, exc)
                results.append(ControlResult(id=device_id, success=False, error=str(exc)))
            else:
                results.append(ControlResult(id=device_id, success=True))
        return results
