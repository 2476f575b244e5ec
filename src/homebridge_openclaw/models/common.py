"""Common response models."""

from __future__ import annotations

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Error body returned by every endpoint."""

    error: str
    message: str


class HealthStatus(BaseModel):
    """Body of ``GET /health``."""

    status: str
    plugin: str
    version: str
    timestamp: str
    devices: int
