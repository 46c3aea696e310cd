"""Pydantic schemas for the HTTP API layer."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from models.records import DeviceStatus, DeviceSummary, Reading


class DeviceOut(BaseModel):
    """Device with its status derived at request time."""

    id: int
    name: str
    site: str
    status: DeviceStatus

    @classmethod
    def from_summary(cls, summary: DeviceSummary) -> "DeviceOut":
        return cls(id=summary.id, name=summary.name, site=summary.site, status=summary.status)


class ReadingOut(BaseModel):
    """A stored reading as exposed over the wire."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    device_id: int = Field(..., alias="deviceId")
    timestamp: datetime
    power_usage_kw: float = Field(..., alias="powerUsageKw", ge=0)

    @classmethod
    def from_reading(cls, reading: Reading) -> "ReadingOut":
        return cls(
            id=reading.id,
            device_id=reading.device_id,
            timestamp=reading.timestamp,
            power_usage_kw=reading.power_usage_kw,
        )


class CreateReadingRequest(BaseModel):
    """Body of ``POST /devices/{id}/readings``.

    Range and format checks happen in the service so that the HTTP and UI
    paths report the same errors.
    """

    model_config = ConfigDict(populate_by_name=True)

    power_usage_kw: float = Field(
        ...,
        alias="powerUsageKw",
        strict=True,
        description="Power usage in kilowatts; must be >= 0.",
    )
    timestamp: Optional[str] = Field(
        default=None, description="ISO-8601 date-time; defaults to the time of the request."
    )


class ErrorDetail(BaseModel):
    message: str
    details: Optional[Dict[str, Any]] = None


class ErrorResponse(BaseModel):
    """Envelope returned for every failed request."""

    error: ErrorDetail


class HealthResponse(BaseModel):
    status: str = "ok"
