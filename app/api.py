"""HTTP route definitions for the service."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from app.schemas import CreateReadingRequest, DeviceOut, ErrorResponse, HealthResponse, ReadingOut
from services.errors import DeviceNotFoundError
from services.telemetry import TelemetryService, build_default_service

logger = logging.getLogger(__name__)

router = APIRouter()

_NOT_FOUND = {status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}}
_BAD_REQUEST = {status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}}


def get_service() -> TelemetryService:
    return build_default_service()


def parse_device_id(raw: str) -> int:
    """Path ids that are not integers can never match a device."""
    try:
        return int(raw)
    except ValueError as exc:
        raise DeviceNotFoundError(raw) from exc


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check endpoint.",
    status_code=status.HTTP_200_OK,
)
async def healthcheck() -> HealthResponse:
    return HealthResponse(status="ok")


@router.get(
    "/devices",
    response_model=list[DeviceOut],
    summary="List devices with their current derived status.",
)
async def list_devices(
    service: TelemetryService = Depends(get_service),
) -> list[DeviceOut]:
    return [DeviceOut.from_summary(summary) for summary in service.list_devices_with_status()]


@router.get(
    "/devices/{device_id}/readings",
    response_model=list[ReadingOut],
    responses=_NOT_FOUND,
    summary="List the most recent readings for a device, newest first.",
)
async def list_device_readings(
    device_id: str,
    limit: Optional[str] = Query(
        default=None,
        description="Maximum number of readings; non-positive or invalid values use 20.",
    ),
    service: TelemetryService = Depends(get_service),
) -> list[ReadingOut]:
    readings = service.list_readings_for_device(parse_device_id(device_id), limit)
    return [ReadingOut.from_reading(reading) for reading in readings]


@router.post(
    "/devices/{device_id}/readings",
    status_code=status.HTTP_201_CREATED,
    response_model=ReadingOut,
    responses={**_NOT_FOUND, **_BAD_REQUEST},
    summary="Record a new power-usage reading for a device.",
)
async def create_device_reading(
    device_id: str,
    payload: CreateReadingRequest,
    service: TelemetryService = Depends(get_service),
) -> ReadingOut:
    reading = service.record_reading(
        parse_device_id(device_id),
        payload.power_usage_kw,
        payload.timestamp,
    )
    logger.info(
        "Recorded reading",
        extra={
            "device_id": reading.device_id,
            "reading_id": reading.id,
            "power_usage_kw": reading.power_usage_kw,
        },
    )
    return ReadingOut.from_reading(reading)
