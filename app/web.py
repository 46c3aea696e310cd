from __future__ import annotations

from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, Form, HTTPException, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from app.api import get_service, parse_device_id
from services.errors import DeviceNotFoundError, InvalidPowerError, ReadingValidationError
from services.telemetry import TelemetryService


templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent / "templates"))

DETAIL_READING_LIMIT = 20


def _parse_form_power(raw: str) -> float:
    try:
        return float(raw.strip())
    except ValueError as exc:
        raise InvalidPowerError("powerUsageKw must be a number.") from exc


def _render_detail(
    request: Request,
    service: TelemetryService,
    device_id: int,
    *,
    created: bool = False,
    form_error: Optional[str] = None,
    form_values: Optional[dict[str, str]] = None,
    status_code: int = status.HTTP_200_OK,
) -> HTMLResponse:
    try:
        device = service.get_device_with_status(device_id)
    except DeviceNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc

    readings = service.list_readings_for_device(device_id, DETAIL_READING_LIMIT)
    return templates.TemplateResponse(
        request,
        "ui/detail.html",
        {
            "device": device,
            "readings": readings,
            "created": created,
            "form_error": form_error,
            "form_values": form_values or {},
        },
        status_code=status_code,
    )


router = APIRouter(include_in_schema=False)


@router.get("/ui", name="ui_index", response_class=HTMLResponse)
async def ui_index(
    request: Request,
    service: TelemetryService = Depends(get_service),
) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        "ui/index.html",
        {"devices": service.list_devices_with_status()},
    )


@router.get("/ui/devices/{device_id}", name="ui_device_detail", response_class=HTMLResponse)
async def ui_device_detail(
    request: Request,
    device_id: str,
    created: bool = False,
    service: TelemetryService = Depends(get_service),
) -> HTMLResponse:
    try:
        parsed_id = parse_device_id(device_id)
    except DeviceNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc
    return _render_detail(request, service, parsed_id, created=created)


@router.post("/ui/devices/{device_id}/readings", name="ui_create_reading", response_model=None)
async def ui_create_reading(
    request: Request,
    device_id: str,
    power_usage_kw: str = Form(...),
    timestamp: str = Form(""),
    service: TelemetryService = Depends(get_service),
) -> HTMLResponse | RedirectResponse:
    try:
        parsed_id = parse_device_id(device_id)
        service.record_reading(
            parsed_id,
            _parse_form_power(power_usage_kw),
            timestamp.strip() or None,
        )
    except DeviceNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc
    except ReadingValidationError as exc:
        return _render_detail(
            request,
            service,
            parsed_id,
            form_error=str(exc),
            form_values={"power_usage_kw": power_usage_kw, "timestamp": timestamp},
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    target = request.url_for("ui_device_detail", device_id=str(parsed_id))
    return RedirectResponse(
        url=f"{target}?created=1",
        status_code=status.HTTP_303_SEE_OTHER,
    )
