"""Map domain and request validation errors onto the JSON error envelope."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.schemas import ErrorDetail, ErrorResponse
from services.errors import DeviceNotFoundError, ReadingValidationError

logger = logging.getLogger(__name__)


def error_response(
    status_code: int, message: str, details: Optional[Dict[str, Any]] = None
) -> JSONResponse:
    body = ErrorResponse(error=ErrorDetail(message=message, details=details))
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", exclude_none=True),
    )


async def handle_device_not_found(request: Request, exc: DeviceNotFoundError) -> JSONResponse:
    logger.warning(
        "Device not found",
        extra={"path": request.url.path, "device_id": exc.device_id},
    )
    return error_response(
        status.HTTP_404_NOT_FOUND,
        "Device not found",
        {"deviceId": exc.device_id},
    )


async def handle_reading_validation(request: Request, exc: ReadingValidationError) -> JSONResponse:
    logger.warning(
        "Rejected reading",
        extra={"path": request.url.path, "reason": str(exc)},
    )
    return error_response(status.HTTP_400_BAD_REQUEST, str(exc), {"field": exc.field})


async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    first = errors[0] if errors else {}
    if first.get("type") == "json_invalid":
        field = None
        message = "Request body must be valid JSON."
    else:
        # integer loc parts are list indexes or byte offsets, not field names
        location = [part for part in first.get("loc", ()) if isinstance(part, str) and part != "body"]
        field = location[-1] if location else None
        reason = first.get("msg", "Invalid request.")
        message = f"{field}: {reason}" if field else reason
    logger.warning("Rejected request", extra={"path": request.url.path, "reason": message})
    return error_response(
        status.HTTP_400_BAD_REQUEST,
        message,
        {"field": field} if field else None,
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DeviceNotFoundError, handle_device_not_found)
    app.add_exception_handler(ReadingValidationError, handle_reading_validation)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
