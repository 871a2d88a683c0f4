"""Mapeamento das exceções do núcleo para respostas HTTP.

- LocalValidationError → 422 com `errors` por campo
- InvalidTransitionError / CancellationRefusedError → 409
- ClientNotFoundError → 404 com descritor CLIENT_NOT_FOUND
- BookingApiError não tratada → 400 com descritor interpretado
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from app.domain.errors import ErrorDescriptor
from app.services.error_codes import CLIENT_NOT_FOUND, describe_for_display, parse_error_message
from config.logging import log_interpreted_error
from utils.errors import (
    BookingApiError,
    CancellationRefusedError,
    ClientNotFoundError,
    InvalidTransitionError,
    LocalValidationError,
)

logger = logging.getLogger(__name__)

_COMPONENT = "http_api"


def error_response(descriptor: ErrorDescriptor, status_code: int = status.HTTP_400_BAD_REQUEST) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": describe_for_display(descriptor)})


async def local_validation_handler(request: Request, exc: Exception) -> JSONResponse:
    errors = exc.errors if isinstance(exc, LocalValidationError) else {"detail": str(exc)}
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"errors": errors},
    )


async def invalid_transition_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.info(
        "workflow_operation_rejected",
        extra={"component": _COMPONENT, "path": request.url.path, "result": "conflict"},
    )
    return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"detail": str(exc)})


async def cancellation_refused_handler(request: Request, exc: Exception) -> JSONResponse:
    lead_time_hours = exc.lead_time_hours if isinstance(exc, CancellationRefusedError) else None
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"detail": str(exc), "lead_time_hours": lead_time_hours},
    )


async def client_not_found_handler(request: Request, exc: Exception) -> JSONResponse:
    message = exc.message if isinstance(exc, ClientNotFoundError) else str(exc)
    descriptor = ErrorDescriptor(code=CLIENT_NOT_FOUND, message=message, is_expected_validation=True)
    return error_response(descriptor, status.HTTP_404_NOT_FOUND)


async def booking_api_error_handler(request: Request, exc: Exception) -> JSONResponse:
    descriptor = parse_error_message(exc.message if isinstance(exc, BookingApiError) else None)
    log_interpreted_error(logger, _COMPONENT, request.url.path, descriptor)
    return error_response(descriptor)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(LocalValidationError, local_validation_handler)
    app.add_exception_handler(InvalidTransitionError, invalid_transition_handler)
    app.add_exception_handler(CancellationRefusedError, cancellation_refused_handler)
    app.add_exception_handler(ClientNotFoundError, client_not_found_handler)
    app.add_exception_handler(BookingApiError, booking_api_error_handler)
