"""Shipment tracking exceptions and their HTTP mapping."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ShipTrackException(Exception):
    """Base class for all shipment tracking errors."""


class ValidationError(ShipTrackException):
    """Required fields are missing or carry invalid values."""

    def __init__(self, fields: Iterable[str], message: str | None = None):
        self.fields = list(fields)
        if message is None:
            message = "Missing required fields: " + ", ".join(self.fields)
        super().__init__(message)


class DuplicateTrackingNumber(ShipTrackException):
    """A shipment with the given tracking number already exists."""

    def __init__(self, tracking_number: str):
        self.tracking_number = tracking_number
        super().__init__(
            f"Tracking number {tracking_number} is already in use"
        )


class GenerationExhausted(ShipTrackException):
    """No unique tracking number could be minted."""

    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__(
            f"Could not generate a unique tracking number "
            f"after {attempts} attempts"
        )


class ShipmentNotFoundError(ShipTrackException):
    """Lookup key does not resolve to a stored shipment."""

    def __init__(self, shipment_id: str):
        self.shipment_id = shipment_id
        super().__init__(f"Shipment {shipment_id} not found")


NotFound = ShipmentNotFoundError


class InvalidTransition(ShipTrackException):
    """Status change rejected by the forward-only transition policy."""

    def __init__(self, current: str, target: str):
        self.current = current
        self.target = target
        super().__init__(
            f"Cannot change status from {current!r} to {target!r}"
        )


def _failure(
    status_code: int, message: str, code: str, **extra
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message, "code": code, **extra},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register shipment tracking exception handlers on a FastAPI app.

    More specific handlers must be registered first so FastAPI
    matches them before the generic ShipTrackException handler.

    Handler order (most specific first):
    1. ShipmentNotFoundError → 404
    2. ValidationError → 400
    3. DuplicateTrackingNumber → 409
    4. InvalidTransition → 409
    5. GenerationExhausted → 503
    6. ShipTrackException → 400 (catch-all)
    7. RequestValidationError → 400
    8. HTTPException → its own status
    9. Exception → 500
    """

    @app.exception_handler(ShipmentNotFoundError)
    async def _not_found(
        request: Request,
        exc: ShipmentNotFoundError,
    ) -> JSONResponse:
        return _failure(404, str(exc), "not_found")

    @app.exception_handler(ValidationError)
    async def _validation_error(
        request: Request,
        exc: ValidationError,
    ) -> JSONResponse:
        return _failure(400, str(exc), "validation_error", fields=exc.fields)

    @app.exception_handler(DuplicateTrackingNumber)
    async def _duplicate(
        request: Request,
        exc: DuplicateTrackingNumber,
    ) -> JSONResponse:
        return _failure(409, str(exc), "duplicate_tracking_number")

    @app.exception_handler(InvalidTransition)
    async def _invalid_transition(
        request: Request,
        exc: InvalidTransition,
    ) -> JSONResponse:
        return _failure(409, str(exc), "invalid_transition")

    @app.exception_handler(GenerationExhausted)
    async def _exhausted(
        request: Request,
        exc: GenerationExhausted,
    ) -> JSONResponse:
        logger.error("Tracking number generation exhausted: %s", exc)
        return _failure(503, str(exc), "generation_exhausted")

    @app.exception_handler(ShipTrackException)
    async def _shiptrack_error(
        request: Request,
        exc: ShipTrackException,
    ) -> JSONResponse:
        return _failure(400, str(exc), "shipment_error")

    @app.exception_handler(RequestValidationError)
    async def _request_validation(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        fields = [
            ".".join(str(part) for part in error["loc"] if part != "body")
            for error in exc.errors()
        ]
        return _failure(
            400,
            "Invalid request: " + ", ".join(fields),
            "validation_error",
            fields=fields,
        )

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(
        request: Request,
        exc: StarletteHTTPException,
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "success": False,
                "message": str(exc.detail),
                "code": "http_error",
            },
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def _unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(
            "Unhandled error on %s %s", request.method, request.url.path
        )
        return _failure(500, "Internal server error", "internal_error")
