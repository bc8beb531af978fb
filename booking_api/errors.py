# booking_api/errors.py
"""
Error taxonomy of the booking API.

Every error carries an HTTP status, a machine-readable code and optional
remediation data (roster names, alternatives) that is merged into the JSON
body. "Slot not available" is NOT an error: /check answers it with 200.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AppError(Exception):
    status_code = 500
    code = "INTERNAL_ERROR"

    def __init__(self, message: str, **extra):
        super().__init__(message)
        self.message = message
        self.extra = extra

    def to_dict(self) -> dict:
        return {
            "error": self.code,
            "code": self.code,
            "message": self.message,
            **self.extra,
        }


class ValidationError(AppError):
    status_code = 400
    code = "VALIDATION_ERROR"


class MalformedTimeError(ValidationError):
    pass


class MalformedDateError(ValidationError):
    pass


class InvalidStatusTransitionError(ValidationError):
    pass


class AuthError(AppError):
    status_code = 401
    code = "INVALID_API_KEY"

    def __init__(self, message: str, code: str | None = None, status_code: int | None = None):
        super().__init__(message)
        if code:
            self.code = code
        if status_code:
            self.status_code = status_code


class StaffNotFoundError(AppError):
    status_code = 404
    code = "EMPLOYEE_NOT_FOUND"

    def __init__(self, name: str, available_employees: list[str]):
        super().__init__(
            f'Mitarbeiter "{name}" nicht gefunden',
            available_employees=available_employees,
        )
        self.name = name
        self.available_employees = available_employees


class ReservationNotFoundError(AppError):
    status_code = 404
    code = "RESERVATION_NOT_FOUND"


class SlotConflictError(AppError):
    status_code = 409
    code = "TIME_SLOT_OCCUPIED"

    def __init__(self, message: str, alternatives: dict, conflicts: list[dict], block_reason: str):
        super().__init__(
            message,
            success=False,
            booked=False,
            block_reason=block_reason,
            conflicting_reservations=conflicts,
            alternatives=alternatives,
        )
        self.alternatives = alternatives


class PersistenceError(AppError):
    status_code = 500
    code = "DATABASE_ERROR"


class BookingBusyError(AppError):
    status_code = 503
    code = "BOOKING_BUSY"


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{exc.code} on {request.url.path}: {exc.message}")
    else:
        logger.info(f"{exc.code} on {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning(f"Validation error for {request.url.path}: {exc.errors()}")
    fields = [".".join(str(p) for p in err.get("loc", ()) if p not in ("body", "query")) for err in exc.errors()]
    error = ValidationError(
        "Invalid or missing parameters",
        fields=[f for f in fields if f],
    )
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
