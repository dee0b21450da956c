"""Mapping of domain errors onto HTTP responses.

Invitation failures keep the ``{valid: false, error: <reason>}`` shape the
acceptance endpoint promises; every other error uses FastAPI's ``detail``.
"""

import logfire
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError

from ozza.domain.error import (
    BusinessRuleViolationError,
    InvitationError,
    NotFoundError,
    StoreUnavailableError,
    UnauthorizedError,
    ValidationError,
)
from ozza.domain.value import FailureReason

# Seconds a client should wait before retrying after a store outage
RETRY_AFTER_SECONDS = 5

INVITATION_STATUS: dict[FailureReason, int] = {
    FailureReason.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    FailureReason.EXPIRED: status.HTTP_400_BAD_REQUEST,
    FailureReason.EMAIL_MISMATCH: status.HTTP_400_BAD_REQUEST,
    FailureReason.ALREADY_USED: status.HTTP_409_CONFLICT,
    FailureReason.ROLE_CONFLICT: status.HTTP_409_CONFLICT,
}


async def invitation_error_handler(request: Request, exc: InvitationError) -> JSONResponse:
    return JSONResponse(
        status_code=INVITATION_STATUS[exc.reason],
        content={"valid": False, "error": exc.reason.value},
    )


async def unauthorized_handler(request: Request, exc: UnauthorizedError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_403_FORBIDDEN, content={"detail": "Unauthorized"}
    )


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


async def business_rule_handler(
    request: Request, exc: BusinessRuleViolationError
) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"detail": str(exc)})


async def validation_error_handler(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, content={"detail": str(exc)}
    )


async def store_unavailable_handler(
    request: Request, exc: StoreUnavailableError
) -> JSONResponse:
    logfire.error(
        "Request failed on store outage",
        path=request.url.path,
        operation=exc.operation,
    )
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": "Service temporarily unavailable", "error": exc.reason.value},
        headers={"Retry-After": str(RETRY_AFTER_SECONDS)},
    )


def register_error_handlers(app: FastAPI) -> None:
    """Install the domain error mapping on an application."""
    app.add_exception_handler(InvitationError, invitation_error_handler)
    app.add_exception_handler(UnauthorizedError, unauthorized_handler)
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(BusinessRuleViolationError, business_rule_handler)
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(PydanticValidationError, validation_error_handler)
    app.add_exception_handler(StoreUnavailableError, store_unavailable_handler)
