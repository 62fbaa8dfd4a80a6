"""Map domain errors to HTTP responses."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from skillbridge.modules.common.exceptions import (
    DomainError,
    InvalidStateError,
    NotAllowedError,
    NotFoundError,
    ValidationError,
)
from skillbridge.modules.feedback import DuplicateFeedbackError
from skillbridge.modules.users import UserAlreadyExistsError
from skillbridge.modules.wallets import InsufficientCreditsError

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR: list[tuple[type[DomainError], int]] = [
    (InsufficientCreditsError, status.HTTP_402_PAYMENT_REQUIRED),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (NotAllowedError, status.HTTP_403_FORBIDDEN),
    (InvalidStateError, status.HTTP_409_CONFLICT),
    (DuplicateFeedbackError, status.HTTP_409_CONFLICT),
    (UserAlreadyExistsError, status.HTTP_409_CONFLICT),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
]


def status_for(exc: DomainError) -> int:
    for error_type, code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return code
    return status.HTTP_400_BAD_REQUEST


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    code = status_for(exc)
    body: dict = {"detail": str(exc)}
    if isinstance(exc, InsufficientCreditsError):
        body["required"] = exc.required
        body["available"] = exc.available
    logger.info("%s %s -> %s: %s", request.method, request.url.path, code, exc)
    return JSONResponse(status_code=code, content=body)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainError, domain_error_handler)


__all__ = ["register_exception_handlers", "status_for"]
