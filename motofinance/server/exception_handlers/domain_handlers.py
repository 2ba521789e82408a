"""
Domain Exception Handlers.

Map the back-office errors raised by services and routers to JSON
responses of the form ``{"detail": ...}``.
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

from motofinance.core.errors import (
    AuthenticationError,
    BusinessRuleError,
    ConflictError,
    MotoFinanceError,
    NotFoundError,
    PermissionDeniedError,
)
from motofinance.core.logging_config import get_logger
from motofinance.core.monitoring import log_error

logger = get_logger(__name__)

STATUS_BY_ERROR = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ConflictError: status.HTTP_409_CONFLICT,
    BusinessRuleError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    AuthenticationError: status.HTTP_401_UNAUTHORIZED,
    PermissionDeniedError: status.HTTP_403_FORBIDDEN,
}


async def domain_exception_handler(request: Request, exc: MotoFinanceError) -> JSONResponse:
    """Answer with the status code matching the error type (400 for anything unlisted)."""
    status_code = next(
        (code for error_type, code in STATUS_BY_ERROR.items() if isinstance(exc, error_type)),
        status.HTTP_400_BAD_REQUEST,
    )
    logger.info(f"{request.method} {request.url.path} -> {status_code}: {exc}")
    headers = {"WWW-Authenticate": "Bearer"} if status_code == status.HTTP_401_UNAUTHORIZED else None
    return JSONResponse(status_code=status_code, content={"detail": str(exc)}, headers=headers)


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    """A unique or foreign key constraint rejected the write."""
    logger.warning(f"Integrity error in {request.method} {request.url.path}: {exc.orig}")
    log_error("IntegrityError", str(exc.orig), {"path": request.url.path})
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"detail": "The record conflicts with existing data (duplicate or invalid reference)"},
    )


def register_domain_handlers(app: FastAPI) -> None:
    app.add_exception_handler(MotoFinanceError, domain_exception_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
