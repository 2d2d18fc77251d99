"""Centralized exception handlers for the FastAPI application.

Domain errors raised by the services are mapped to HTTP status codes here, so
routes never build error responses by hand.

Error Response Format:
    {"message": "Human-readable error message"}
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from pitchscore.exceptions import (
    AuthError,
    ConflictError,
    NotFoundError,
    PitchScoreError,
    ValidationError,
)

logger = logging.getLogger(__name__)

ERROR_TO_STATUS = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    AuthError: status.HTTP_401_UNAUTHORIZED,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ConflictError: status.HTTP_409_CONFLICT,
}


def _status_for(exc: PitchScoreError) -> int:
    for exc_type, status_code in ERROR_TO_STATUS.items():
        if isinstance(exc, exc_type):
            return status_code
    return status.HTTP_400_BAD_REQUEST


def error_response(status_code: int, message: str) -> JSONResponse:
    """Create a standardized error response."""
    return JSONResponse(status_code=status_code, content={"message": message})


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI application."""

    @app.exception_handler(PitchScoreError)
    async def domain_exception_handler(
        request: Request,
        exc: PitchScoreError,
    ) -> JSONResponse:
        status_code = _status_for(exc)
        logger.info(
            "%s on %s %s: %s",
            type(exc).__name__,
            request.method,
            request.url.path,
            exc.message,
        )
        return error_response(status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Malformed bodies are a plain 400, same as missing fields."""
        logger.info(
            "Rejected body on %s %s: %s",
            request.method,
            request.url.path,
            exc.errors(),
        )
        return error_response(status.HTTP_400_BAD_REQUEST, "Invalid request body.")

    @app.exception_handler(Exception)
    async def global_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        logger.exception(
            "Unhandled exception on %s %s",
            request.method,
            request.url.path,
        )
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error."
        )
