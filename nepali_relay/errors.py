import uuid
from typing import Optional

from fastapi import Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from .logging_config import get_logger


logger = get_logger()


class ErrorResponse(BaseModel):
    """
    Error payload returned by the relay endpoints.

    The browser frontend only looks at these two keys:
    {
        "error": "Server Error",
        "details": "Upstream HTTP error 503"
    }
    """

    error: str = Field(..., description="Short human-readable error summary")
    details: Optional[str] = Field(
        default=None, description="Underlying failure message, when there is one"
    )
    error_id: Optional[str] = Field(
        default=None, description="Correlation id for unexpected errors"
    )


def error_response(
    status_code: int,
    *,
    error: str,
    details: Optional[str] = None,
    error_id: Optional[str] = None,
) -> JSONResponse:
    """
    Helper to create a JSONResponse with the standard error body.
    Keys that are not set are left out of the body.
    """
    payload = ErrorResponse(error=error, details=details, error_id=error_id)
    return JSONResponse(
        status_code=status_code, content=payload.model_dump(exclude_none=True)
    )


def server_error(error: str, *, details: Optional[str] = None) -> JSONResponse:
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, error=error, details=details
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    """
    Global exception handler: log the failure and return a structured 500.
    """
    error_id = uuid.uuid4().hex
    logger.exception(
        "Unhandled error %s %s (error_id=%s)",
        request.method,
        request.url.path,
        error_id,
    )
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        error="Server Error",
        details=str(exc) or exc.__class__.__name__,
        error_id=error_id,
    )


__all__ = [
    "ErrorResponse",
    "error_response",
    "server_error",
    "handle_unexpected_error",
]
