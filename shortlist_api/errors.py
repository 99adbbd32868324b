"""
API Error Types and Handlers

Every failure the API reports maps to one class below, and every error
response has the same JSON envelope:

    {"error": {"code": "not_found", "message": "Post not found"}}

The exception handlers registered by ``install_error_handlers`` also render
FastAPI's own errors (request validation, unknown routes, wrong methods)
in this envelope so clients only ever parse one shape.
"""

import logging

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class APIError(HTTPException):
    """Base for errors raised by route handlers and dependencies."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "internal_error"
    default_message = "Internal server error"

    def __init__(self, message: str | None = None, headers: dict[str, str] | None = None):
        super().__init__(
            status_code=self.status_code,
            detail=message or self.default_message,
            headers=headers,
        )


class ValidationError(APIError):
    """Malformed or missing request fields."""
    status_code = status.HTTP_400_BAD_REQUEST
    code = "validation_error"
    default_message = "Invalid request"


class AuthenticationError(APIError):
    """Missing, malformed, or expired bearer token, or bad credentials."""
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "authentication_error"
    default_message = "Not authenticated"

    def __init__(self, message: str | None = None):
        # RFC 6750: tell the client which scheme the resource expects
        super().__init__(message, headers={"WWW-Authenticate": "Bearer"})


class NotFoundError(APIError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"
    default_message = "Not found"


class ConflictError(APIError):
    status_code = status.HTTP_409_CONFLICT
    code = "conflict"
    default_message = "Conflict"


# Codes for HTTPExceptions raised by the framework itself
_STATUS_CODES = {
    400: "validation_error",
    401: "authentication_error",
    404: "not_found",
    405: "method_not_allowed",
    409: "conflict",
    429: "rate_limited",
}


def error_body(code: str, message: str, **extra) -> dict:
    """Build the error envelope shared by every failure response."""
    error = {"code": code, "message": message}
    error.update(extra)
    return {"error": error}


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.code, exc.detail),
        headers=exc.headers,
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    code = _STATUS_CODES.get(exc.status_code, "http_error")
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(code, str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Report body/path/query validation failures as 400.

    FastAPI's default is 422; the API contract uses 400 for every
    malformed request. Field errors are passed through under "details"
    with the raw input stripped so passwords are never echoed back.
    """
    details = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=jsonable_encoder(error_body("validation_error", "Invalid request", details=details)),
    )


async def rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    logger.info("Rate limit exceeded for %s on %s", request.client.host if request.client else "-", request.url.path)
    return JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content=error_body("rate_limited", f"Rate limit exceeded: {exc.detail}"),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("internal_error", "Internal server error"),
    )


def install_error_handlers(app: FastAPI) -> None:
    """Register all error handlers on the application."""
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(RateLimitExceeded, rate_limit_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
