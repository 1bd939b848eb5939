"""Standardized error responses across all API endpoints."""
from typing import Any

import sentry_sdk
import structlog
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from prompt_history.core.exceptions import (
    InvalidArgument,
    InvalidOperation,
    NotFound,
    PromptHistoryError,
)


class ErrorResponse(BaseModel):
    """Standard error envelope returned by all API error handlers."""
    error: str
    message: str
    detail: Any = None
    request_id: str = "unknown"

logger = structlog.get_logger()

_DOMAIN_STATUS: dict[type[PromptHistoryError], tuple[int, str]] = {
    InvalidArgument: (422, "invalid_argument"),
    NotFound: (404, "not_found"),
    InvalidOperation: (409, "invalid_operation"),
}


def _envelope(
    status_code: int,
    error: str,
    message: str,
    request_id: str,
    detail: Any = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(
            error=error, message=message, detail=detail, request_id=request_id
        ).model_dump(),
        headers=headers,
    )


async def domain_exception_handler(request: Request, exc: PromptHistoryError) -> JSONResponse:
    """Map engine / ledger errors onto 422 / 404 / 409."""
    request_id = request.headers.get("x-request-id", "unknown")

    status_code, error = 400, "bad_request"
    for exc_type, mapped in _DOMAIN_STATUS.items():
        if isinstance(exc, exc_type):
            status_code, error = mapped
            break

    logger.info(
        "domain_error",
        error=error,
        message=str(exc),
        path=request.url.path,
        request_id=request_id,
    )
    return _envelope(status_code, error, str(exc), request_id)


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch unhandled exceptions and return a consistent JSON envelope."""
    request_id = request.headers.get("x-request-id", "unknown")

    logger.error(
        "unhandled_exception",
        error=str(exc),
        error_type=type(exc).__name__,
        path=request.url.path,
        method=request.method,
        request_id=request_id,
    )

    sentry_sdk.capture_exception(exc)

    return _envelope(
        500,
        "internal_server_error",
        "An unexpected error occurred.",
        request_id,
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Standardize HTTPException responses into the same JSON envelope."""
    request_id = request.headers.get("x-request-id", "unknown")

    if isinstance(exc.detail, dict):
        error = exc.detail.get("error", f"http_{exc.status_code}")
        message = exc.detail.get("message", str(exc.detail))
        detail: Any = exc.detail.get("detail")
    else:
        error = f"http_{exc.status_code}"
        message = str(exc.detail)
        detail = exc.detail

    return _envelope(
        exc.status_code,
        error,
        message,
        request_id,
        detail=detail,
        headers=dict(exc.headers or {}),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(PromptHistoryError, domain_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(HTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, global_exception_handler)
