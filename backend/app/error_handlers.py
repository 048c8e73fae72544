"""
Exception handlers for FastAPI.

Every failure reaches the client as ``{"status": <code>, "message": <text>}``.

Request IDs are logged server-side with every handled error. Unexpected
exceptions get a generic 500 message.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.exceptions import IssueTrackerError
from core.logging import get_logger

logger = get_logger("backend.errors")


def _get_request_id() -> str:
    """Get the current request ID from the logging context (server-side only)."""
    return structlog.contextvars.get_contextvars().get("request_id", "-")


def _response_payload(message: str, status_code: int) -> dict:
    return {
        "status": status_code,
        "message": message,
    }


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(IssueTrackerError)
    async def issue_tracker_error_handler(request: Request, exc: IssueTrackerError):
        log_method = logger.error if exc.status_code >= 500 else logger.info
        log_method(
            "request_failed",
            error_type=type(exc).__name__,
            message=exc.message,
            status_code=exc.status_code,
            path=request.url.path,
            request_id=_get_request_id(),
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=_response_payload(exc.message, exc.status_code),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        logger.warning(
            "http_exception",
            detail=exc.detail,
            status_code=exc.status_code,
            request_id=_get_request_id(),
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=_response_payload(str(exc.detail), exc.status_code),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = jsonable_encoder(exc.errors())
        logger.warning("validation_error", errors=errors, request_id=_get_request_id())
        return JSONResponse(
            status_code=422,
            content={**_response_payload("Validation error", 422), "errors": errors},
        )

    @app.exception_handler(ValidationError)
    async def validation_exception_handler(request: Request, exc: ValidationError):
        errors = jsonable_encoder(exc.errors())
        logger.warning("validation_error", errors=errors, request_id=_get_request_id())
        return JSONResponse(
            status_code=422,
            content={**_response_payload("Validation error", 422), "errors": errors},
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.exception(
            "unhandled_exception",
            error=str(exc),
            error_type=type(exc).__name__,
            request_id=_get_request_id(),
        )
        return JSONResponse(
            status_code=500,
            content=_response_payload("Internal server error", 500),
        )
