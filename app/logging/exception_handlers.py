# app/logging/exception_handlers.py
"""Render every error as ``{"error": message}``."""

import logging
import traceback
from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse
from fastapi.exceptions import ResponseValidationError, RequestValidationError

from app.logging.service import record_request, safe_json_dumps

logger = logging.getLogger(__name__)


def _describe_validation_errors(errors) -> str:
    parts = []
    for error in errors:
        location = ".".join(str(p) for p in error.get("loc", ()) if p != "body")
        message = error.get("msg", "Invalid value")
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts) or "Invalid request"


async def http_exception_handler(request: Request, exc: HTTPException):
    """Handle HTTP exceptions raised by services and routers"""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.detail}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies and path parameters are bad requests"""
    return JSONResponse(
        status_code=400,
        content={"error": _describe_validation_errors(exc.errors())},
    )


async def response_validation_exception_handler(request: Request, exc: ResponseValidationError):
    logger.error(f"Response validation failed for {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=500,
        content={"error": "Internal Server Error: Response validation failed."},
    )


async def general_exception_handler(request: Request, exc: Exception):
    """Handle all unhandled exceptions and log them to database"""
    error_traceback = traceback.format_exc()
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}")

    # Runs outside LoggingMiddleware, so the request is recorded here.
    record_request(
        request,
        500,
        getattr(request.state, "body", None),
        safe_json_dumps({"error": str(exc), "type": type(exc).__name__, "traceback": error_traceback}),
    )

    return JSONResponse(
        status_code=500,
        content={"error": "Internal Server Error"},
    )
