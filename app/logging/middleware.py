import time
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.background import BackgroundTask
from typing import Callable

from app.logging.service import record_request, USERNAME, HOSTNAME
from app.core.config import APPLICATION_ID

import logging

logger = logging.getLogger(__name__)


def _is_file_download(response) -> bool:
    content_type = response.headers.get("content-type", "")
    disposition = response.headers.get("content-disposition", "")
    return "text/csv" in content_type or disposition.startswith("attachment")


class LoggingMiddleware(BaseHTTPMiddleware):
    """Records every API request and its response in the log table."""

    excluded_paths = ["/api/docs", "/api/redoc", "/api/openapi.json"]

    def __init__(self, app):
        super().__init__(app)
        logger.info(
            f"Logging middleware initialized with username: {USERNAME} on host: {HOSTNAME}, App ID: {APPLICATION_ID}"
        )

    async def dispatch(self, request: Request, call_next: Callable):
        if any(request.url.path.startswith(path) for path in self.excluded_paths):
            return await call_next(request)

        start_time = time.time()

        body_bytes = await request.body()
        request_body = body_bytes.decode("utf-8", errors="ignore")
        # Read by the unhandled-error handler, which runs outside this middleware
        request.state.body = request_body

        # Reconstruct stream
        async def receive() -> dict:
            return {"type": "http.request", "body": body_bytes}

        request = Request(request.scope, receive=receive)

        response = await call_next(request)

        duration_ms = (time.time() - start_time) * 1000
        status_code = response.status_code
        response_body = b""
        is_download = _is_file_download(response)

        if not is_download and hasattr(response, "body_iterator"):
            original_iterator = response.body_iterator
            chunks = []

            async def buffer_iterator():
                nonlocal response_body
                async for chunk in original_iterator:
                    chunks.append(chunk)
                    yield chunk
                response_body = b"".join(chunks)

            response.body_iterator = buffer_iterator()
        elif hasattr(response, "body"):
            response_body = response.body

        def log_to_db():
            if is_download:
                body_to_log = "[File download not logged]"
            elif response_body:
                body_to_log = response_body.decode("utf-8", errors="ignore")
            else:
                body_to_log = "[Response body not available]"

            record_request(request, status_code, request_body, body_to_log, duration_ms)

        response.background = getattr(response, "background", None) or BackgroundTask(log_to_db)
        return response
