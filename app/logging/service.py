"""Persistence of request log entries."""

import json
import socket
import getpass
import platform
import logging
from datetime import datetime
from typing import Optional

from fastapi import Request

from app.core.config import APPLICATION_ID
from app.core import database
from app.logging.models import Log

logger = logging.getLogger(__name__)


def _current_username() -> str:
    try:
        return getpass.getuser() or "unknown_user"
    except Exception:
        return "unknown_user"


def _current_hostname() -> str:
    try:
        return socket.gethostname() or platform.node() or "unknown_host"
    except Exception:
        return "unknown_host"


USERNAME = _current_username()
HOSTNAME = _current_hostname()


def safe_json_dumps(obj) -> str:
    return json.dumps(obj, indent=2, default=str)


def record_request(
    request: Request,
    status_code: int,
    request_body: Optional[str],
    response_body: Optional[str],
    processing_time: Optional[float] = None,
) -> None:
    """Write one log row. Failures are reported through the module logger only."""
    try:
        with database.SessionLocal() as session:
            session.add(
                Log(
                    timestamp=datetime.now(),
                    method=request.method,
                    path=str(request.url.path),
                    status_code=status_code,
                    client_ip=request.client.host if request.client else None,
                    request_headers=json.dumps(dict(request.headers)),
                    request_body=request_body,
                    response_body=response_body,
                    processing_time=processing_time,
                    user_agent=request.headers.get("user-agent"),
                    username=USERNAME,
                    hostname=HOSTNAME,
                    application_id=APPLICATION_ID,
                )
            )
            session.commit()
    except Exception as log_error:
        logger.warning(f"Error writing request log: {log_error}")
