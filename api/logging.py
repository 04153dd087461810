"""Structured logging and request middleware for the codec API.

This module provides:
- Structured key=value log formatting, request ID aware
- Request ID and timing middleware
- A batch progress hook that logs codec assembly progress per request

Example:
    >>> from api.logging import setup_logging
    >>> setup_logging("INFO")
"""

import logging
import sys
import time
import uuid
from contextvars import ContextVar
from typing import Callable

from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware


# Request ID of the request being served, "" outside a request
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

# LogRecord attributes that are not user-supplied extras
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", None, None)).keys()
) | {"message", "asctime"}


def _quote(value: object) -> str:
    text = str(value).replace("\n", " | ").replace('"', '\\"')
    return f'"{text}"'


class StructuredFormatter(logging.Formatter):
    """Format records as ``key=value`` pairs on a single line.

    Output:
        timestamp=ISO8601 level=LEVEL logger=NAME request_id=ID message="MSG"

    Values passed through ``extra=`` are appended after the message, e.g.
    ``logger.info("Encoded", extra={"code": "sb3b1f"})`` adds ``code="sb3b1f"``.
    """

    def format(self, record: logging.LogRecord) -> str:
        parts = [
            f"timestamp={self.formatTime(record, self.datefmt)}",
            f"level={record.levelname}",
            f"logger={record.name}",
            f"request_id={request_id_var.get() or '-'}",
            f"message={_quote(record.getMessage())}",
        ]

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                parts.append(f"{key}={_quote(value)}")

        if record.exc_info:
            parts.append(f"exception={_quote(self.formatException(record.exc_info))}")

        return " ".join(parts)


def setup_logging(log_level: str = "INFO") -> None:
    """Route the root logger to stdout through ``StructuredFormatter``.

    Existing root handlers are replaced, so calling this twice does not
    duplicate output.
    """
    level = log_level.upper()
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(StructuredFormatter(datefmt="%Y-%m-%dT%H:%M:%S%z"))
    handler.setLevel(level)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for existing in root_logger.handlers[:]:
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)

    for noisy in ("uvicorn.access", "httpx", "httpcore", "python_multipart"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def batch_progress_logger(operation: str) -> Callable[[int, int], None]:
    """Build an ``on_batch`` hook that logs assembly progress at DEBUG.

    The hook runs on the worker thread; the request ID is copied into the
    thread's context by ``run_in_threadpool`` so records stay correlated.
    """
    logger = logging.getLogger("api.progress")

    def on_batch(done: int, total: int) -> None:
        logger.debug("%s progress: %d/%d segments", operation, done, total)

    return on_batch


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Assign a request ID to each request.

    An incoming ``X-Request-ID`` header is reused, otherwise a UUID4 is
    generated. The ID is stored on ``request.state``, in ``request_id_var``
    and echoed in the ``X-Request-ID`` response header.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id
        token = request_id_var.set(request_id)
        try:
            response = await call_next(request)
            response.headers["X-Request-ID"] = request_id
            return response
        finally:
            request_id_var.reset(token)


class TimingMiddleware(BaseHTTPMiddleware):
    """Log each request's duration and set ``X-Response-Time``."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        response.headers["X-Response-Time"] = f"{duration_ms:.2f}ms"
        logging.getLogger("api.timing").info(
            "method=%s path=%s status=%d duration_ms=%.2f",
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
        )
        return response


def add_middleware(app: FastAPI) -> None:
    """Install the request ID and timing middleware on ``app``."""
    # Added last runs first: request ID must be set before timing logs
    app.add_middleware(TimingMiddleware)
    app.add_middleware(RequestIDMiddleware)
