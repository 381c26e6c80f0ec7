"""Logging setup and per-request tracing."""

import logging
import time
import uuid
from collections.abc import Callable

from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from jpeg_resizer.config import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger(__name__)


def get_logger(name: str) -> logging.Logger:
    """Get a module logger (configured by setup_logging)."""
    return logging.getLogger(name)


def setup_logging(level: str | None = None) -> None:
    """Configure the root logger from settings."""
    settings = get_settings()
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format=LOG_FORMAT,
    )


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Assigns a request ID and logs each request with its latency.

    The request ID is:
    - Taken from the X-Request-ID header, or generated
    - Stored on request.state for handlers
    - Echoed in the response headers
    """

    HEADER_NAME = "X-Request-ID"

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(self.HEADER_NAME) or str(uuid.uuid4())
        request.state.request_id = request_id

        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000

        response.headers[self.HEADER_NAME] = request_id
        logger.info(
            f"{request.method} {request.url.path} -> {response.status_code} "
            f"({elapsed_ms:.1f}ms) [{request_id}]"
        )
        return response


def setup_observability(app: FastAPI) -> None:
    """Configure logging and register the request tracing middleware."""
    setup_logging()
    app.add_middleware(RequestContextMiddleware)
