"""Request body and deadline limits."""

import asyncio
import logging
from collections.abc import Callable

from fastapi import Request, Response, status
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from jpeg_resizer.middleware.error_handler import create_error_response

logger = logging.getLogger(__name__)


class BodySizeLimitMiddleware:
    """
    Rejects requests whose body exceeds ``max_bytes``.

    A declared Content-Length is checked up front. Bodies without one
    (chunked uploads) are counted as they arrive and buffered up to the
    limit, then replayed to the app.
    """

    def __init__(self, app: ASGIApp, max_bytes: int):
        self.app = app
        self._max_bytes = max_bytes

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request(scope)
        length = request.headers.get("content-length")
        if length and length.isdigit() and int(length) > self._max_bytes:
            logger.warning(f"Rejected {length} byte body on {request.url.path}")
            await self._too_large()(scope, receive, send)
            return

        body = bytearray()
        more_body = True
        while more_body:
            message = await receive()
            if message["type"] == "http.disconnect":
                logger.debug(f"Client disconnected while sending {request.url.path}")
                return
            body.extend(message.get("body", b""))
            more_body = message.get("more_body", False)
            if len(body) > self._max_bytes:
                logger.warning(
                    f"Rejected streamed body over {self._max_bytes} bytes on {request.url.path}"
                )
                await self._too_large()(scope, receive, send)
                return

        buffered = {"type": "http.request", "body": bytes(body), "more_body": False}
        replayed = False

        async def replay() -> Message:
            nonlocal replayed
            if replayed:
                return await receive()
            replayed = True
            return buffered

        await self.app(scope, replay, send)

    def _too_large(self) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            content=create_error_response(
                code="PAYLOAD_TOO_LARGE",
                message=f"Request body exceeds {self._max_bytes} bytes",
            ),
        )


class RequestTimeoutMiddleware(BaseHTTPMiddleware):
    """
    Aborts the response when a handler runs past ``timeout_seconds``.

    Only the foreground handler is cancelled; background resizes and shared
    in-flight work keep running.
    """

    def __init__(self, app, timeout_seconds: float):
        super().__init__(app)
        self._timeout = timeout_seconds

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await asyncio.wait_for(call_next(request), timeout=self._timeout)
        except (TimeoutError, asyncio.TimeoutError):
            logger.warning(f"{request.method} {request.url.path} timed out after {self._timeout}s")
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content=create_error_response(
                    code="REQUEST_TIMEOUT",
                    message="Request has timed out",
                ),
            )
