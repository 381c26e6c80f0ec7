"""Source image retrieval over HTTP."""

import asyncio
import logging

import httpx

from jpeg_resizer.config import get_settings
from jpeg_resizer.services.errors import (
    ContentTypeError,
    FetchTimeoutError,
    NetworkError,
    SizeLimitError,
    StatusError,
)

logger = logging.getLogger(__name__)


class Fetcher:
    """
    Downloads source images under a time and size bound.

    Features:
    - Whole-retrieval deadline (connect, headers and body)
    - Size ceiling enforced on Content-Length and on the streamed body
    - Status and Content-Type validation
    """

    def __init__(
        self,
        timeout_seconds: float | None = None,
        max_bytes: int | None = None,
        content_type: str | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        settings = get_settings()
        self._timeout = (
            settings.fetch_timeout_seconds if timeout_seconds is None else timeout_seconds
        )
        self._max_bytes = settings.fetch_max_bytes if max_bytes is None else max_bytes
        self._content_type = (content_type or settings.fetch_content_type).lower()

        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(self._timeout),
            follow_redirects=True,
        )

    async def fetch(self, url: str) -> bytes:
        """
        Retrieve the raw bytes of a source image.

        Args:
            url: Source image URL

        Returns:
            Response body

        Raises:
            NetworkError: On connection or transport failure
            StatusError: If the response status is not 200
            ContentTypeError: If the declared type is not JPEG
            SizeLimitError: If the body exceeds the size ceiling
            FetchTimeoutError: If the retrieval exceeds the timeout
        """
        logger.info(f"Fetching {url}")
        try:
            return await asyncio.wait_for(self._download(url), timeout=self._timeout)
        except (TimeoutError, asyncio.TimeoutError, httpx.TimeoutException) as e:
            raise FetchTimeoutError(
                f"Fetch timed out after {self._timeout:.1f}s", url
            ) from e

    async def _download(self, url: str) -> bytes:
        try:
            async with self._client.stream("GET", url) as response:
                if response.status_code != httpx.codes.OK:
                    raise StatusError(
                        f"Non-200 status: {response.status_code}",
                        url,
                        status_code=response.status_code,
                    )

                declared = response.headers.get("content-type", "")
                media_type = declared.split(";", 1)[0].strip().lower()
                if media_type != self._content_type:
                    raise ContentTypeError(
                        f"Unexpected content type: {declared or 'missing'}",
                        url,
                        content_type=declared or None,
                    )

                length = response.headers.get("content-length")
                if length and length.isdigit() and int(length) > self._max_bytes:
                    raise SizeLimitError(
                        f"Declared size {int(length)} exceeds limit of {self._max_bytes} bytes",
                        url,
                    )

                buffer = bytearray()
                async for chunk in response.aiter_bytes():
                    buffer.extend(chunk)
                    if len(buffer) > self._max_bytes:
                        raise SizeLimitError(
                            f"Body exceeds limit of {self._max_bytes} bytes",
                            url,
                        )

                return bytes(buffer)

        except httpx.TimeoutException:
            raise
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise NetworkError(f"Fetch failed: {e}", url) from e

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this fetcher created it."""
        if self._owns_client:
            await self._client.aclose()
