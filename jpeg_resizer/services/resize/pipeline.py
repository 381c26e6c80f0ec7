"""Resize-and-cache orchestration.

Each source location in a batch is fingerprinted and looked up in the cache.
Hits are answered directly; misses run fetch -> transform -> store, either
inline (``process_resizes``) or in a tracked background task
(``process_resizes_async``). Concurrent misses for one fingerprint share a
single execution.
"""

import asyncio
import logging
from typing import Any

from jpeg_resizer.config import get_settings
from jpeg_resizer.models.domain.resize import ResizeRequest, ResizeResult
from jpeg_resizer.services.errors import BatchValidationError, ResizeError
from jpeg_resizer.services.fetcher import Fetcher
from jpeg_resizer.services.image.cache import BoundedCache
from jpeg_resizer.services.image.transformer import Transformer
from jpeg_resizer.services.resize.fingerprint import compute_fingerprint
from jpeg_resizer.services.resize.handles import ImageHandles
from jpeg_resizer.services.resize.single_flight import SingleFlight
from jpeg_resizer.services.resize.tasks import BackgroundTasks

logger = logging.getLogger(__name__)


class ResizePipeline:
    """
    Orchestrates batches of resizes against a shared cache.

    The cache, fetcher and transformer are injected; the pipeline owns the
    single-flight table and the background task set.
    """

    def __init__(
        self,
        cache: BoundedCache,
        fetcher: Fetcher,
        transformer: Transformer,
        public_base_url: str | None = None,
    ):
        settings = get_settings()
        self._cache = cache
        self._fetcher = fetcher
        self._transformer = transformer
        self._base_url = public_base_url or settings.public_base_url
        self._flights = SingleFlight()
        self._background = BackgroundTasks()
        self._background_failures = 0

    @property
    def cache(self) -> BoundedCache:
        return self._cache

    @staticmethod
    def validate(request: ResizeRequest) -> None:
        """
        Reject malformed batches before any item is processed.

        Raises:
            BatchValidationError: If the batch is empty or dimensions are negative
        """
        if not request.urls:
            raise BatchValidationError("At least one source URL is required")
        if request.width < 0:
            raise BatchValidationError("Width must not be negative", field="width")
        if request.height < 0:
            raise BatchValidationError("Height must not be negative", field="height")

    async def process_resizes(self, request: ResizeRequest) -> list[ResizeResult]:
        """
        Resize every source location, blocking until all are done.

        Items are processed in order; a failing item yields a failure result
        and never aborts its siblings.

        Args:
            request: Batch to process

        Returns:
            One result per source location, in input order
        """
        self.validate(request)

        results = []
        for url in request.urls:
            fingerprint = compute_fingerprint(request.width, request.height, url)
            handle_url = ImageHandles.url(self._base_url, fingerprint)

            if self._cache.contains(fingerprint):
                results.append(ResizeResult.success(handle_url, cached=True))
                continue

            try:
                await self._produce(fingerprint, url, request.width, request.height)
            except ResizeError as e:
                logger.warning(f"Failed to resize {url}: {e.message}")
                results.append(ResizeResult.failure())
                continue

            results.append(ResizeResult.success(handle_url, cached=False))

        return results

    async def process_resizes_async(self, request: ResizeRequest) -> list[ResizeResult]:
        """
        Answer immediately and resize cache misses in the background.

        Miss results are reported as successes before the work has run; their
        handles resolve once the background task stores the image, and never
        if it fails.

        Args:
            request: Batch to process

        Returns:
            One result per source location, in input order
        """
        self.validate(request)

        results = []
        for url in request.urls:
            fingerprint = compute_fingerprint(request.width, request.height, url)
            handle_url = ImageHandles.url(self._base_url, fingerprint)

            if self._cache.contains(fingerprint):
                results.append(ResizeResult.success(handle_url, cached=True))
                continue

            self._background.spawn(
                self._produce_in_background(fingerprint, url, request.width, request.height),
                name=f"resize:{fingerprint}",
            )
            results.append(ResizeResult.success(handle_url, cached=False))

        return results

    async def _produce(self, fingerprint: str, url: str, width: int, height: int) -> bytes:
        """Fetch, transform and store one image, sharing in-flight work."""
        return await self._flights.do(
            fingerprint,
            lambda: self._fetch_transform_store(fingerprint, url, width, height),
        )

    async def _fetch_transform_store(
        self,
        fingerprint: str,
        url: str,
        width: int,
        height: int,
    ) -> bytes:
        data = await self._fetcher.fetch(url)
        resized = await asyncio.to_thread(self._transformer.transform, data, width, height)

        logger.info(f"Caching {ImageHandles.handle(fingerprint)}")
        self._cache.put(fingerprint, resized)
        return resized

    async def _produce_in_background(
        self,
        fingerprint: str,
        url: str,
        width: int,
        height: int,
    ) -> None:
        try:
            await self._produce(fingerprint, url, width, height)
        except ResizeError as e:
            self._background_failures += 1
            logger.warning(f"Background resize of {url} failed: {e.message}")

    async def drain(self, timeout: float | None = None) -> None:
        """
        Wait for background and in-flight work to finish.

        Args:
            timeout: Seconds to wait (None = forever)
        """

        async def _wait() -> None:
            await self._background.drain()
            await self._flights.wait_idle()

        await asyncio.wait_for(_wait(), timeout=timeout)

    async def aclose(self, timeout: float | None = None) -> None:
        """Drain background work, cancel stragglers and close the fetcher."""
        if timeout is None:
            timeout = get_settings().shutdown_drain_timeout_seconds

        await self._background.shutdown(timeout)

        cancelled = self._flights.cancel_all()
        if cancelled:
            logger.warning(f"Cancelled {cancelled} in-flight resize(s)")
            await self._flights.wait_idle()

        await self._fetcher.aclose()

    def get_stats(self) -> dict[str, Any]:
        """Get pipeline statistics."""
        return {
            "background": {
                **self._background.get_stats(),
                "resize_failures": self._background_failures,
            },
            "single_flight": self._flights.get_stats(),
        }
