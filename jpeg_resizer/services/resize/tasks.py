"""Tracked background tasks for asynchronous resizes."""

import asyncio
import logging
from collections.abc import Coroutine
from typing import Any

logger = logging.getLogger(__name__)


class BackgroundTasks:
    """
    Owns the tasks spawned for asynchronous resizes.

    Every task is kept in a set until it finishes so it cannot be garbage
    collected mid-flight, failures are logged, and shutdown can drain or
    cancel whatever is still running.
    """

    def __init__(self) -> None:
        self._tasks: set[asyncio.Task] = set()
        self._completed = 0
        self._failed = 0
        self._closed = False

    def __len__(self) -> int:
        return len(self._tasks)

    def spawn(self, coro: Coroutine[Any, Any, Any], name: str | None = None) -> asyncio.Task:
        """Schedule ``coro`` as a tracked task."""
        if self._closed:
            coro.close()
            raise RuntimeError("Background tasks are shut down")

        task = asyncio.create_task(coro, name=name)
        self._tasks.add(task)
        task.add_done_callback(self._on_done)
        return task

    def _on_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)

        if task.cancelled():
            logger.warning(f"Background task {task.get_name()} cancelled")
            return

        exc = task.exception()
        if exc is not None:
            self._failed += 1
            logger.error(
                f"Background task {task.get_name()} crashed: {exc!r}",
                exc_info=exc,
            )
            return

        self._completed += 1

    async def drain(self) -> None:
        """Wait for every task, including ones spawned while draining."""
        while self._tasks:
            await asyncio.wait(list(self._tasks))

    async def shutdown(self, timeout: float | None = None) -> None:
        """
        Stop accepting tasks, wait up to ``timeout`` and cancel the rest.

        Args:
            timeout: Seconds to wait for running tasks (None = forever)
        """
        self._closed = True
        if not self._tasks:
            return

        logger.info(f"Draining {len(self._tasks)} background task(s)...")
        try:
            await asyncio.wait_for(self.drain(), timeout=timeout)
        except (TimeoutError, asyncio.TimeoutError):
            pending = list(self._tasks)
            logger.warning(f"Cancelling {len(pending)} background task(s) after {timeout}s")
            for task in pending:
                task.cancel()
            await asyncio.gather(*pending, return_exceptions=True)

    def get_stats(self) -> dict[str, int]:
        return {
            "active": len(self._tasks),
            "completed": self._completed,
            "failed": self._failed,
        }
