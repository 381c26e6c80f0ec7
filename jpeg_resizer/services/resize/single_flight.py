"""Coalescing of concurrent identical work."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

logger = logging.getLogger(__name__)


class SingleFlight:
    """
    Runs at most one execution per key at a time.

    Callers arriving while a key is in flight await the same task instead of
    starting their own. The task is shielded: cancelling one caller (e.g. a
    request deadline) does not cancel work other callers, or the cache,
    depend on.
    """

    def __init__(self) -> None:
        self._calls: dict[str, asyncio.Task] = {}
        self._shared = 0

    def __len__(self) -> int:
        return len(self._calls)

    def __contains__(self, key: str) -> bool:
        return key in self._calls

    async def do(self, key: str, fn: Callable[[], Awaitable[Any]]) -> Any:
        """
        Run ``fn`` for ``key``, or join the execution already in flight.

        Args:
            key: Deduplication key
            fn: Zero-argument coroutine factory

        Returns:
            The result of the shared execution (exceptions propagate to all
            callers)
        """
        task = self._calls.get(key)
        if task is None:
            task = asyncio.ensure_future(fn())
            self._calls[key] = task
            task.add_done_callback(lambda t: self._finish(key, t))
        else:
            self._shared += 1
            logger.debug(f"Joining in-flight work for {key}")

        return await asyncio.shield(task)

    def _finish(self, key: str, task: asyncio.Task) -> None:
        if self._calls.get(key) is task:
            del self._calls[key]
        # Mark the exception retrieved when every caller went away
        if not task.cancelled():
            task.exception()

    async def wait_idle(self) -> None:
        """Wait until nothing is in flight."""
        while self._calls:
            await asyncio.wait(list(self._calls.values()))

    def cancel_all(self) -> int:
        """Cancel everything in flight. Returns count cancelled."""
        tasks = list(self._calls.values())
        for task in tasks:
            task.cancel()
        return len(tasks)

    def get_stats(self) -> dict[str, int]:
        return {"in_flight": len(self._calls), "shared": self._shared}
