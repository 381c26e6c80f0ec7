"""Tests for single-flight coalescing and background task tracking."""

import asyncio

import pytest

from jpeg_resizer.services.resize.single_flight import SingleFlight
from jpeg_resizer.services.resize.tasks import BackgroundTasks


def test_single_flight_shares_result():
    flights = SingleFlight()
    calls = []

    async def work():
        calls.append(1)
        await asyncio.sleep(0.01)
        return "done"

    async def run():
        return await asyncio.gather(*(flights.do("k", work) for _ in range(5)))

    assert asyncio.run(run()) == ["done"] * 5
    assert len(calls) == 1
    assert len(flights) == 0


def test_single_flight_shares_failure():
    flights = SingleFlight()

    async def work():
        await asyncio.sleep(0.01)
        raise ValueError("boom")

    async def run():
        return await asyncio.gather(
            flights.do("k", work), flights.do("k", work), return_exceptions=True
        )

    results = asyncio.run(run())

    assert all(isinstance(r, ValueError) for r in results)


def test_single_flight_runs_again_after_completion():
    flights = SingleFlight()
    calls = []

    async def work():
        calls.append(1)
        return len(calls)

    async def run():
        first = await flights.do("k", work)
        second = await flights.do("k", work)
        return first, second

    assert asyncio.run(run()) == (1, 2)


def test_background_tasks_track_outcomes(caplog):
    tasks = BackgroundTasks()

    async def ok():
        await asyncio.sleep(0)

    async def crash():
        raise RuntimeError("unexpected")

    async def run():
        tasks.spawn(ok(), name="ok")
        tasks.spawn(crash(), name="crash")
        assert len(tasks) == 2
        await tasks.drain()

    with caplog.at_level("ERROR"):
        asyncio.run(run())

    assert tasks.get_stats() == {"active": 0, "completed": 1, "failed": 1}
    assert "Background task crash crashed" in caplog.text


def test_shutdown_cancels_after_timeout():
    tasks = BackgroundTasks()

    async def run():
        tasks.spawn(asyncio.sleep(10), name="sleeper")
        await tasks.shutdown(timeout=0.05)

        with pytest.raises(RuntimeError):
            tasks.spawn(asyncio.sleep(0))

    asyncio.run(run())

    assert len(tasks) == 0
