"""Tests for single-flight generation."""

import asyncio

import pytest

from neo_files.application.services import SingleFlight


class TestSingleFlight:
    """Test collapsing of concurrent calls."""

    @pytest.mark.asyncio
    async def test_concurrent_calls_share_one_run(self):
        flight = SingleFlight()
        calls = 0
        release = asyncio.Event()

        async def work():
            nonlocal calls
            calls += 1
            await release.wait()
            return "done"

        waiters = [asyncio.create_task(flight.do("key", work)) for _ in range(5)]
        await asyncio.sleep(0)
        assert len(flight) == 1

        release.set()
        assert await asyncio.gather(*waiters) == ["done"] * 5
        assert calls == 1
        assert len(flight) == 0

    @pytest.mark.asyncio
    async def test_different_keys_run_separately(self):
        flight = SingleFlight()

        async def work(value):
            await asyncio.sleep(0)
            return value

        results = await asyncio.gather(
            flight.do("a", lambda: work(1)),
            flight.do("b", lambda: work(2)),
        )
        assert results == [1, 2]

    @pytest.mark.asyncio
    async def test_error_is_shared_and_entry_cleared(self):
        flight = SingleFlight()

        async def fail():
            await asyncio.sleep(0)
            raise ValueError("boom")

        results = await asyncio.gather(
            flight.do("key", fail),
            flight.do("key", fail),
            return_exceptions=True,
        )
        assert all(isinstance(r, ValueError) for r in results)
        assert len(flight) == 0

    @pytest.mark.asyncio
    async def test_cancelled_caller_does_not_cancel_run(self):
        flight = SingleFlight()
        release = asyncio.Event()

        async def work():
            await release.wait()
            return 42

        leader = asyncio.create_task(flight.do("key", work))
        follower = asyncio.create_task(flight.do("key", work))
        await asyncio.sleep(0)

        leader.cancel()
        await asyncio.sleep(0)
        release.set()

        assert await follower == 42
        with pytest.raises(asyncio.CancelledError):
            await leader

    @pytest.mark.asyncio
    async def test_last_cancelled_caller_cancels_run(self):
        flight = SingleFlight()
        started = asyncio.Event()
        cancelled = asyncio.Event()

        async def work():
            started.set()
            try:
                await asyncio.sleep(10)
            except asyncio.CancelledError:
                cancelled.set()
                raise

        caller = asyncio.create_task(flight.do("key", work))
        await started.wait()

        caller.cancel()
        with pytest.raises(asyncio.CancelledError):
            await caller

        await asyncio.wait_for(cancelled.wait(), timeout=1.0)
        await asyncio.sleep(0)
        assert len(flight) == 0

    @pytest.mark.asyncio
    async def test_new_run_after_completion(self):
        flight = SingleFlight()
        calls = 0

        async def work():
            nonlocal calls
            calls += 1
            return calls

        assert await flight.do("key", work) == 1
        assert await flight.do("key", work) == 2
