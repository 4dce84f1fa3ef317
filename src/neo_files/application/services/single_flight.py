"""In-process single-flight for preview generation.

Concurrent cache misses for the same preview key share one generation.
Entries live only while a generation is in flight.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Dict, Hashable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class _Flight:
    """A shared run and the number of callers awaiting it."""

    def __init__(self, task: "asyncio.Future"):
        self.task = task
        self.waiters = 0


class SingleFlight:
    """Collapses concurrent calls with the same key into one."""

    def __init__(self) -> None:
        self._inflight: Dict[Hashable, _Flight] = {}

    def __len__(self) -> int:
        return len(self._inflight)

    async def do(self, key: Hashable, factory: Callable[[], Awaitable[T]]) -> T:
        """Run ``factory`` for ``key`` unless a run is already in flight.

        The shared run is shielded: a cancelled caller stops waiting while the
        run completes for the remaining callers. When the last caller is
        cancelled the run is cancelled too.
        """
        flight = self._inflight.get(key)
        if flight is None:
            flight = _Flight(asyncio.ensure_future(factory()))
            self._inflight[key] = flight
            flight.task.add_done_callback(lambda done: self._finish(key, done))
        else:
            logger.debug(f"Joining in-flight generation for {key}")

        flight.waiters += 1
        try:
            return await asyncio.shield(flight.task)
        except asyncio.CancelledError:
            if flight.waiters == 1 and not flight.task.done():
                logger.debug(f"Cancelling generation for {key}, no callers left")
                flight.task.cancel()
            raise
        finally:
            flight.waiters -= 1

    def _finish(self, key: Hashable, task: "asyncio.Future") -> None:
        flight = self._inflight.get(key)
        if flight is not None and flight.task is task:
            del self._inflight[key]
        # nobody may be left to observe the result
        if not task.cancelled() and task.exception() is not None:
            logger.debug(f"Generation for {key} failed: {task.exception()}")
