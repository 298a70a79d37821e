"""
Structured fan-out helpers.

``gather_settled`` launches every awaitable at once and waits for all of
them, whatever happens to their siblings, before reporting. The first
failure to settle is re-raised once everything has finished.
"""
import asyncio
from contextlib import asynccontextmanager
from typing import Any, Awaitable, Iterable, List, Optional

from .logging import get_logger

logger = get_logger('concurrency')


async def gather_settled(aws: Iterable[Awaitable[Any]]) -> List[Any]:
    """
    Run awaitables concurrently and wait for all of them to settle.

    Args:
        aws: Coroutines or futures to run

    Returns:
        Results in the order the awaitables were given

    Raises:
        Exception: The first exception raised by any awaitable, in order
            of completion, after every awaitable has finished
    """
    failures: List[BaseException] = []

    async def track(aw: Awaitable[Any]) -> Any:
        try:
            return await aw
        except Exception as e:
            failures.append(e)
            raise

    results = await asyncio.gather(*(track(aw) for aw in aws), return_exceptions=True)

    if failures:
        if len(failures) > 1:
            logger.debug(f"{len(failures)} of {len(results)} tasks failed; reporting first")
        raise failures[0]

    return results


class ConcurrencyLimiter:
    """
    Optional bound on in-flight operations.

    With ``limit=None`` the limiter admits everything immediately.
    """

    def __init__(self, limit: Optional[int] = None):
        if limit is not None and limit < 1:
            raise ValueError(f"Concurrency limit must be at least 1, got {limit}")
        self.limit = limit
        self._semaphore = asyncio.Semaphore(limit) if limit else None
        self._in_flight = 0
        self.peak = 0

    @property
    def in_flight(self) -> int:
        return self._in_flight

    @asynccontextmanager
    async def slot(self):
        """Hold one slot for the duration of the block."""
        if self._semaphore is not None:
            await self._semaphore.acquire()
        self._in_flight += 1
        self.peak = max(self.peak, self._in_flight)
        try:
            yield
        finally:
            self._in_flight -= 1
            if self._semaphore is not None:
                self._semaphore.release()
