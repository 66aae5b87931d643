"""Bounded admission gate for concurrent analysis requests."""

import asyncio
from collections import deque
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from subtitle_checker.concurrency.exceptions import LimiterError


class ReleaseToken:
    """Handle for one acquired permit. Can be released exactly once."""

    __slots__ = ("_limiter", "_released")

    def __init__(self, limiter: "ConcurrencyLimiter") -> None:
        self._limiter = limiter
        self._released = False

    @property
    def released(self) -> bool:
        return self._released

    def release(self) -> None:
        if self._released:
            raise LimiterError("Permit already released")
        self._released = True
        self._limiter._return_permit()


class ConcurrencyLimiter:
    """Counting gate with FIFO hand-off to waiters.

    A released permit is handed directly to the oldest waiter, so a newly
    arriving caller can never overtake a queued one.
    """

    def __init__(self, max_permits: int = 3) -> None:
        if max_permits < 1:
            raise ValueError(f"max_permits must be >= 1, got {max_permits}")
        self._max_permits = max_permits
        self._available = max_permits
        self._waiters: deque[asyncio.Future[None]] = deque()

    @property
    def max_permits(self) -> int:
        return self._max_permits

    @property
    def in_use(self) -> int:
        return self._max_permits - self._available

    @property
    def waiting(self) -> int:
        return sum(1 for waiter in self._waiters if not waiter.done())

    async def acquire(self) -> ReleaseToken:
        if self._available > 0 and not self.waiting:
            self._available -= 1
            return ReleaseToken(self)

        waiter: asyncio.Future[None] = asyncio.get_running_loop().create_future()
        self._waiters.append(waiter)
        try:
            await waiter
        except asyncio.CancelledError:
            if waiter.done() and not waiter.cancelled():
                # The permit was handed over before the cancellation landed.
                self._return_permit()
            else:
                self._discard_waiter(waiter)
            raise
        return ReleaseToken(self)

    def release(self, token: ReleaseToken) -> None:
        if token._limiter is not self:
            raise LimiterError("Token belongs to a different limiter")
        token.release()

    @asynccontextmanager
    async def permit(self) -> AsyncIterator[ReleaseToken]:
        """Hold a permit for the duration of the block, released on every exit path."""
        token = await self.acquire()
        try:
            yield token
        finally:
            if not token.released:
                token.release()

    def _return_permit(self) -> None:
        while self._waiters:
            waiter = self._waiters.popleft()
            if not waiter.done():
                waiter.set_result(None)
                return
        self._available += 1

    def _discard_waiter(self, waiter: asyncio.Future[None]) -> None:
        try:
            self._waiters.remove(waiter)
        except ValueError:
            pass
