"""
Request throttle for the Bitvavo API.

Bitvavo asks clients to keep a minimum gap between calls (``rate_limit`` in
the exchange description, milliseconds). The throttle serialises request
starts so that concurrent callers share one pacing budget.
"""

import asyncio
import time


class RequestThrottler:
    """
    Minimum-interval throttle.
    Usage:
        throttle = RequestThrottler(rate_limit_ms=100)
        await throttle.acquire()  # blocks until the next slot is free
    """

    def __init__(self, rate_limit_ms: int, clock=time.monotonic, sleep=asyncio.sleep):
        if rate_limit_ms < 0:
            raise ValueError("rate_limit_ms must be non-negative")
        self.interval = rate_limit_ms / 1000
        self._clock = clock
        self._sleep = sleep
        self._lock = asyncio.Lock()
        self._last_start: float | None = None

    async def acquire(self) -> None:
        """Wait until ``interval`` has passed since the previous request start."""
        async with self._lock:
            now = self._clock()
            if self._last_start is not None:
                wait = self._last_start + self.interval - now
                if wait > 0:
                    await self._sleep(wait)
                    now = self._clock()
            self._last_start = now
