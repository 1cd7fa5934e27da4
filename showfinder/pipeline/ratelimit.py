import asyncio
import time


class RateLimiter:
    """
    Fixed politeness delay between external calls.
    acquire() returns once at least `interval` seconds have passed since the
    previous call finished (or since the limiter was created). Callers mark()
    the limiter when their request completes, so a slow response never eats
    into the pause before the next one. Not meant for concurrent callers.
    """

    def __init__(self, interval, clock=time.monotonic, sleep=asyncio.sleep):
        self.interval = interval
        self._clock = clock
        self._sleep = sleep
        self._last = clock()
        self.calls = 0

    async def acquire(self):
        wait = self.interval - (self._clock() - self._last)
        if wait > 0:
            await self._sleep(wait)
        self._last = self._clock()
        self.calls += 1

    def mark(self):
        """Restart the interval from now; call when a request has finished."""
        self._last = self._clock()
