import asyncio

import requests

from showfinder import config
from showfinder.pipeline.ratelimit import RateLimiter


class PoliteClient:
    """
    requests wrapper that waits on a RateLimiter before every call and runs
    the blocking request in a worker thread, one request at a time.
    The limiter is marked when the response (or error) comes back.
    """

    def __init__(self, limiter=None, headers=None, timeout=None, session=None):
        self.limiter = limiter or RateLimiter(config.SCRAPE_DELAY)
        self.headers = headers if headers is not None else config.SCRAPE_HEADERS
        self.timeout = timeout or config.SCRAPE_TIMEOUT
        self.session = session or requests.Session()

    async def get(self, url, params=None):
        await self.limiter.acquire()
        try:
            return await asyncio.to_thread(
                self.session.get,
                url,
                params=params,
                headers=self.headers,
                timeout=self.timeout,
            )
        finally:
            self.limiter.mark()

    async def get_text(self, url, params=None):
        """Fetch a page and return its body; raises on HTTP errors."""
        resp = await self.get(url, params=params)
        resp.raise_for_status()
        return resp.text

    async def get_json(self, url, params=None):
        resp = await self.get(url, params=params)
        resp.raise_for_status()
        return resp.json()
