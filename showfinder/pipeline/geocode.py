import requests

from showfinder import config
from showfinder.pipeline.http import PoliteClient
from showfinder.pipeline.ratelimit import RateLimiter


def city_state_fallback(query):
    """
    "123 Main St, Smalltown, OH" -> "Smalltown, OH".
    Returns None when there is nothing narrower to try.
    """
    if "," not in query:
        return None
    parts = [part.strip() for part in query.split(",")]
    city_state = ", ".join(parts[-2:]).strip(", ")
    if len(city_state) <= 5 or city_state.replace(",", "").strip().isdigit():
        return None
    if city_state == query:
        return None
    return city_state


class GeocodeResolver:
    """
    Forward geocoding against a Nominatim-style search endpoint.
    Tries the full location first and, failing that, one city/state retry.
    Misses and network errors both resolve to None.
    """

    def __init__(self, client=None, url=None, limiter=None, log_func=None):
        self.client = client or PoliteClient(
            limiter=limiter or RateLimiter(config.GEOCODE_DELAY),
            headers={"User-Agent": config.GEOCODE_USER_AGENT},
            timeout=config.GEOCODE_TIMEOUT,
        )
        self.url = url or config.GEOCODE_URL
        self.log = log_func or print
        self._cache = {}
        self.lookups = 0

    async def resolve(self, location_text):
        """Return (lat, lon) for a free-text location, or None."""
        if not location_text or len(location_text.strip()) < 3:
            return None

        query = location_text.replace("\r", "").replace("\n", ", ").strip()
        coords = await self._search(query)
        if coords:
            return coords

        fallback = city_state_fallback(query)
        if fallback:
            return await self._search(fallback)
        return None

    async def _search(self, query):
        if query in self._cache:
            return self._cache[query]

        self.lookups += 1
        try:
            data = await self.client.get_json(
                self.url,
                params={"q": query, "format": "json", "limit": 1},
            )
            coords = None
            if isinstance(data, list) and data:
                coords = (float(data[0]["lat"]), float(data[0]["lon"]))
        except (requests.exceptions.RequestException, ValueError, KeyError, TypeError) as e:
            self.log(f"  Geocode failed for {query!r}: {e}")
            coords = None

        self._cache[query] = coords
        return coords
