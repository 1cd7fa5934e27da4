from dataclasses import dataclass
from functools import partial
from typing import Awaitable, Callable, Optional

from showfinder import config
from showfinder.sources.fairs_and_festivals import scrape_fairs_and_festivals
from showfinder.sources.festival_guides import scrape_festival_guides
from showfinder.sources.oddmall import scrape_oddmall


@dataclass(frozen=True)
class Collector:
    """A named source. collect(client) returns raw records (objects or dicts)."""
    name: str
    collect: Callable[..., Awaitable[list]]
    state: Optional[str] = None


def get_collectors(states=None):
    """Build the collector registry. Order matters: earlier sources win duplicates."""
    states = states or config.STATES
    collectors = [Collector("Oddmall", scrape_oddmall, "OH")]

    for state in states:
        collectors.append(Collector(
            f"FestivalGuides ({state})", partial(scrape_festival_guides, state=state), state
        ))

    for state in states:
        collectors.append(Collector(
            f"FairsAndFestivals ({state})", partial(scrape_fairs_and_festivals, state=state), state
        ))

    return collectors
