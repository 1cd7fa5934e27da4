import asyncio
import calendar
from datetime import date

from showfinder import config
from showfinder.models import RawEventRecord, RecurringSeedRule
from showfinder.pipeline.context import RunContext
from showfinder.pipeline.orchestrator import geocode_query, run_pipeline
from showfinder.registry import Collector
from showfinder.sources.festival_guides import parse_festival_guides_text

TODAY = date(2026, 12, 20)

ROGERS = RecurringSeedRule(
    "Rogers Community Auction", "Rogers, OH", calendar.FRIDAY, 12, 12,
    40.7933, -80.6358, "http://rogersohio.com/", "Weekly Friday Flea Market", year=2026,
)

KNOWN_PLACES = {
    "Hartville, OH": (40.9691, -81.3323),
    "Canton, OH": (40.7989, -81.3784),
}


class FakeGeocoder:
    def __init__(self, places=None):
        self.places = places if places is not None else KNOWN_PLACES
        self.queries = []

    async def resolve(self, location_text):
        self.queries.append(location_text)
        return self.places.get(location_text)


def collector(name, records, state=None):
    async def collect(client):
        return records
    return Collector(name, collect, state)


def run(collectors, seed_rules=(), geocoder=None, context=None):
    context = context or RunContext(today=TODAY, echo=False)
    geocoder = geocoder or FakeGeocoder()
    events = asyncio.run(run_pipeline(
        collectors, seed_rules=list(seed_rules), context=context, geocoder=geocoder, client=object()
    ))
    return events, context, geocoder


def test_festival_guides_scenario():
    records = parse_festival_guides_text("12/15-12/20 – Winter Wonderfest V – Hartville", "OH")
    assert records[0].date_string == "12/15"
    assert records[0].location_string == "Hartville, OH"

    events, _, geocoder = run([collector("FestivalGuides (OH)", records, "OH")],
                              context=RunContext(today=date(2026, 12, 10), echo=False))

    assert len(events) == 1
    event = events[0]
    assert event.date_string == "12/15/2026"
    assert event.category == "Festivals & Fairs"
    assert (event.latitude, event.longitude) == (40.9691, -81.3323)
    assert geocoder.queries == ["Hartville, OH"]


def test_seed_wins_over_scraped_duplicate(monkeypatch):
    monkeypatch.setattr(config, "FINGERPRINT_BASIS", "date")
    scraped = [{
        "name": "Rogers Community Auction",
        "dateString": "12/25",
        "locationString": "Rogers, OH",
        "vendorInfo": "scraped copy",
    }]

    events, context, geocoder = run([collector("Directory", scraped, "OH")], seed_rules=[ROGERS])

    rogers = [e for e in events if e.name == "Rogers Community Auction"]
    assert len(rogers) == 1
    assert rogers[0].vendor_info == "Weekly Friday Flea Market"
    assert rogers[0].category == "Weekly Markets"
    assert (rogers[0].latitude, rogers[0].longitude) == (40.7933, -80.6358)
    assert context.dropped["duplicate"] == 1
    assert geocoder.queries == []


def test_output_dates_are_current_and_junk_is_dropped():
    records = [
        RawEventRecord(name="Holiday Craft Bazaar", date_string="12/21/2026", location_string="Canton, OH"),
        RawEventRecord(name="Last Year's Craft Show", date_string="1/2/2025", location_string="Canton, OH"),
        RawEventRecord(name="Mystery Vendor Event", date_string="See Link", location_string="Canton, OH"),
        RawEventRecord(name="12/5*", date_string="12/5", location_string="Canton, OH"),
        RawEventRecord(name="Yesterday's Flea Market", date_string="12/19/2026", location_string="Canton, OH"),
    ]

    events, context, _ = run([collector("Directory", records, "OH")])

    assert [e.name for e in events] == ["Holiday Craft Bazaar"]
    assert all(e.date_obj >= TODAY for e in events)
    assert events[0].category == "Arts & Crafts"
    assert context.dropped["past_date"] == 2
    assert context.dropped["unparseable_date"] == 1
    assert context.dropped["junk"] == 1


def test_failing_and_slow_collectors_contribute_nothing(monkeypatch):
    monkeypatch.setattr(config, "COLLECTOR_TIMEOUT", 0.05)

    async def broken(client):
        raise RuntimeError("layout changed")

    async def slow(client):
        await asyncio.sleep(5)
        return [RawEventRecord(name="Never Arrives Fest", date_string="12/30/2026")]

    good = [RawEventRecord(name="Canton Comic Con", date_string="Dec 28", location_string="Canton, OH")]
    collectors = [
        Collector("Broken", broken, "OH"),
        Collector("Slow", slow, "OH"),
        collector("Good", good, "OH"),
    ]

    events, context, _ = run(collectors)

    assert [e.name for e in events] == ["Canton Comic Con"]
    assert events[0].date_string == "12/28/2026"
    assert context.source_statuses["Broken"]["success"] is False
    assert context.source_statuses["Broken"]["error"] == "layout changed"
    assert context.source_statuses["Slow"]["success"] is False
    assert context.source_statuses["Good"]["success"] is True
    assert context.source_metrics["Broken"].errors == 1
    assert any("[ERROR]" in line for line in context.log_lines)


def test_records_are_tagged_with_source_and_state():
    records = [
        RawEventRecord(name="Holiday Craft Bazaar", date_string="12/21/2026", location_string="Canton"),
        RawEventRecord(name="Erie Holiday Market", date_string="12/22/2026", location_string="Erie", state="PA"),
    ]

    events, _, geocoder = run([collector("Directory (OH)", records, "OH")])

    assert [e.state for e in events] == ["OH", "PA"]
    assert all(e.source == "Directory (OH)" for e in events)
    assert geocoder.queries == ["Canton, OH", "Erie, PA"]


def test_unresolved_locations_use_sentinel(monkeypatch):
    monkeypatch.setattr(config, "UNRESOLVED_POLICY", "sentinel")
    records = [RawEventRecord(name="Nowhere Craft Fair", date_string="12/21/2026", location_string="Nowhere, OH")]

    events, context, _ = run([collector("Directory", records, "OH")])

    assert len(events) == 1
    assert (events[0].latitude, events[0].longitude) == config.SENTINEL_COORDINATES
    assert context.dropped["unresolved_location"] == 1


def test_unresolved_locations_can_be_dropped(monkeypatch):
    monkeypatch.setattr(config, "UNRESOLVED_POLICY", "drop")
    records = [RawEventRecord(name="Nowhere Craft Fair", date_string="12/21/2026", location_string="Nowhere, OH")]

    events, _, _ = run([collector("Directory", records, "OH")])

    assert events == []


def test_every_event_gets_a_unique_id():
    seeds = [ROGERS, RecurringSeedRule(
        "Hartville Marketplace", "Hartville, OH", calendar.SATURDAY, 12, 12, 40.9691, -81.3323, year=2026,
    )]
    records = [RawEventRecord(name="Holiday Craft Bazaar", date_string="12/21/2026", location_string="Canton, OH")]

    events, _, _ = run([collector("Directory", records, "OH")], seed_rules=seeds)

    ids = [e.id for e in events]
    assert len(events) == 3
    assert all(ids)
    assert len(set(ids)) == len(ids)
    assert [e.name for e in events] == [
        "Rogers Community Auction",
        "Hartville Marketplace",
        "Holiday Craft Bazaar",
    ]


def test_geocode_query_adds_missing_state():
    assert geocode_query(RawEventRecord(location_string="Canton", state="OH")) == "Canton, OH"
    assert geocode_query(RawEventRecord(location_string="Canton, OH", state="OH")) == "Canton, OH"
    assert geocode_query(RawEventRecord(location_string="Canton", state="Multi")) == "Canton"
