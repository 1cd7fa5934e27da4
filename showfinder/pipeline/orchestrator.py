import asyncio
import dataclasses
import time
import traceback

from showfinder import config
from showfinder.models import CanonicalEvent, NormalizedEvent, RawEventRecord
from showfinder.pipeline.context import RunContext
from showfinder.pipeline.dedupe import dedupe
from showfinder.pipeline.geocode import GeocodeResolver
from showfinder.pipeline.http import PoliteClient
from showfinder.pipeline.io import backup_output, write_json_atomic
from showfinder.pipeline.metrics import SourceMetrics
from showfinder.pipeline.validate import validate_event
from showfinder.sources.seeds import SEED_RULES, expand_seed_rules
from showfinder.utils.categories import classify
from showfinder.utils.dates import is_current, resolve_date
from showfinder.utils.events import generate_id


def tag_record(record, source, state=None):
    """Fill in source and state when the collector left them empty."""
    if isinstance(record, dict):
        record = RawEventRecord.from_dict(record)
    changes = {}
    if not record.source:
        changes["source"] = source
    if not record.state and state:
        changes["state"] = state
    return dataclasses.replace(record, **changes) if changes else record


async def collect_all(collectors, client, context):
    """
    Run every collector in order, one at a time.
    A collector that raises or times out contributes nothing.
    """
    previous = (context.previous_status or {}).get("sources", {})
    records = []

    for collector in collectors:
        context.log(f"Collecting {collector.name}...")
        metrics = SourceMetrics(name=collector.name)
        start_time = time.time()

        status = {
            "last_run": context.run_timestamp,
            "success": False,
            "event_count": 0,
            "error": None,
        }
        existing = previous.get(collector.name, {})
        if existing.get("last_success"):
            status["last_success"] = existing["last_success"]
            status["last_success_count"] = existing.get("last_success_count", 0)

        try:
            found = await asyncio.wait_for(collector.collect(client), timeout=config.COLLECTOR_TIMEOUT)
            found = [tag_record(r, collector.name, collector.state) for r in found or []]
            metrics.event_count = len(found)
            context.log(f"  Found {len(found)} events")
            records.extend(found)

            status["success"] = True
            status["event_count"] = len(found)
            status["last_success"] = context.run_timestamp
            status["last_success_count"] = len(found)
        except Exception as e:
            error_msg = str(e) or type(e).__name__
            error_trace = traceback.format_exc()
            metrics.errors = 1
            metrics.error_messages.append(error_msg)
            context.log(f"  ERROR: Failed to collect {collector.name}: {error_msg}", "ERROR")
            context.log(f"  Traceback:\n{error_trace}", "ERROR")

            status["error"] = error_msg
            status["error_trace"] = error_trace

        metrics.duration_ms = (time.time() - start_time) * 1000
        context.source_metrics[collector.name] = metrics
        context.source_statuses[collector.name] = status

    return records


def normalize_records(records, context):
    """
    Junk filter, date resolution, currency filter and classification.
    Dropped records are counted on the context, not reported as errors.
    """
    normalized = []
    for record in records:
        if not validate_event(record):
            context.drop("junk")
            continue

        date_obj = resolve_date(record.date_string, context.today)
        if date_obj is None:
            context.drop("unparseable_date")
            continue
        if not is_current(date_obj, context.today):
            context.drop("past_date")
            continue

        category = record.category or classify(record.name, record.vendor_info)
        normalized.append(NormalizedEvent.from_raw(record, date_obj, category))
    return normalized


def geocode_query(event):
    """Location text for the geocoder, qualified with the state when missing."""
    query = (event.location_string or "").strip()
    if query and event.state and len(event.state) == 2 and event.state not in query:
        query = f"{query}, {event.state}"
    return query


async def geocode_events(events, geocoder, context, policy=None):
    """
    Resolve coordinates for events that lack them.
    policy "sentinel" keeps misses at (0, 0); "drop" discards them.
    """
    policy = policy or config.UNRESOLVED_POLICY
    resolved = []
    total = len(events)

    for i, event in enumerate(events, start=1):
        if event.has_coordinates:
            resolved.append(event)
            continue

        query = geocode_query(event)
        coords = await geocoder.resolve(query) if query else None
        if coords:
            context.log(f"  [{i}/{total}] {event.name[:30]} -> {coords[0]:.4f}, {coords[1]:.4f}")
            resolved.append(dataclasses.replace(event, latitude=coords[0], longitude=coords[1]))
            continue

        context.drop("unresolved_location")
        if policy == "drop":
            context.log(f"  [{i}/{total}] {event.name[:30]} -> unresolved, dropped", "WARNING")
            continue

        context.log(f"  [{i}/{total}] {event.name[:30]} -> unresolved", "WARNING")
        lat, lon = config.SENTINEL_COORDINATES
        resolved.append(dataclasses.replace(event, latitude=lat, longitude=lon))

    return resolved


def assign_ids(events):
    """Give every surviving event a fresh unique id."""
    canonical = []
    used = set()
    for event in events:
        event_id = generate_id()
        while event_id in used:
            event_id = generate_id()
        used.add(event_id)
        canonical.append(CanonicalEvent.from_normalized(event, event.latitude, event.longitude, event_id))
    return canonical


async def run_pipeline(collectors, seed_rules=SEED_RULES, context=None, geocoder=None, client=None):
    """
    Collect, normalize, dedupe, geocode and id every event for one run.
    Seed rules come first so they win duplicates against scraped copies.
    """
    context = context or RunContext()
    client = client or PoliteClient()
    geocoder = geocoder or GeocodeResolver(log_func=context.log)

    seeds = expand_seed_rules(seed_rules, context.today)
    context.log(f"Generated {len(seeds)} seed events")

    scraped = await collect_all(collectors, client, context)
    candidates = seeds + scraped
    context.log(f"\nProcessing {len(candidates)} raw events...")

    normalized = normalize_records(candidates, context)
    context.log(f"  {len(normalized)} events have valid future dates")

    unique = dedupe(normalized, context)
    context.log(f"  {len(unique)} unique events")

    context.log("\nGeocoding events...")
    located = await geocode_events(unique, geocoder, context)

    return assign_ids(located)


def persist(events, output_path=None, backup_dir=None, context=None):
    """
    Back up the previous output, then atomically replace it with the full
    result set. Errors propagate: a run without output is a failed run.
    """
    output_path = output_path or config.OUTPUT_PATH
    backup_dir = backup_dir or config.BACKUP_DIR
    log = context.log if context else print

    backup_path = backup_output(output_path, backup_dir)
    if backup_path:
        log(f"Backed up previous output to {backup_path}")

    write_json_atomic([event.to_dict() for event in events], output_path)
    log(f"Events saved to {output_path}")
    return backup_path
