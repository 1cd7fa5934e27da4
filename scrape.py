#!/usr/bin/env python3
"""
Collect vendor shows, craft fairs, festivals and flea markets and save one
deduplicated, geocoded events file.
Sources:
- Manual seeds (weekly markets with known coordinates)
- Oddmall vendor show schedule
- FestivalGuides state listings (OH, PA, NY, MI, IN, KY)
- FairsAndFestivals state tables
"""

import asyncio
import sys

from showfinder import config
from showfinder.pipeline.context import RunContext
from showfinder.pipeline.io import load_existing_status, save_log, save_status
from showfinder.pipeline.metrics import breakdown, summary_table
from showfinder.pipeline.orchestrator import persist, run_pipeline
from showfinder.registry import get_collectors


def build_status(context, events):
    statuses = context.source_statuses
    return {
        "last_run": context.run_timestamp,
        "all_success": all(s["success"] for s in statuses.values()),
        "any_success": any(s["success"] for s in statuses.values()),
        "total_events": len(events),
        "dropped": dict(context.dropped),
        "sources": statuses,
    }


def main():
    context = RunContext(previous_status=load_existing_status())
    context.log(f"Starting show finder run at {context.run_timestamp}")

    events = asyncio.run(run_pipeline(get_collectors(), context=context))

    context.log("")
    for line in summary_table(context.source_metrics):
        context.log(line)

    context.log(f"\nTotal events: {len(events)}")
    if context.dropped:
        dropped = ", ".join(f"{reason}={count}" for reason, count in sorted(context.dropped.items()))
        context.log(f"  Dropped: {dropped}")
    context.log("By category:")
    for category, count in breakdown(events, "category"):
        context.log(f"  - {category}: {count}")
    context.log("By state:")
    for state, count in breakdown(events, "state"):
        context.log(f"  - {state}: {count}")

    failed = [name for name, status in context.source_statuses.items() if not status["success"]]
    if failed:
        context.log(f"WARNING: Failed to collect: {', '.join(failed)}", "ERROR")

    exit_code = 0
    try:
        persist(events, context=context)
    except OSError as e:
        context.log(f"ERROR: Could not write {config.OUTPUT_PATH}: {e}", "ERROR")
        exit_code = 1

    save_status(build_status(context, events))
    context.log(f"Status saved to {config.STATUS_PATH}")

    save_log(context.log_lines)
    print(f"Log saved to {config.LOG_PATH}")
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
