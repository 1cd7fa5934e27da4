from collections import Counter
from dataclasses import dataclass, field


@dataclass
class SourceMetrics:
    """Track collection metrics for each source."""
    name: str
    event_count: int = 0
    errors: int = 0
    error_messages: list = field(default_factory=list)
    duration_ms: float = 0.0


def summary_table(source_metrics):
    """Per-source table lines for the run log."""
    lines = [
        "=" * 60,
        "SOURCE SUMMARY",
        "=" * 60,
        f"{'Source':<30} {'Events':>7} {'Errors':>7} {'Time':>10}",
        "-" * 60,
    ]
    for name in sorted(source_metrics):
        m = source_metrics[name]
        time_str = f"{m.duration_ms:.0f}ms"
        lines.append(f"{name:<30} {m.event_count:>7} {m.errors:>7} {time_str:>10}")
    lines.append("-" * 60)
    total_events = sum(m.event_count for m in source_metrics.values())
    total_errors = sum(m.errors for m in source_metrics.values())
    total_time = sum(m.duration_ms for m in source_metrics.values())
    lines.append(f"{'TOTAL':<30} {total_events:>7} {total_errors:>7} {total_time:.0f}ms")
    lines.append("=" * 60)
    return lines


def breakdown(events, attr):
    """Counts of events by an attribute (category, state), largest first."""
    counts = Counter(getattr(event, attr) or "Unknown" for event in events)
    return counts.most_common()
