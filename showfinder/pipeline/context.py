from collections import Counter
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional


@dataclass
class RunContext:
    """
    State owned by a single pipeline run: the reference "today", the seen
    fingerprints used for dedup, drop counters and the buffered run log.
    """
    today: date = field(default_factory=date.today)
    run_timestamp: str = field(default_factory=lambda: datetime.utcnow().isoformat() + "Z")
    seen_fingerprints: set = field(default_factory=set)
    dropped: Counter = field(default_factory=Counter)
    source_statuses: dict = field(default_factory=dict)
    source_metrics: dict = field(default_factory=dict)
    log_lines: list = field(default_factory=list)
    echo: bool = True
    previous_status: Optional[dict] = None

    def log(self, message, level="INFO"):
        """Log a message to both console and log buffer."""
        timestamp = datetime.utcnow().strftime("%Y-%m-%d %H:%M:%S")
        self.log_lines.append(f"[{timestamp}] [{level}] {message}")
        if self.echo:
            print(message)

    def drop(self, reason, count=1):
        self.dropped[reason] += count
