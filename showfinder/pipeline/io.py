import json
import os
import re
import shutil
import tempfile
from datetime import datetime, timedelta

from showfinder import config


def trim_log_by_time(log_path, retention_days=config.LOG_RETENTION_DAYS):
    """
    Remove log entries older than retention_days.
    Returns list of lines to keep.
    """
    if not log_path.exists():
        return []

    cutoff = datetime.utcnow() - timedelta(days=retention_days)
    cutoff_str = cutoff.strftime("%Y-%m-%d %H:%M:%S")

    kept_lines = []
    current_entry_recent = False

    with open(log_path, "r") as f:
        for line in f:
            match = re.match(r"\[(\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2})\]", line)
            if match:
                current_entry_recent = match.group(1) >= cutoff_str

            if current_entry_recent:
                kept_lines.append(line)

    return kept_lines


def save_log(log_lines, log_path=None):
    """Append this run's lines to the trimmed log file."""
    log_path = log_path or config.LOG_PATH
    existing = trim_log_by_time(log_path)
    content = existing + ["\n--- New Run ---\n"] + [line + "\n" for line in log_lines]
    log_path.parent.mkdir(parents=True, exist_ok=True)
    with open(log_path, "w") as f:
        f.writelines(content)


def load_existing_status(status_path=None):
    """Load existing scrape status file if available."""
    status_path = status_path or config.STATUS_PATH
    try:
        if status_path.exists():
            with open(status_path, "r") as f:
                return json.load(f)
    except (OSError, ValueError):
        pass
    return {"sources": {}}


def save_status(status, status_path=None):
    status_path = status_path or config.STATUS_PATH
    status_path.parent.mkdir(parents=True, exist_ok=True)
    with open(status_path, "w") as f:
        json.dump(status, f, indent=2)


def backup_output(output_path, backup_dir, timestamp=None):
    """
    Copy the current output to a timestamped backup.
    Returns the backup path, or None when there is nothing to back up.
    """
    if not output_path.exists():
        return None

    timestamp = timestamp or datetime.now().strftime("%Y-%m-%dT%H-%M-%S")
    backup_dir.mkdir(parents=True, exist_ok=True)
    backup_path = backup_dir / f"{output_path.stem}_backup_{timestamp}{output_path.suffix}"
    shutil.copy2(output_path, backup_path)
    return backup_path


def write_json_atomic(data, output_path):
    """
    Write JSON next to the target and swap it into place.
    On any failure the temp file is removed and the old output is untouched.
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{output_path.name}.", suffix=".tmp", dir=output_path.parent
    )
    try:
        with os.fdopen(fd, "w") as f:
            json.dump(data, f, indent=2)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, output_path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.remove(tmp_name)
        raise
