import re
import uuid

FINGERPRINT_STRIP = re.compile(r"[^a-z0-9]")


def fingerprint(event, basis="date"):
    """
    Identity key for duplicate detection: name plus date (or location),
    lowercased with everything but letters and digits removed.
    """
    other = event.location_string if basis == "location" else event.date_string
    text = f"{event.name or ''}{other or ''}".lower()
    return FINGERPRINT_STRIP.sub("", text)


def generate_id():
    """Opaque unique token for a persisted event."""
    return uuid.uuid4().hex


def clean_text(text):
    """Collapse runs of whitespace and strip the ends."""
    if not text:
        return ""
    return re.sub(r"\s+", " ", str(text)).strip()
