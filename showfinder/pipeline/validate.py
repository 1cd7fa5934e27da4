import re

MIN_NAME_LENGTH = 8
DATE_ONLY_NAME = re.compile(r"^\d{1,2}/\d{1,2}")


def is_junk_name(name):
    """Navigation text, bare dates and asterisked footnotes scraped as names."""
    if not name or len(name.strip()) < MIN_NAME_LENGTH:
        return True
    if DATE_ONLY_NAME.match(name.strip()):
        return True
    if "*" in name:
        return True
    return False


def validate_event(event):
    """Check that a raw record has a usable name and something that could be a date."""
    if is_junk_name(event.name):
        return False
    if not event.date_string:
        return False
    return True
