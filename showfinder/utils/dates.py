import calendar
import re
from datetime import date, datetime, timedelta

MONTHS = ["jan", "feb", "mar", "apr", "may", "jun", "jul", "aug", "sep", "oct", "nov", "dec"]
MONTH_PATTERN = r"\b(jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec)[a-z]*\.?"

NUMERIC_WITH_YEAR = re.compile(r"(?<![\d/])(\d{1,2})([/-])(\d{1,2})\2(\d{2,4})(?![\d/])")
NUMERIC_NO_YEAR = re.compile(r"^(\d{1,2})[/-](\d{1,2})(?:\s*[-–—]\s*(?:\d{1,2}/)?\d{1,2})?$")
TEXT_WITH_YEAR = re.compile(MONTH_PATTERN + r"\s+(\d{1,2})(?:\s*[-–—]\s*\d{1,2})?,?\s+(\d{4})", re.IGNORECASE)
TEXT_NO_YEAR = re.compile(MONTH_PATTERN + r"\s+(\d{1,2})", re.IGNORECASE)


def _today(today=None):
    if today is None:
        return date.today()
    if isinstance(today, datetime):
        return today.date()
    return today


def _build(year, month, day):
    try:
        return date(year, month, day)
    except ValueError:
        return None


def _roll_forward(month, day, today):
    """Use this year's date unless it is already behind us."""
    candidate = _build(today.year, month, day)
    if candidate is not None and candidate < today:
        candidate = _build(today.year + 1, month, day)
    return candidate


def resolve_date(text, today=None):
    """
    Parse a free-text date into a date object.
    Handles: "12/15/2026", "12/15/26", "12/15", "December 15, 2026",
    "Dec 15-17, 2026", "Dec 15".
    Dates without a year are rolled forward to their next occurrence.
    The first pattern that matches decides; returns None if nothing fits.
    """
    if not text:
        return None

    clean = str(text).strip()
    today = _today(today)

    match = NUMERIC_WITH_YEAR.search(clean)
    if match:
        year = int(match.group(4))
        if year < 100:
            year += 2000
        return _build(year, int(match.group(1)), int(match.group(3)))

    match = NUMERIC_NO_YEAR.match(clean)
    if match:
        return _roll_forward(int(match.group(1)), int(match.group(2)), today)

    match = TEXT_WITH_YEAR.search(clean)
    if match:
        month = MONTHS.index(match.group(1).lower()) + 1
        return _build(int(match.group(3)), month, int(match.group(2)))

    match = TEXT_NO_YEAR.search(clean)
    if match:
        month = MONTHS.index(match.group(1).lower()) + 1
        return _roll_forward(month, int(match.group(2)), today)

    return None


def is_current(value, today=None):
    """True when the date is today or later. Time of day is ignored."""
    if value is None:
        return False
    if isinstance(value, datetime):
        value = value.date()
    return value >= _today(today)


def format_date(value):
    """Canonical M/D/YYYY without zero padding."""
    return f"{value.month}/{value.day}/{value.year}"


def expand_recurring_dates(rule, today=None):
    """
    List every date a recurring rule falls on, from today through the end
    of the rule's month range, for the rule's year or this year and next.
    """
    today = _today(today)
    years = [rule.year] if rule.year else [today.year, today.year + 1]

    dates = []
    for year in years:
        start = max(today, date(year, rule.start_month, 1))
        last_day = calendar.monthrange(year, rule.end_month)[1]
        end = date(year, rule.end_month, last_day)

        cursor = start
        while cursor <= end:
            if cursor.weekday() == rule.day_of_week:
                dates.append(cursor)
            cursor += timedelta(days=1)

    return dates
