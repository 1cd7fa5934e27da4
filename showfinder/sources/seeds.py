import calendar

from showfinder import config
from showfinder.models import RawEventRecord, RecurringSeedRule
from showfinder.utils.dates import expand_recurring_dates, format_date

SEED_RULES = [
    RecurringSeedRule("Rogers Community Auction", "Rogers, OH", calendar.FRIDAY, 1, 12,
                      40.7933, -80.6358, "http://rogersohio.com/", "Weekly Friday Flea Market"),
    RecurringSeedRule("Hartville Marketplace", "Hartville, OH", calendar.FRIDAY, 1, 12,
                      40.9691, -81.3323, "https://hartvillemarketplace.com", "Hartville Market (Fri)"),
    RecurringSeedRule("Hartville Marketplace", "Hartville, OH", calendar.SATURDAY, 1, 12,
                      40.9691, -81.3323, "https://hartvillemarketplace.com", "Hartville Market (Sat)"),
    RecurringSeedRule("Hartville Marketplace", "Hartville, OH", calendar.MONDAY, 1, 12,
                      40.9691, -81.3323, "https://hartvillemarketplace.com", "Hartville Market (Mon)"),
    RecurringSeedRule("Andover Drive-In Flea Market", "Andover, OH", calendar.SATURDAY, 5, 10,
                      41.6067, -80.5739, "FB: PymatuningLakeDriveIn", "Weekly Saturday Flea"),
    RecurringSeedRule("Andover Drive-In Flea Market", "Andover, OH", calendar.SUNDAY, 5, 10,
                      41.6067, -80.5739, "FB: PymatuningLakeDriveIn", "Weekly Sunday Flea"),
    RecurringSeedRule("Traders World Flea Market", "Lebanon, OH", calendar.SATURDAY, 1, 12,
                      39.4550, -84.3466, "https://tradersworldmarket.com", "Traders World (Sat)"),
    RecurringSeedRule("Traders World Flea Market", "Lebanon, OH", calendar.SUNDAY, 1, 12,
                      39.4550, -84.3466, "https://tradersworldmarket.com", "Traders World (Sun)"),
]


def expand_seed_rules(rules, today=None):
    """One record per qualifying date of every rule, coordinates included."""
    records = []
    for rule in rules:
        for day in expand_recurring_dates(rule, today):
            records.append(RawEventRecord(
                name=rule.name,
                date_string=format_date(day),
                location_string=rule.location,
                link=rule.link,
                vendor_info=rule.description,
                state=rule.state,
                category=config.SEED_CATEGORY,
                latitude=rule.lat,
                longitude=rule.lon,
                source="Seeds",
            ))
    return records
