from dataclasses import dataclass, fields
from datetime import date
from typing import Optional

from showfinder import config
from showfinder.utils.dates import format_date

# camelCase keys used by collectors and the persisted output
RAW_KEYS = {
    "name": "name",
    "dateString": "date_string",
    "locationString": "location_string",
    "link": "link",
    "vendorInfo": "vendor_info",
    "state": "state",
    "category": "category",
    "latitude": "latitude",
    "longitude": "longitude",
    "source": "source",
}


@dataclass(frozen=True)
class RawEventRecord:
    """An event as a collector hands it over. Nothing is guaranteed."""
    name: str = ""
    date_string: str = ""
    location_string: str = ""
    link: str = ""
    vendor_info: str = ""
    state: Optional[str] = None
    category: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    source: Optional[str] = None

    @classmethod
    def from_dict(cls, data):
        """Build a record from a dict using either camelCase or field names."""
        field_names = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in data.items():
            name = RAW_KEYS.get(key, key)
            if name in field_names and value is not None:
                kwargs[name] = value
        return cls(**kwargs)

    @property
    def has_coordinates(self):
        if self.latitude is None or self.longitude is None:
            return False
        return (self.latitude, self.longitude) != config.SENTINEL_COORDINATES


@dataclass(frozen=True)
class NormalizedEvent(RawEventRecord):
    """A record with a resolved, current date and a category."""
    date_obj: Optional[date] = None

    @classmethod
    def from_raw(cls, raw, date_obj, category):
        if date_obj is None:
            raise ValueError(f"Cannot normalize {raw.name!r} without a date")
        values = {f.name: getattr(raw, f.name) for f in fields(RawEventRecord)}
        values["date_string"] = format_date(date_obj)
        values["category"] = category
        return cls(date_obj=date_obj, **values)


@dataclass(frozen=True)
class CanonicalEvent(NormalizedEvent):
    """A persisted event: coordinates (or the sentinel) and a unique id."""
    id: str = ""

    @classmethod
    def from_normalized(cls, event, latitude, longitude, id):
        if not id:
            raise ValueError("Canonical events need an id")
        values = {f.name: getattr(event, f.name) for f in fields(NormalizedEvent)}
        values["latitude"] = float(latitude)
        values["longitude"] = float(longitude)
        return cls(id=id, **values)

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name or "Unnamed Event",
            "dateString": self.date_string or "",
            "locationString": self.location_string or "",
            "latitude": self.latitude,
            "longitude": self.longitude,
            "link": self.link or "",
            "vendorInfo": self.vendor_info or "",
            "state": self.state or "",
            "category": self.category or config.DEFAULT_CATEGORY,
        }


@dataclass(frozen=True)
class RecurringSeedRule:
    """
    A hand-maintained recurring market.
    day_of_week follows date.weekday() (Monday is 0); months are 1-12.
    When year is None the rule covers the current and the next calendar year.
    """
    name: str
    location: str
    day_of_week: int
    start_month: int
    end_month: int
    lat: float
    lon: float
    link: str = ""
    description: str = ""
    year: Optional[int] = None
    state: str = "OH"
