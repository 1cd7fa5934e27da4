import re

from showfinder import config

WEEKDAYS = r"(?:mon|tues|wednes|thurs|fri|satur|sun)day"

# Order is priority: the first rule that matches wins.
CATEGORY_RULES = (
    ("Weekly Markets", re.compile(
        r"flea market|farmers'? market|swap meet|\bweekly\b|\bevery " + WEEKDAYS + r"|trade center"
    )),
    ("Horror & Oddities", re.compile(
        r"horror|haunted|oddit(?:y|ies)|paranormal|spooky|macabre|gothic|occult|curiosities|oddmall|halloween"
    )),
    ("Cons & Expos", re.compile(
        r"comic|\bcon\b|anime|cosplay|toy show|card show|gaming|collectibles?|\bexpo\b"
    )),
    ("Parades & Carnivals", re.compile(
        r"parade|carnival|homecoming|founders'? day"
    )),
    ("Arts & Crafts", re.compile(
        r"craft|artisan|handmade|bazaar|boutique|\bmakers?\b|art show"
    )),
)

CATEGORIES = [label for label, _ in CATEGORY_RULES] + [config.DEFAULT_CATEGORY]


def classify(name, extra_text=""):
    """
    Pick a category from the event name plus any extra text (snippet, vendor info).
    Falls back to the default category; never returns None.
    """
    text = f"{name or ''} {extra_text or ''}".lower()
    for label, pattern in CATEGORY_RULES:
        if pattern.search(text):
            return label
    return config.DEFAULT_CATEGORY
