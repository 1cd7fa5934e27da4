import re

from showfinder import config
from showfinder.models import RawEventRecord
from showfinder.pipeline.validate import is_junk_name
from showfinder.utils.html import content_root, text_lines

FESTIVAL_GUIDES_URL = "https://festivalguidesandreviews.com/{state_name}-festivals/"

# "12/15-12/20 – Winter Wonderfest V – Hartville"
SEPARATOR = r"(?:\s*[–—]\s*|\s+-\s+)"
LINE_PATTERN = re.compile(
    r"^(\d{1,2}/\d{1,2}(?:-\d{1,2}(?:/\d{1,2})?)?)" + SEPARATOR + r"(.+?)" + SEPARATOR + r"(.+)$"
)


def parse_festival_guides_text(text, state, url=""):
    """
    Parse DATE – NAME – CITY lines. Ranges keep only their first date and
    the city is qualified with the state.
    """
    events = []
    for line in text.splitlines():
        match = LINE_PATTERN.match(line.strip())
        if not match:
            continue

        date_raw, name, city = (part.strip() for part in match.groups())
        city = city.replace("My Review", "").strip()
        if is_junk_name(name) or not city:
            continue

        events.append(RawEventRecord(
            name=name,
            date_string=date_raw.split("-")[0],
            location_string=f"{city}, {state}",
            link=url,
            vendor_info="FestivalGuides",
            state=state,
        ))
    return events


async def scrape_festival_guides(client, state):
    """Scrape one state's listing page from FestivalGuides."""
    state_name = config.STATE_NAMES.get(state)
    if not state_name:
        return []

    url = FESTIVAL_GUIDES_URL.format(state_name=state_name)
    html = await client.get_text(url)
    lines = text_lines(content_root(html, [".entry-content"]))
    return parse_festival_guides_text("\n".join(lines), state, url)
