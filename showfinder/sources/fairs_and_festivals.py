from bs4 import BeautifulSoup

from showfinder.utils.events import clean_text

FAIRS_URL = "https://www.fairsandfestivals.net/states/{state}/"
BLOCKED_TITLES = ("Page Not Found", "Oops")


def parse_fairs_table(html, state):
    """Rows of the state events table: date, name (linked), location."""
    soup = BeautifulSoup(html, "html.parser")

    title = soup.title.get_text() if soup.title else ""
    if any(blocked in title for blocked in BLOCKED_TITLES):
        print(f"    FairsAndFestivals ({state}): blocked page, skipping")
        return []

    events = []
    for row in soup.select("table.events_table tr"):
        cols = row.find_all("td")
        if len(cols) < 3:
            continue

        date_text = clean_text(cols[0].get_text())
        name = clean_text(cols[1].get_text())
        location = clean_text(cols[2].get_text())
        if not name or date_text == "Date":
            continue

        link = cols[1].find("a", href=True)
        events.append({
            "name": name,
            "dateString": date_text,
            "locationString": location,
            "link": link["href"] if link else "",
            "vendorInfo": "FairsAndFestivals",
            "state": state,
        })
    return events


async def scrape_fairs_and_festivals(client, state):
    html = await client.get_text(FAIRS_URL.format(state=state))
    return parse_fairs_table(html, state)
