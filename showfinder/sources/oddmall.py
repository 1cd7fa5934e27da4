import re

from bs4 import BeautifulSoup

from showfinder.utils.events import clean_text

ODDMALL_URL = "https://www.oddmall.info/vendor-show-info"

# "January 18, 2026: Defiance, OH"
PARAGRAPH_PATTERN = re.compile(r"^([A-Za-z]+\.?\s+\d{1,2},\s+\d{4}):\s*(.+)$")


def parse_oddmall_html(html, url=ODDMALL_URL):
    """
    Pull shows out of the vendor-info page. A linked city ("Akron, OH")
    becomes "Oddmall Akron"; any other link text is used as the show name.
    """
    soup = BeautifulSoup(html, "html.parser")
    blocks = soup.select(".sqs-block-content") or soup.select(".sqs-block") or soup.select("main, article, .content")
    if not blocks:
        blocks = [soup]

    events = []
    for block in blocks:
        for para in block.find_all("p"):
            text = clean_text(para.get_text())
            match = PARAGRAPH_PATTERN.match(text)
            if not match:
                continue

            date_string, rest = match.group(1), match.group(2).strip()
            link = para.find("a", href=True)

            if link:
                link_text = clean_text(link.get_text())
                event_link = link["href"]
                if "," in link_text:
                    location = link_text
                    name = f"Oddmall {link_text.split(',')[0].strip()}"
                else:
                    name = link_text
                    location = rest.replace(link_text, "").strip(" -–,") or "Ohio, USA"
            else:
                event_link = url
                location = rest
                name = f"Oddmall {rest}"

            events.append({
                "name": name,
                "dateString": date_string,
                "locationString": location,
                "link": event_link,
                "vendorInfo": "Oddmall (Oddities & Curiosities)",
                "state": "OH" if "OH" in location else "Multi",
                "category": "Horror & Oddities",
            })
    return events


async def scrape_oddmall(client):
    """Scrape Oddmall's vendor show schedule."""
    html = await client.get_text(ODDMALL_URL)
    return parse_oddmall_html(html, ODDMALL_URL)
