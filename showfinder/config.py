import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

REPO_ROOT = Path(__file__).resolve().parents[1]
DATA_DIR = Path(os.environ.get("SHOWFINDER_DATA_DIR", REPO_ROOT / "data"))
OUTPUT_PATH = DATA_DIR / "shows.json"
BACKUP_DIR = DATA_DIR / "backups"
STATUS_PATH = DATA_DIR / "scrape-status.json"
LOG_PATH = DATA_DIR / "scrape-log.txt"
LOG_RETENTION_DAYS = 14

STATES = ["OH", "PA", "NY", "MI", "IN", "KY"]
STATE_NAMES = {
    "OH": "ohio",
    "PA": "pennsylvania",
    "NY": "new-york",
    "MI": "michigan",
    "IN": "indiana",
    "KY": "kentucky",
}

GEOCODE_URL = os.environ.get("GEOCODE_URL", "https://nominatim.openstreetmap.org/search")
GEOCODE_USER_AGENT = os.environ.get("GEOCODE_USER_AGENT", "ShowFinderApp_v1.0")
GEOCODE_DELAY = float(os.environ.get("GEOCODE_DELAY", "1.0"))
GEOCODE_TIMEOUT = 8

SCRAPE_DELAY = float(os.environ.get("SCRAPE_DELAY", "1.0"))
SCRAPE_TIMEOUT = 30
COLLECTOR_TIMEOUT = int(os.environ.get("COLLECTOR_TIMEOUT", "120"))
SCRAPE_HEADERS = {
    "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/131.0.0.0 Safari/537.36",
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
    "Connection": "keep-alive",
}

DEFAULT_CATEGORY = "Festivals & Fairs"
SEED_CATEGORY = "Weekly Markets"

# "date" keeps every occurrence of a recurring market; "location" collapses them.
FINGERPRINT_BASIS = os.environ.get("FINGERPRINT_BASIS", "date").lower()
UNRESOLVED_POLICY = os.environ.get("UNRESOLVED_POLICY", "sentinel").lower()
SENTINEL_COORDINATES = (0.0, 0.0)
