import os
import random
from typing import List

# --- Version & Metadata ---
__version__ = "0.1"
__author__ = "aniembed contributors"
__license__ = "GPL-3.0"


def _env_list(name: str, default: List[str]) -> List[str]:
    raw = os.environ.get(name, "")
    items = [item.strip() for item in raw.split(",") if item.strip()]
    return items or list(default)


# --- Scraper Configuration ---
BASE_URL = os.environ.get("ANIEMBED_BASE_URL", "https://watchanimeworld.in").rstrip("/")
EXTERNAL_API_URL = os.environ.get("ANIEMBED_EXTERNAL_API_URL", "https://anime-api-two-pi.vercel.app/api")

IMPERSONATE = os.environ.get("ANIEMBED_IMPERSONATE", "chrome120")

REQUEST_TIMEOUT = float(os.environ.get("ANIEMBED_REQUEST_TIMEOUT", "15"))
METADATA_TIMEOUT = float(os.environ.get("ANIEMBED_METADATA_TIMEOUT", "5"))

NOT_FOUND_STATUS_CODES = [404, 410]

USER_AGENTS = [
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/121.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 (KHTML, like Gecko) Version/17.2 Safari/605.1.15",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:122.0) Gecko/20100101 Firefox/122.0",
    "Mozilla/5.0 (X11; Ubuntu; Linux x86_64; rv:121.0) Gecko/20100101 Firefox/121.0",
]

HEADERS = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
    "Referer": BASE_URL,
}

JSON_HEADERS = {
    "Accept": "application/json",
    "Accept-Language": "en-US,en;q=0.9",
}

# Last-resort slugs for numeric id lookups when the metadata API has no title.
POPULAR_SLUGS = _env_list("ANIEMBED_POPULAR_SLUGS", [
    "one-punch-man",
    "one-piece",
    "naruto",
    "bleach",
    "demon-slayer",
    "jujutsu-kaisen",
    "attack-on-titan",
    "my-hero-academia",
    "dragon-ball-super",
    "spy-x-family",
    "fire-force",
    "chainsaw-man",
    "hunter-x-hunter",
    "solo-leveling",
])

# --- Logging ---
LOG_LEVEL = os.environ.get("ANIEMBED_LOG_LEVEL", os.environ.get("LOG_LEVEL", "")).upper()
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_random_user_agent() -> str:
    return random.choice(USER_AGENTS)
