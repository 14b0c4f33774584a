import re
import logging
from typing import List

from bs4 import BeautifulSoup

from .models import ServerEntry

logger = logging.getLogger(__name__)

OPTION_ID_RE = re.compile(r"options-(\d+)")


def clean_text(text: str) -> str:
    if not text:
        return ""
    return " ".join(text.strip().split())


class PageParser:

    def parse(self, html: str, url: str = "") -> List[ServerEntry]:
        soup = BeautifulSoup(html or "", "html.parser")
        servers = []

        for option in soup.select('div[id^="options-"]'):
            option_id = option.get("id", "")
            match = OPTION_ID_RE.fullmatch(option_id)
            if not match:
                continue

            server_number = int(match.group(1), 10)

            # src first, lazy-loaded frames only carry data-src
            iframe = option.find("iframe")
            iframe_src = ""
            if iframe:
                iframe_src = (iframe.get("src") or iframe.get("data-src") or "").strip()

            if not iframe_src:
                continue

            tab = soup.find("a", href=f"#{option_id}")
            name_elem = tab.select_one(".server") if tab else None
            server_name = clean_text(name_elem.get_text()) if name_elem else ""

            servers.append(ServerEntry(index=server_number, name=server_name, url=iframe_src))

        logger.debug(f"Parsed {len(servers)} servers from {url or 'page'}")

        # sorted() is stable, duplicate indices keep document order
        return sorted(servers, key=lambda s: s.index)
