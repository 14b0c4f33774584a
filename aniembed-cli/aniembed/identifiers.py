import re
from typing import Optional

from .models import EpisodeIdentifier

EPISODE_ID_RE = re.compile(r"^(.+?)-(\d+)x(\d+)$")
SERIES_SLUG_RE = re.compile(r"^(.+?)(?:-\d+x\d+)$")


def derive_series_slug(episode_id: str) -> str:
    # "spy-x-family-3x1" -> "spy-x-family"
    match = SERIES_SLUG_RE.match(episode_id)
    if match:
        return match.group(1)
    return episode_id


def parse_episode_id(episode_id: str) -> Optional[EpisodeIdentifier]:
    match = EPISODE_ID_RE.match(episode_id or "")
    if not match:
        return None

    season = int(match.group(2), 10)
    episode = int(match.group(3), 10)
    if season < 1 or episode < 1:
        return None

    return EpisodeIdentifier(title_slug=match.group(1), season=season, episode=episode)


def build_composite(slug: str, season: int, episode: int) -> str:
    return f"{slug}-{season}x{episode}"


def slugify_title(title: str) -> str:
    if not title:
        return ""
    slug = re.sub(r"\s+", "-", title.lower().strip())
    return re.sub(r"[^a-z0-9-]", "", slug)
