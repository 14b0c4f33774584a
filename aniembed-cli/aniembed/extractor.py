import logging
from typing import Any, Dict, List, Optional, Sequence
from urllib.parse import urlparse

from .config import BASE_URL, POPULAR_SLUGS, METADATA_TIMEOUT
from .errors import ExhaustedCandidatesError, FetchError, FetchErrorKind
from .fetcher import PageFetcher
from .identifiers import build_composite, derive_series_slug, parse_episode_id, slugify_title
from .models import ExternalApiMapping, ExtractionResult, MappingEnvelope, ServerEntry
from .parser import PageParser
from .resolver import MetadataResolver

logger = logging.getLogger(__name__)


def is_not_found(error: FetchError) -> bool:
    return error.kind is FetchErrorKind.NOT_FOUND


def slug_from_title(title: Optional[str]) -> Optional[str]:
    if not title:
        return None
    return slugify_title(title) or None


class EmbedExtractor:
    """Finds the embed servers of an episode on the anime site.

    Pages are tried in a fixed order (episode, series, movie) and only a
    "not found" answer moves on to the next one. Any other fetch failure is
    raised straight away.
    """

    def __init__(
        self,
        fetcher: Optional[PageFetcher] = None,
        parser: Optional[PageParser] = None,
        resolver: Optional[MetadataResolver] = None,
        base_url: str = BASE_URL,
        popular_slugs: Optional[Sequence[str]] = None,
        metadata_timeout: float = METADATA_TIMEOUT,
    ):
        self.base_url = base_url.rstrip('/')
        self.fetcher = fetcher or PageFetcher()
        self.parser = parser or PageParser()
        self.resolver = resolver or MetadataResolver(self.fetcher, timeout=metadata_timeout)
        self.popular_slugs = list(POPULAR_SLUGS if popular_slugs is None else popular_slugs)
        self.metadata_timeout = metadata_timeout

    def get_source_name(self) -> str:
        return urlparse(self.base_url).netloc or self.base_url

    def _episode_url(self, episode_id: str) -> str:
        return f"{self.base_url}/episode/{episode_id}/"

    def _detail_urls(self, slug: str) -> List[str]:
        return [
            f"{self.base_url}/series/{slug}/",
            f"{self.base_url}/movies/{slug}/",
        ]

    async def _attempt(self, url: str, params: Optional[Dict[str, Any]] = None) -> List[ServerEntry]:
        html = await self.fetcher.fetch(url, params=params)
        return self.parser.parse(html, url)

    async def _try_urls(self, urls: Sequence[str], label: str) -> List[ServerEntry]:
        last_error = None
        for url in urls:
            try:
                logger.info(f"Trying detail URL: {url}")
                return await self._attempt(url)
            except FetchError as e:
                if not is_not_found(e):
                    raise
                logger.debug(f"Detail URL failed: {url}")
                last_error = e

        raise ExhaustedCandidatesError(f"Could not find any page for {label}", last_error)

    async def _retrieve(self, episode_id: str) -> List[ServerEntry]:
        episode_url = self._episode_url(episode_id)
        try:
            return await self._attempt(episode_url)
        except FetchError as e:
            if not is_not_found(e):
                raise
            logger.info(f"Episode page not found, trying details page for: {episode_id}")

        series_id = derive_series_slug(episode_id)
        return await self._try_urls(self._detail_urls(series_id), episode_id)

    async def extract_from_url(self, episode_id: str) -> ExtractionResult:
        servers = await self._retrieve(episode_id)
        return ExtractionResult(id=episode_id, servers=servers)

    async def get_embed_with_mapping(self, episode_id: str) -> MappingEnvelope:
        mapping = None
        parsed = parse_episode_id(episode_id)
        if not parsed:
            logger.warning(f"Could not parse episode ID: {episode_id}")
        else:
            match = await self.resolver.search_by_title(parsed.title_slug)
            if match:
                mapping = ExternalApiMapping(
                    anime_id=match.external_id,
                    data_id=match.numeric_id,
                    title=match.title or parsed.title_slug,
                    season=parsed.season,
                    episode=parsed.episode,
                )

        if not mapping:
            logger.info(f"Could not map {episode_id} with external API, falling back to direct extraction")

        # The mapping only enriches the result, retrieval always uses the requested id
        data = await self.extract_from_url(episode_id)
        return MappingEnvelope(id=episode_id, servers=data.servers, external_api_mapping=mapping)

    async def get_embed_by_data_id_and_episode(self, data_id: str, season: int, episode: int) -> MappingEnvelope:
        logger.info(f"Searching for data_id: {data_id}, season: {season}, episode: {episode}")

        title = await self.resolver.search_by_id(data_id, self.metadata_timeout)
        slug = slug_from_title(title)
        if slug:
            candidates = [slug]
        else:
            logger.warning(f"No title found for data_id: {data_id}, using fallback patterns")
            candidates = self.popular_slugs

        last_error = None
        for candidate in candidates:
            constructed_id = build_composite(candidate, season, episode)
            logger.info(f"Trying constructed ID: {constructed_id}")
            try:
                servers = await self._retrieve(constructed_id)
            except ExhaustedCandidatesError as e:
                last_error = e
                continue

            return MappingEnvelope(
                id=f"{data_id}/{season}/{episode}",
                servers=servers,
                external_api_mapping=ExternalApiMapping(
                    data_id=str(data_id),
                    season=season,
                    episode=episode,
                    title=title or "Unknown",
                    constructed_id=constructed_id,
                ),
            )

        raise ExhaustedCandidatesError(f"Could not find any page for data_id: {data_id}", last_error)

    async def get_embed_by_data_id(self, data_id: str, season: int) -> MappingEnvelope:
        result_id = f"{data_id}-season-{season}"
        query_url = f"{self.base_url}/episode/"
        title = None

        try:
            servers = await self._attempt(query_url, params={"data_id": data_id, "season": season})
        except FetchError as e:
            if not is_not_found(e):
                raise
            logger.info(f"Could not fetch using data_id URL, trying search: {data_id}")

            title = await self.resolver.search_by_id(data_id, self.metadata_timeout)
            slug = slug_from_title(title)
            if not slug:
                raise ExhaustedCandidatesError(f"Could not find any page for data_id: {data_id}", e)
            servers = await self._try_urls(self._detail_urls(slug), f"data_id: {data_id}")

        return MappingEnvelope(
            id=result_id,
            servers=servers,
            external_api_mapping=ExternalApiMapping(data_id=str(data_id), season=season, title=title),
        )

