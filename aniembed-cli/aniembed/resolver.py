import asyncio
import logging
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from .config import EXTERNAL_API_URL, METADATA_TIMEOUT
from .errors import FetchError, ResolutionMiss
from .fetcher import PageFetcher
from .models import ExternalMatch

logger = logging.getLogger(__name__)


def _has_title(item: Any) -> bool:
    return isinstance(item, dict) and isinstance(item.get("title"), str) and bool(item["title"].strip())


class MetadataResolver:
    """Looks anime up in the external metadata API.

    Lookups never raise: a miss, a failed request or a timeout all come back
    as ``None`` with a warning in the log.
    """

    def __init__(self, fetcher: Optional[PageFetcher] = None, api_url: str = EXTERNAL_API_URL,
                 timeout: float = METADATA_TIMEOUT):
        self.fetcher = fetcher or PageFetcher()
        self.api_url = api_url
        self.timeout = timeout

    async def _query(self, params: Optional[Dict[str, Any]], timeout: float) -> List[Dict]:
        response = await asyncio.wait_for(self.fetcher.fetch_json(self.api_url, params=params), timeout)
        if not isinstance(response, list) or not response:
            raise ResolutionMiss(f"No results for {params or 'listing'}")
        return response

    async def search_by_title(self, title: str) -> Optional[ExternalMatch]:
        try:
            results = await self._query({"q": title}, self.timeout)
            record = results[0]
            if not isinstance(record, dict) or not record.get("id"):
                raise ResolutionMiss(f"First result for '{title}' has no id")

            return ExternalMatch(
                external_id=str(record["id"]),
                numeric_id=record.get("data_id"),
                title=record.get("title") or "",
            )
        except ResolutionMiss as e:
            logger.warning(f"External API miss: {e}")
        except ValidationError as e:
            logger.warning(f"Malformed record from external API for '{title}': {e.error_count()} errors")
        except asyncio.TimeoutError:
            logger.warning(f"External API search for '{title}' timed out after {self.timeout}s")
        except FetchError as e:
            logger.warning(f"Error searching anime in external API: {e}")
        return None

    async def search_by_id(self, numeric_id: str, timeout: Optional[float] = None) -> Optional[str]:
        timeout = self.timeout if timeout is None else timeout
        try:
            # The API has no id filter, scan the full listing
            results = await self._query(None, timeout)
            for item in results:
                if _has_title(item) and str(item.get("data_id")) == str(numeric_id):
                    logger.info(f"Found anime from API: {item['title']}")
                    return item["title"]
            raise ResolutionMiss(f"No title for data_id {numeric_id}")
        except ResolutionMiss as e:
            logger.warning(f"External API miss: {e}")
        except asyncio.TimeoutError:
            logger.warning(f"External API lookup for data_id {numeric_id} timed out after {timeout}s")
        except FetchError as e:
            logger.warning(f"Could not fetch from external API: {e}")
        return None

