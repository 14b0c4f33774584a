import json
import logging
from typing import Any, Dict, Optional

from curl_cffi.requests import AsyncSession
from curl_cffi.requests.exceptions import RequestException

from .config import (
    HEADERS, JSON_HEADERS, IMPERSONATE, REQUEST_TIMEOUT,
    NOT_FOUND_STATUS_CODES, get_random_user_agent,
)
from .errors import FetchError, FetchErrorKind, NotFoundError, TransportError

logger = logging.getLogger(__name__)


def classify_status(url: str, status: int) -> Optional[FetchError]:
    if status in NOT_FOUND_STATUS_CODES:
        return NotFoundError(url, f"HTTP {status}", status=status)
    if status >= 400:
        return FetchError(url, f"HTTP {status}", status=status, kind=FetchErrorKind.OTHER)
    return None


class PageFetcher:
    """Fetches pages and JSON over a browser-impersonating curl session.

    Every failure is raised as a :class:`FetchError` tagged with its kind.
    """

    def __init__(self, impersonate: str = IMPERSONATE, timeout: float = REQUEST_TIMEOUT,
                 session_factory=None):
        self.impersonate = impersonate
        self.timeout = timeout
        self._session_factory = session_factory or self._new_session

    def _new_session(self) -> AsyncSession:
        return AsyncSession(impersonate=self.impersonate)

    async def _get(self, url: str, params: Optional[Dict[str, Any]], headers: Dict[str, str]):
        try:
            async with self._session_factory() as session:
                response = await session.get(url, params=params, headers=headers, timeout=self.timeout)
        except RequestException as e:
            raise TransportError(url, str(e)) from e

        error = classify_status(url, response.status_code)
        if error:
            raise error
        return response

    async def fetch(self, url: str, params: Optional[Dict[str, Any]] = None) -> str:
        headers = HEADERS.copy()
        headers["User-Agent"] = get_random_user_agent()

        logger.debug(f"GET {url} params={params}")
        response = await self._get(url, params, headers)
        return response.text

    async def fetch_json(self, url: str, params: Optional[Dict[str, Any]] = None) -> Any:
        headers = JSON_HEADERS.copy()
        headers["User-Agent"] = get_random_user_agent()

        logger.debug(f"GET {url} params={params}")
        response = await self._get(url, params, headers)
        try:
            return json.loads(response.text)
        except ValueError as e:
            raise FetchError(url, f"Malformed JSON: {e}", status=response.status_code) from e
