from enum import Enum
from typing import Optional


class FetchErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    TRANSPORT = "transport"
    OTHER = "other"


class FetchError(Exception):
    """A page or API fetch failed.

    ``kind`` tells callers whether the resource is known to be absent
    (``NOT_FOUND``), the request never completed (``TRANSPORT``) or the
    response was unusable (``OTHER``).
    """

    kind = FetchErrorKind.OTHER

    def __init__(self, url: str, detail: str = "", status: Optional[int] = None,
                 kind: Optional[FetchErrorKind] = None):
        self.url = url
        self.detail = detail
        self.status = status
        if kind is not None:
            self.kind = kind
        message = f"{detail} ({url})" if detail else url
        super().__init__(message)


class NotFoundError(FetchError):
    kind = FetchErrorKind.NOT_FOUND


class TransportError(FetchError):
    kind = FetchErrorKind.TRANSPORT


class ResolutionMiss(Exception):
    """The metadata API returned nothing usable for a lookup."""


class ExtractionError(Exception):
    pass


class ExhaustedCandidatesError(ExtractionError):
    def __init__(self, message: str, last_error: Optional[Exception] = None):
        super().__init__(message)
        self.last_error = last_error
