from .config import __version__, __author__, __license__
from .errors import ExhaustedCandidatesError, FetchError, FetchErrorKind
from .extractor import EmbedExtractor
from .models import MappingEnvelope, ServerEntry
from .resolver import MetadataResolver

__all__ = [
    "EmbedExtractor",
    "MetadataResolver",
    "MappingEnvelope",
    "ServerEntry",
    "FetchError",
    "FetchErrorKind",
    "ExhaustedCandidatesError",
    "__version__",
    "__author__",
    "__license__",
]
