"""Result processing package for search results.

This package contains modules for processing provider responses:
- normalizer: Decode and normalize raw Serper payloads into query results
- deduplication: URL-keyed and ordered-unique collections used while normalizing
"""

from .deduplication import OrderedUniqueList, UrlKeyedSet
from .normalizer import (
    NormalizedResponse,
    decode_payload,
    extract_credits,
    normalize_response,
)

__all__ = [
    "NormalizedResponse",
    "OrderedUniqueList",
    "UrlKeyedSet",
    "decode_payload",
    "extract_credits",
    "normalize_response",
]
