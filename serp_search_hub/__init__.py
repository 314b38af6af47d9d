"""SERP Search Hub: aggregated, deduplicated Serper search results."""

from .models.results import QAItem, QueryResult, SearchHit, SearchResponse
from .search import SerpSearch, extensive_search, simple_search

__version__ = "0.1.0"

__all__ = [
    "QAItem",
    "QueryResult",
    "SearchHit",
    "SearchResponse",
    "SerpSearch",
    "extensive_search",
    "simple_search",
]
