"""Data models for search results and provider payloads."""

from .results import QAItem, QueryResult, SearchHit, SearchResponse
from .serper import SerperHit, SerperQuestion, SerperRelatedSearch

__all__ = [
    "QAItem",
    "QueryResult",
    "SearchHit",
    "SearchResponse",
    "SerperHit",
    "SerperQuestion",
    "SerperRelatedSearch",
]
