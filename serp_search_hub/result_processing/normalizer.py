"""Normalization of raw Serper payloads into unified query results.

The normalizer is tolerant by construction: every answer box, organic hit,
question and related search is validated on its own, and anything that does
not match the wire schema is skipped instead of failing the query. Only a body
that is not a JSON object at all is rejected, in ``decode_payload``.
"""

import json
import math
from collections.abc import Iterator
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from ..models.results import QAItem, QueryResult, SearchHit
from ..models.serper import (
    SerperEntry,
    SerperHit,
    SerperQuestion,
    SerperRelatedSearch,
)
from ..utils.errors import DecodeError
from ..utils.logging import get_logger
from .deduplication import OrderedUniqueList, UrlKeyedSet

logger = get_logger(__name__)

E = TypeVar("E", bound=SerperEntry)


class NormalizedResponse(BaseModel):
    """A normalized query result with the credits its request cost."""

    result: QueryResult
    credits: int = 0


def decode_payload(body: bytes | str, query: str | None = None) -> dict[str, Any]:
    """Decode a raw response body into a JSON object.

    Raises:
        DecodeError: If the body is not JSON or its top level is not an object
    """
    try:
        payload = json.loads(body)
    except (ValueError, RecursionError) as e:
        raise DecodeError(
            f"Error parsing response for query '{query}': {e}"
            if query is not None
            else f"Error parsing response: {e}",
            query=query,
            original_error=e,
        ) from e

    if not isinstance(payload, dict):
        raise DecodeError(query=query)

    return payload


def extract_credits(payload: dict[str, Any]) -> int:
    """Credits reported by the provider, 0 when absent or malformed."""
    credits = payload.get("credits")
    if isinstance(credits, bool) or not isinstance(credits, int | float):
        return 0
    if not math.isfinite(credits) or credits < 0:
        return 0
    return int(credits)


def _parse_entry(model: type[E], value: Any, section: str) -> E | None:
    try:
        return model.model_validate(value)
    except ValidationError as e:
        logger.debug(f"Skipping malformed {section} entry: {e.error_count()} error(s)")
        return None


def _iter_section(payload: dict[str, Any], section: str, model: type[E]) -> Iterator[E]:
    """Yield the valid entries of a repeated section."""
    entries = payload.get(section)
    if entries is None:
        return
    if not isinstance(entries, list):
        logger.debug(f"Skipping {section}: expected a list, got {type(entries).__name__}")
        return

    for value in entries:
        entry = _parse_entry(model, value, section)
        if entry is not None:
            yield entry


def _to_hit(entry: SerperHit) -> SearchHit:
    return SearchHit(title=entry.title, url=entry.link, snippet=entry.snippet)


def normalize_response(query: str, payload: dict[str, Any]) -> NormalizedResponse:
    """Convert one decoded Serper payload into a deduplicated QueryResult.

    The answer box is registered in the organic set before the organic
    listing, so an organic hit with the same URL replaces it. Organic hits and
    questions are unique by URL with the last entry winning; related searches
    keep their first occurrence.

    Args:
        query: The query the payload answers
        payload: Decoded top-level JSON object

    Returns:
        The query result and the credits reported for it
    """
    organic: UrlKeyedSet[SearchHit] = UrlKeyedSet()
    questions: UrlKeyedSet[QAItem] = UrlKeyedSet()
    related = OrderedUniqueList()

    answer_box = None
    raw_answer_box = payload.get("answerBox")
    if raw_answer_box is not None:
        entry = _parse_entry(SerperHit, raw_answer_box, "answerBox")
        if entry is not None:
            answer_box = _to_hit(entry)
            organic.add(answer_box)

    for entry in _iter_section(payload, "organic", SerperHit):
        organic.add(_to_hit(entry))

    for entry in _iter_section(payload, "peopleAlsoAsk", SerperQuestion):
        questions.add(
            QAItem(
                question=entry.question,
                answer=entry.snippet,
                source_title=entry.title,
                url=entry.link,
            )
        )

    for entry in _iter_section(payload, "relatedSearches", SerperRelatedSearch):
        related.add(entry.query)

    result = QueryResult(
        query=query,
        answer_box=answer_box,
        organic_results=organic.to_tuple(),
        qa_items=questions.to_tuple(),
        related_searches=related.to_tuple(),
    )
    return NormalizedResponse(result=result, credits=extract_credits(payload))
