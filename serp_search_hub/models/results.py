"""Result models."""

from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

STRUCTURE_TYPE = "serp"


def utc_timestamp() -> str:
    """Current UTC time in RFC3339 form with second precision."""
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


class SearchHit(BaseModel):
    """A single search hit from the answer box or the organic listing."""

    model_config = ConfigDict(frozen=True)

    title: str = Field(..., description="Result title")
    url: str = Field(..., description="Result URL, the identifying key")
    snippet: str = Field(..., description="Result snippet or summary")


class QAItem(BaseModel):
    """A question/answer pair from a "People also ask" section."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    question: str = Field(..., description="Question text")
    answer: str = Field(..., description="Answer snippet")
    source_title: str = Field(..., alias="source", description="Title of the source page")
    url: str = Field(..., description="Source URL, the identifying key")


class QueryResult(BaseModel):
    """Normalized and deduplicated results for one query."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    query: str = Field(..., description="Query that produced these results")
    answer_box: SearchHit | None = Field(
        None, alias="answerBox", description="Provider's direct answer, if any"
    )
    organic_results: tuple[SearchHit, ...] = Field(
        default=(), alias="organicResults", description="Hits, unique by URL"
    )
    qa_items: tuple[QAItem, ...] = Field(
        default=(), alias="peopleAlsoAsk", description="Q&A items, unique by URL"
    )
    related_searches: tuple[str, ...] = Field(
        default=(),
        alias="relatedSearches",
        description="Related search strings in first-seen order",
    )


class SearchResponse(BaseModel):
    """Envelope combining the results of every query in one search call."""

    model_config = ConfigDict(populate_by_name=True)

    structure_type: Literal["serp"] = Field(
        STRUCTURE_TYPE, alias="structureType", description="Response shape tag"
    )
    timestamp: str = Field(
        default_factory=utc_timestamp, description="Creation time (UTC, RFC3339)"
    )
    credits: int = Field(0, ge=0, description="Provider credits spent by the call")
    queries: list[QueryResult] = Field(
        default_factory=list, description="Per-query results in input order"
    )

    def add_query_result(self, result: QueryResult, credits: int = 0) -> None:
        """Append a query's results and account for its credit cost."""
        self.queries.append(result)
        self.credits += max(0, credits)

    def to_json(self, indent: int = 2) -> str:
        """Serialize to pretty-printed JSON using the wire field names."""
        return self.model_dump_json(by_alias=True, indent=indent, exclude_none=True)
