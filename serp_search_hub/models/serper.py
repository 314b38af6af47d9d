"""Wire schema for Serper search responses.

Entries are validated strictly and one at a time: an entry whose fields are
missing or of the wrong JSON type fails validation and is skipped by the
normalizer. Unknown fields (positions, sitelinks, dates, ...) are ignored.
"""

from pydantic import BaseModel, ConfigDict


class SerperEntry(BaseModel):
    """Base for all Serper response entries."""

    model_config = ConfigDict(strict=True, extra="ignore", frozen=True)


class SerperHit(SerperEntry):
    """An ``answerBox`` or ``organic`` element."""

    title: str
    link: str
    snippet: str


class SerperQuestion(SerperEntry):
    """A ``peopleAlsoAsk`` element."""

    question: str
    snippet: str
    title: str
    link: str


class SerperRelatedSearch(SerperEntry):
    """A ``relatedSearches`` element."""

    query: str
