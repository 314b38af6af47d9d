"""Template-based expansion of free-text prompts into search queries."""

import re
from collections.abc import Awaitable, Sequence
from typing import Protocol, runtime_checkable

from pydantic import BaseModel, Field

from ..utils.errors import ExpansionError
from ..utils.logging import get_logger

logger = get_logger(__name__)

# Question marks, exclamation marks and semicolons always end a clause; a
# period only when followed by whitespace or the end of the prompt.
_CLAUSE_BOUNDARY = re.compile(r"[?!;]+|\.(?=\s|$)")
_WHITESPACE = re.compile(r"\s+")
_TRAILING_PUNCTUATION = " ,:-"


@runtime_checkable
class QueryExpander(Protocol):
    """Turns one prompt into an ordered sequence of search queries."""

    def expand(self, prompt: str) -> Sequence[str] | Awaitable[Sequence[str]]: ...


class RewriteTemplate(BaseModel):
    """Template for query rewriting."""

    pattern: str = Field(..., description="Regex pattern to match")
    replacement: str = Field(..., description="Replacement template with \\1, \\2, etc.")
    priority: int = Field(
        default=1, description="Priority (higher numbers = higher priority)"
    )


class QueryRewriter:
    """Splits compound prompts into focused search queries.

    The rewriter works in three steps:
    1. Split the prompt into clauses at sentence boundaries
    2. Strip conversational lead-ins from each clause with rewrite templates
    3. Drop empty and repeated clauses, keeping at most ``max_queries``
    """

    def __init__(
        self,
        max_queries: int = 5,
        templates: list[RewriteTemplate] | None = None,
    ):
        if max_queries < 1:
            raise ValueError("max_queries must be at least 1")
        self.max_queries = max_queries
        self.rewrite_templates = sorted(
            templates if templates is not None else self._default_templates(),
            key=lambda t: t.priority,
            reverse=True,
        )

    @staticmethod
    def _default_templates() -> list[RewriteTemplate]:
        """Initialize default rewrite templates."""
        return [
            # Leading conjunctions left over from splitting
            RewriteTemplate(
                pattern=r"^(?:and|also|but|or)\s+(.+)$",
                replacement=r"\1",
                priority=4,
            ),
            # Greetings
            RewriteTemplate(
                pattern=r"^(?:hey|hi|hello)\b[,!]?\s+(.+)$",
                replacement=r"\1",
                priority=3,
            ),
            # Question reformulation
            RewriteTemplate(
                pattern=r"^(?:can you |could you |please )*(?:tell me about|explain|describe)\s+(.+)$",
                replacement=r"\1",
                priority=2,
            ),
            RewriteTemplate(
                pattern=r"^i (?:want|would like|need) to know (?:about |if |whether )?(.+)$",
                replacement=r"\1",
                priority=2,
            ),
            # Requests to search on the user's behalf
            RewriteTemplate(
                pattern=r"^(?:please )?(?:can|could|would) (?:you|u) (?:please )?(?:find|search for|look up|show me|give me|get)\s+(.+)$",
                replacement=r"\1",
                priority=1,
            ),
        ]

    def split_clauses(self, prompt: str) -> list[str]:
        """Split a prompt into whitespace-normalized clauses."""
        clauses = []
        for part in _CLAUSE_BOUNDARY.split(prompt):
            clause = _WHITESPACE.sub(" ", part).strip(_TRAILING_PUNCTUATION)
            if clause:
                clauses.append(clause)
        return clauses

    def rewrite_clause(self, clause: str) -> str:
        """Apply every matching template to a clause, highest priority first."""
        rewritten = clause
        for template in self.rewrite_templates:
            if re.match(template.pattern, rewritten, re.IGNORECASE):
                rewritten = re.sub(
                    template.pattern,
                    template.replacement,
                    rewritten,
                    flags=re.IGNORECASE,
                ).strip(_TRAILING_PUNCTUATION)
        return rewritten

    def expand(self, prompt: str) -> list[str]:
        """Expand a prompt into an ordered list of unique search queries.

        Raises:
            ExpansionError: If the prompt yields no usable query
        """
        queries: list[str] = []
        seen: set[str] = set()

        for clause in self.split_clauses(prompt):
            query = self.rewrite_clause(clause)
            key = query.casefold()
            if not query or key in seen:
                continue
            seen.add(key)
            queries.append(query)
            if len(queries) == self.max_queries:
                break

        if not queries:
            raise ExpansionError("Prompt produced no search queries", prompt=prompt)

        logger.debug(f"Expanded prompt into {len(queries)} queries: {queries}")
        return queries
