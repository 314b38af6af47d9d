"""Query fan-out over the Serper search provider.

A search call runs its queries strictly one after another: each response is
decoded, normalized and appended to a single envelope in input order. The
first failing query aborts the whole call, so callers either get a complete
SearchResponse or an exception, never a partial envelope.
"""

import inspect
from collections.abc import Awaitable, Callable, Iterable, Sequence
from typing import Protocol

from .config import AppSettings, get_settings
from .models.results import SearchResponse
from .providers.serper import SerperProvider
from .query_routing.query_rewriter import QueryExpander, QueryRewriter
from .result_processing.normalizer import decode_payload, normalize_response
from .utils.errors import (
    ExpansionError,
    MissingConfigurationError,
    NetworkError,
    SearchError,
    format_exception,
)
from .utils.logging import get_logger

logger = get_logger(__name__)

API_KEY_SETTING = "SERP_API_KEY"


class SearchTransport(Protocol):
    """Performs one provider request per query."""

    async def post(self, query: str, num_results: int) -> bytes: ...

    async def close(self) -> None: ...


ExpanderFunc = Callable[[str], Iterable[str] | Awaitable[Iterable[str]]]


class SerpSearch:
    """Runs simple and extensive searches and assembles their envelopes."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        transport: SearchTransport | None = None,
        expander: QueryExpander | ExpanderFunc | None = None,
    ):
        """Initialize the searcher.

        Args:
            settings: Application settings (defaults to the cached settings)
            transport: Request transport; a SerperProvider is created on first
                use when omitted and closed by ``close``
            expander: Prompt expander for extensive searches, either an object
                with an ``expand`` method or a plain callable
        """
        self.settings = settings or get_settings()
        self._transport = transport
        self._owns_transport = transport is None
        self.expander = expander or QueryRewriter(
            max_queries=self.settings.rewriter.max_queries
        )

    async def __aenter__(self) -> "SerpSearch":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    def _require_api_key(self) -> str:
        api_key = self.settings.get_api_key()
        if api_key is None:
            raise MissingConfigurationError(
                API_KEY_SETTING,
                message=f"Missing credential: {API_KEY_SETTING} is not set",
            )
        return api_key

    def _get_transport(self, api_key: str) -> SearchTransport:
        if self._transport is None:
            self._transport = SerperProvider(
                api_key=api_key,
                endpoint=self.settings.serper.endpoint,
                timeout=self.settings.serper.timeout,
            )
        return self._transport

    async def search(self, queries: Sequence[str]) -> SearchResponse:
        """Search every query in order and merge the results.

        Args:
            queries: Queries to run, in the order their results should appear

        Returns:
            The envelope with one QueryResult per query

        Raises:
            ConfigurationError: If the provider credential is missing
            RequestBuildError: If a request cannot be constructed
            NetworkError: If a request fails
            DecodeError: If a response body is not a JSON object
        """
        if isinstance(queries, str):
            raise TypeError("queries must be a sequence of strings, not a string")
        queries = list(queries)

        transport = self._get_transport(self._require_api_key())
        num_results = self.settings.serper.num_results
        response = SearchResponse()

        for index, query in enumerate(queries, start=1):
            logger.info(f"Searching query {index}/{len(queries)}: {query}")
            try:
                body = await transport.post(query, num_results)
            except SearchError as e:
                logger.error(
                    f"Search aborted on query '{query}': {e}",
                    extra={"error": format_exception(e)},
                )
                raise
            except Exception as e:
                logger.error(
                    f"Search aborted on query '{query}': {e}",
                    extra={"error": format_exception(e)},
                )
                raise NetworkError.from_exception(
                    e, f"Error making request: {e}"
                ) from e

            try:
                payload = decode_payload(body, query=query)
            except SearchError as e:
                logger.error(
                    f"Search aborted on query '{query}': {e}",
                    extra={"error": format_exception(e)},
                )
                raise

            normalized = normalize_response(query, payload)
            response.add_query_result(normalized.result, normalized.credits)

        logger.info(
            f"Completed {len(response.queries)} queries using "
            f"{response.credits} credits"
        )
        return response

    async def expand(self, prompt: str) -> list[str]:
        """Expand a prompt into sub-queries with the configured expander.

        Raises:
            ExpansionError: If the expander fails or yields no usable queries
        """
        expand = getattr(self.expander, "expand", self.expander)
        try:
            queries = expand(prompt)
            if inspect.isawaitable(queries):
                queries = await queries
            if isinstance(queries, str):
                raise TypeError("expander returned a string, not a sequence")
            queries = list(queries)
        except ExpansionError:
            raise
        except Exception as e:
            logger.error(
                f"Query expansion failed: {e}",
                extra={"error": format_exception(e)},
            )
            raise ExpansionError.from_exception(
                e, f"Error expanding prompt: {e}", prompt=prompt
            ) from e

        if not queries:
            raise ExpansionError("Prompt produced no search queries", prompt=prompt)
        if not all(isinstance(q, str) for q in queries):
            raise ExpansionError(
                "Expander returned non-string queries", prompt=prompt
            )
        if any(not q.strip() for q in queries):
            raise ExpansionError("Expander returned blank queries", prompt=prompt)
        return queries

    async def simple_search_response(self, query: str) -> SearchResponse:
        """Search the literal query."""
        return await self.search([query])

    async def extensive_search_response(self, prompt: str) -> SearchResponse:
        """Expand the prompt into sub-queries and search each of them."""
        self._require_api_key()
        queries = await self.expand(prompt)
        logger.info(f"Extensive search expanded into {len(queries)} queries")
        return await self.search(queries)

    async def simple_search(self, query: str) -> str:
        """Basic search for one query, returned as pretty-printed JSON."""
        response = await self.simple_search_response(query)
        return response.to_json()

    async def extensive_search(self, prompt: str) -> str:
        """Deep search over the prompt's sub-queries, returned as pretty-printed JSON."""
        response = await self.extensive_search_response(prompt)
        return response.to_json()

    async def close(self) -> None:
        """Close the transport if this searcher created it."""
        if self._owns_transport and self._transport is not None:
            await self._transport.close()
            self._transport = None


async def simple_search(query: str, settings: AppSettings | None = None) -> str:
    """Run a simple search with a short-lived searcher."""
    async with SerpSearch(settings=settings) as searcher:
        return await searcher.simple_search(query)


async def extensive_search(prompt: str, settings: AppSettings | None = None) -> str:
    """Run an extensive search with a short-lived searcher."""
    async with SerpSearch(settings=settings) as searcher:
        return await searcher.extensive_search(prompt)
