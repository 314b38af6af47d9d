"""Serper search provider transport."""

import json

import httpx

from ..config.settings import DEFAULT_SERPER_ENDPOINT
from ..utils.errors import (
    NetworkConnectionError,
    NetworkError,
    NetworkTimeoutError,
    RequestBuildError,
)
from ..utils.logging import get_logger

logger = get_logger(__name__)


class SerperProvider:
    """Posts queries to the Serper search API and returns raw response bodies.

    One attempt is made per query; failures are raised as NetworkError
    subclasses and never retried here.
    """

    name = "serper"

    def __init__(
        self,
        api_key: str,
        endpoint: str = DEFAULT_SERPER_ENDPOINT,
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ):
        """Initialize the provider.

        Args:
            api_key: Serper API key, sent in the X-API-KEY header
            endpoint: Search endpoint URL
            timeout: Request timeout in seconds
            client: Optional externally managed HTTP client
        """
        self.api_key = api_key
        self.endpoint = endpoint
        self.timeout = timeout
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(timeout=timeout)

    def build_request(self, query: str, num_results: int) -> httpx.Request:
        """Build the POST request for a query."""
        try:
            body = json.dumps({"q": query, "num": num_results})
            return self.client.build_request(
                "POST",
                self.endpoint,
                headers={
                    "X-API-KEY": self.api_key,
                    "Content-Type": "application/json",
                },
                content=body,
                timeout=self.timeout,
            )
        except (TypeError, ValueError, httpx.InvalidURL) as e:
            raise RequestBuildError(
                f"Error creating request: {e}",
                query=query,
                provider=self.name,
                original_error=e,
            ) from e

    async def post(self, query: str, num_results: int) -> bytes:
        """Execute a search request and return the raw response body.

        Raises:
            RequestBuildError: If the request cannot be constructed
            NetworkTimeoutError: If the request times out
            NetworkConnectionError: If the endpoint cannot be reached
            NetworkError: For HTTP error statuses and other transport failures
        """
        request = self.build_request(query, num_results)

        try:
            response = await self.client.send(request)
            response.raise_for_status()
        except httpx.TimeoutException as e:
            raise NetworkTimeoutError(
                url=self.endpoint,
                timeout=self.timeout,
                provider=self.name,
                original_error=e,
            ) from e
        except httpx.ConnectError as e:
            raise NetworkConnectionError(
                url=self.endpoint, provider=self.name, original_error=e
            ) from e
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            raise NetworkError(
                f"Serper returned HTTP {status} for query '{query}'",
                url=self.endpoint,
                provider=self.name,
                original_error=e,
                details={"http_status": status},
            ) from e
        except httpx.HTTPError as e:
            raise NetworkError(
                f"Error making request: {e}",
                url=self.endpoint,
                provider=self.name,
                original_error=e,
            ) from e

        logger.debug(f"Serper answered '{query}' with {len(response.content)} bytes")
        return response.content

    async def close(self):
        """Close the HTTP client if this provider created it."""
        if self._owns_client:
            await self.client.aclose()
