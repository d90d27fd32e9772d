"""GraphQL executor for sending documents to a GraphQL endpoint.

Handles HTTP communication, error classification, and response parsing.
"""

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from .auth import Auth, NoAuth
from .errors import GraphQLError, SchemaLoadError, TransportError
from .introspection import INTROSPECTION_QUERY
from .ir import IntrospectionSchema
from .query_builder import QueryDocument

logger = logging.getLogger(__name__)


class GraphQLExecutor:
    """Executes GraphQL documents against one endpoint.

    Examples:
        executor = GraphQLExecutor(url)
        executor = GraphQLExecutor(url, auth=BearerAuth(token))

        async with GraphQLExecutor(url) as executor:
            schema = await executor.fetch_schema()
            result = await executor.execute("query { __typename }")
    """

    def __init__(
        self,
        url: str,
        auth: Auth | None = None,
        *,
        headers: dict[str, str] | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the executor.

        Args:
            url: GraphQL endpoint URL
            auth: Authentication handler (implements Auth protocol)
            headers: Extra headers sent with every request
            timeout: Request timeout in seconds
            transport: Optional httpx transport, e.g. ``httpx.MockTransport`` in tests
        """
        self.url = url
        self.timeout = timeout
        self._auth = auth or NoAuth()
        self._extra_headers = dict(headers or {})
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "GraphQLExecutor":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            headers = {"Content-Type": "application/json"}
            headers.update(self._auth.get_headers())
            headers.update(self._extra_headers)

            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                headers=headers,
                transport=self._transport,
                follow_redirects=True,
            )
        return self._client

    async def close(self):
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def execute(
        self,
        query: str,
        variables: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Execute a GraphQL document.

        Args:
            query: GraphQL document
            variables: Query variables

        Returns:
            The full JSON response (``data`` plus any ``extensions``)

        Raises:
            TransportError: On network failure, a non-2xx status or a non-JSON body
            GraphQLError: If the response, whatever its status, contains a
                non-empty ``errors`` array
        """
        client = self._get_client()
        payload = QueryDocument(query, variables or {}).payload()

        logger.debug("POST %s", self.url)
        try:
            response = await client.post(self.url, json=payload)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            # Rejected documents often come back as 4xx with an errors array
            errors = _response_errors(e.response)
            if errors:
                raise GraphQLError.from_errors(errors) from e
            raise TransportError(str(e), status_code=e.response.status_code) from e
        except httpx.HTTPError as e:
            raise TransportError(str(e) or type(e).__name__) from e

        try:
            result = response.json()
        except ValueError as e:
            raise TransportError(f"Invalid JSON response: {e}", response.status_code) from e

        if not isinstance(result, dict):
            raise TransportError("Unexpected response shape", response.status_code)

        if result.get("errors"):
            raise GraphQLError.from_errors(result["errors"])

        return result

    async def fetch_schema(self) -> IntrospectionSchema:
        """Run the introspection query and parse the returned schema.

        Raises:
            SchemaLoadError: If the response has no usable ``__schema``
        """
        result = await self.execute(INTROSPECTION_QUERY)
        raw_schema = (result.get("data") or {}).get("__schema")
        if not raw_schema:
            raise SchemaLoadError(f"Endpoint returned no schema data: {self.url}")
        try:
            schema = IntrospectionSchema.model_validate(raw_schema)
        except ValidationError as e:
            raise SchemaLoadError(f"Malformed introspection result: {e}") from e
        logger.info("Loaded schema from %s (%d types)", self.url, len(schema.types))
        return schema


def _response_errors(response: httpx.Response) -> list:
    """Return the ``errors`` array of a JSON error response, or []."""
    try:
        body = response.json()
    except ValueError:
        return []
    if isinstance(body, dict) and isinstance(body.get("errors"), list):
        return body["errors"]
    return []
