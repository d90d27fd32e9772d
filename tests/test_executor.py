"""Tests for the GraphQL executor."""

import base64
import json

import httpx
import pytest
from conftest import graphql_transport

from gql_explorer.core.auth import BasicAuth, BearerAuth
from gql_explorer.core.errors import GraphQLError, SchemaLoadError, TransportError
from gql_explorer.core.executor import GraphQLExecutor

URL = "https://explorer.test/graphql"


def executor_with(handler, **kwargs) -> GraphQLExecutor:
    return GraphQLExecutor(URL, transport=httpx.MockTransport(handler), **kwargs)


class TestExecute:
    """Tests for execute."""

    @pytest.mark.asyncio
    async def test_returns_full_response(self):
        def handler(request):
            return httpx.Response(200, json={"data": {"version": "1.0"}, "extensions": {"cost": 1}})

        async with executor_with(handler) as executor:
            result = await executor.execute("query { version }")
        assert result == {"data": {"version": "1.0"}, "extensions": {"cost": 1}}

    @pytest.mark.asyncio
    async def test_posts_query_and_variables(self):
        seen = []

        def handler(request):
            seen.append((request.method, str(request.url), json.loads(request.content)))
            return httpx.Response(200, json={"data": {}})

        async with executor_with(handler) as executor:
            await executor.execute("query($n: Int) { block(number: $n) { hash } }", {"n": None})
        method, url, body = seen[0]
        assert (method, url) == ("POST", URL)
        assert body["variables"] == {"n": None}

    @pytest.mark.asyncio
    async def test_omits_empty_variables(self):
        seen = []

        def handler(request):
            seen.append(json.loads(request.content))
            return httpx.Response(200, json={"data": {}})

        async with executor_with(handler) as executor:
            await executor.execute("query { version }", {})
        assert seen == [{"query": "query { version }"}]

    @pytest.mark.asyncio
    async def test_graphql_errors(self):
        def handler(request):
            return httpx.Response(
                200,
                json={"data": None, "errors": [{"message": "bad field"}, {"message": "bad arg"}]},
            )

        async with executor_with(handler) as executor:
            with pytest.raises(GraphQLError) as exc_info:
                await executor.execute("query { nope }")
        assert str(exc_info.value) == "bad field; bad arg"
        assert len(exc_info.value.errors) == 2

    @pytest.mark.asyncio
    async def test_empty_errors_array_is_success(self):
        def handler(request):
            return httpx.Response(200, json={"data": {"version": "1"}, "errors": []})

        async with executor_with(handler) as executor:
            result = await executor.execute("query { version }")
        assert result["data"] == {"version": "1"}

    @pytest.mark.asyncio
    async def test_http_status_error(self):
        def handler(request):
            return httpx.Response(502, text="bad gateway")

        async with executor_with(handler) as executor:
            with pytest.raises(TransportError) as exc_info:
                await executor.execute("query { version }")
        assert exc_info.value.status_code == 502

    @pytest.mark.asyncio
    async def test_rejected_document_reports_server_errors(self):
        def handler(request):
            return httpx.Response(400, json={"errors": [{"message": "Unknown argument 'limt'"}]})

        async with executor_with(handler) as executor:
            with pytest.raises(GraphQLError, match="Unknown argument 'limt'"):
                await executor.execute("query { blocks(limt: 5) { hash } }")

    @pytest.mark.asyncio
    async def test_error_status_without_errors_array(self):
        def handler(request):
            return httpx.Response(500, json={"detail": "internal"})

        async with executor_with(handler) as executor:
            with pytest.raises(TransportError) as exc_info:
                await executor.execute("query { version }")
        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_network_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        async with executor_with(handler) as executor:
            with pytest.raises(TransportError, match="connection refused") as exc_info:
                await executor.execute("query { version }")
        assert exc_info.value.status_code is None

    @pytest.mark.asyncio
    async def test_invalid_json(self):
        def handler(request):
            return httpx.Response(200, text="<html>maintenance</html>")

        async with executor_with(handler) as executor:
            with pytest.raises(TransportError, match="Invalid JSON"):
                await executor.execute("query { version }")

    @pytest.mark.asyncio
    async def test_non_object_body(self):
        def handler(request):
            return httpx.Response(200, json=[1, 2])

        async with executor_with(handler) as executor:
            with pytest.raises(TransportError, match="Unexpected response shape"):
                await executor.execute("query { version }")


class TestHeaders:
    """Tests for request headers."""

    @pytest.mark.asyncio
    async def test_auth_and_extra_headers(self):
        seen = []

        def handler(request):
            seen.append(request.headers)
            return httpx.Response(200, json={"data": {}})

        executor = executor_with(handler, auth=BearerAuth("tok"), headers={"X-Client": "tests"})
        async with executor:
            await executor.execute("query { version }")
        headers = seen[0]
        assert headers["authorization"] == "Bearer tok"
        assert headers["x-client"] == "tests"
        assert headers["content-type"] == "application/json"

    @pytest.mark.asyncio
    async def test_basic_auth(self):
        seen = []

        def handler(request):
            seen.append(request.headers["authorization"])
            return httpx.Response(200, json={"data": {}})

        async with executor_with(handler, auth=BasicAuth("u", "p")) as executor:
            await executor.execute("query { version }")
        assert seen == ["Basic " + base64.b64encode(b"u:p").decode()]


class TestFetchSchema:
    """Tests for fetch_schema."""

    @pytest.mark.asyncio
    async def test_loads_schema(self, raw_schema):
        requests = []
        transport = graphql_transport(raw_schema, requests=requests)
        async with GraphQLExecutor(URL, transport=transport) as executor:
            schema = await executor.fetch_schema()
        assert schema.query_type_name == "Query"
        assert schema.mutation_type_name == "Mutation"
        assert requests[0]["query"].startswith("query IntrospectionQuery")

    @pytest.mark.asyncio
    async def test_missing_schema(self):
        def handler(request):
            return httpx.Response(200, json={"data": {}})

        async with executor_with(handler) as executor:
            with pytest.raises(SchemaLoadError, match="no schema data"):
                await executor.fetch_schema()

    @pytest.mark.asyncio
    async def test_malformed_schema(self):
        def handler(request):
            return httpx.Response(200, json={"data": {"__schema": {"types": [{"kind": "WIDGET"}]}}})

        async with executor_with(handler) as executor:
            with pytest.raises(SchemaLoadError, match="Malformed"):
                await executor.fetch_schema()

    @pytest.mark.asyncio
    async def test_close_is_idempotent(self):
        executor = executor_with(lambda request: httpx.Response(200, json={"data": {}}))
        await executor.execute("query { version }")
        await executor.close()
        await executor.close()
