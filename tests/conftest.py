"""Shared fixtures: a small blockchain-explorer schema in introspection JSON form."""

import json

import httpx
import pytest

from gql_explorer.core.catalog import TypeCatalog
from gql_explorer.core.classifier import FieldClassifier
from gql_explorer.core.ir import IntrospectionSchema, TypeKind, TypeRef
from gql_explorer.core.query_builder import QueryBuilder
from gql_explorer.core.synthesizer import SelectionSetSynthesizer


# =============================================================================
# Introspection JSON helpers
# =============================================================================


def named(name, kind="SCALAR"):
    return {"kind": kind, "name": name, "ofType": None}


def obj(name):
    return named(name, "OBJECT")


def enum(name):
    return named(name, "ENUM")


def non_null(of_type):
    return {"kind": "NON_NULL", "name": None, "ofType": of_type}


def list_of(of_type):
    return {"kind": "LIST", "name": None, "ofType": of_type}


def arg(name, type_ref, default=None):
    return {"name": name, "description": None, "type": type_ref, "defaultValue": default}


def field(name, type_ref, *args, description=None):
    return {
        "name": name,
        "description": description,
        "args": list(args),
        "type": type_ref,
        "isDeprecated": False,
        "deprecationReason": None,
    }


def object_type(name, *fields):
    return {"kind": "OBJECT", "name": name, "description": None, "fields": list(fields)}


def scalar_type(name):
    return {"kind": "SCALAR", "name": name, "description": None, "fields": None}


def enum_type(name, *values):
    return {
        "kind": "ENUM",
        "name": name,
        "description": None,
        "fields": None,
        "enumValues": [{"name": v, "description": None, "isDeprecated": False} for v in values],
    }


def schema_dict(types, query="Query", mutation=None):
    return {
        "queryType": {"name": query} if query else None,
        "mutationType": {"name": mutation} if mutation else None,
        "subscriptionType": None,
        "types": types,
        "directives": [],
    }


BUILTIN_SCALARS = [scalar_type(n) for n in ("String", "Int", "Float", "Boolean", "ID")]


def explorer_types():
    """Types of the sample schema, in introspection order."""
    return [
        object_type(
            "Query",
            field("blocks", list_of(non_null(obj("Block"))), arg("limit", named("Int"))),
            field("block", obj("Block"), arg("number", non_null(named("Int")))),
            field("address", obj("Address"), arg("hash", non_null(named("String")))),
            field("version", named("String")),
            field(
                "search",
                list_of(obj("Transaction")),
                arg("term", named("String")),
                arg("first", named("Int")),
                arg("exact", named("Boolean")),
                arg("ratio", named("Float")),
                arg("id", named("ID")),
            ),
            field("pending", obj("PendingList")),
            field("meta", obj("Meta")),
        ),
        object_type(
            "Mutation",
            field(
                "createNote",
                obj("Note"),
                arg("text", non_null(named("String"))),
                arg("pinned", named("Boolean")),
                arg("priority", named("Int")),
            ),
        ),
        object_type(
            "Block",
            field("hash", named("String")),
            field("number", named("Int")),
            field("miner", obj("Address")),
            field(
                "transactions",
                non_null(obj("TransactionConnection")),
                arg("first", named("Int")),
                arg("after", named("String")),
            ),
        ),
        object_type(
            "Address",
            field("hash", non_null(named("String"))),
            field("balance", named("String"), arg("unit", enum("Unit"))),
            field(
                "transactions",
                obj("TransactionConnection"),
                arg("first", named("Int")),
                arg("after", named("String")),
            ),
            field("lastBlock", obj("Block")),
        ),
        object_type(
            "TransactionConnection",
            field("edges", non_null(list_of(non_null(obj("TransactionEdge"))))),
            field("pageInfo", non_null(obj("PageInfo"))),
        ),
        object_type(
            "TransactionEdge",
            field("cursor", non_null(named("String"))),
            field("node", non_null(obj("Transaction"))),
        ),
        object_type(
            "Transaction",
            field("hash", non_null(named("String"))),
            field("value", named("String")),
            field("status", enum("TxStatus")),
            field("block", obj("Block")),
        ),
        object_type(
            "PageInfo",
            field("endCursor", named("String")),
            field("hasNextPage", non_null(named("Boolean"))),
        ),
        object_type(
            "PendingList",
            field("nodes", non_null(list_of(non_null(obj("Transaction"))))),
            field("total", named("Int")),
        ),
        object_type(
            "Meta",
            field("latest", obj("Block")),
            field("chain", obj("Chain")),
        ),
        object_type(
            "Chain",
            field("id", non_null(named("ID"))),
            field("name", named("String")),
        ),
        object_type(
            "Note",
            field("id", non_null(named("ID"))),
            field("text", named("String")),
        ),
        enum_type("TxStatus", "OK", "ERROR"),
        enum_type("Unit", "WEI", "GWEI"),
        *BUILTIN_SCALARS,
    ]


def introspection_response(raw_schema):
    return {"data": {"__schema": raw_schema}}


def graphql_transport(raw_schema, data=None, errors=None, requests=None):
    """An httpx MockTransport answering introspection with ``raw_schema``.

    Every other document gets ``data`` (or ``errors``). Request bodies are
    appended to ``requests`` when given.
    """

    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        if requests is not None:
            requests.append(body)
        if "IntrospectionQuery" in body["query"]:
            return httpx.Response(200, json=introspection_response(raw_schema))
        if errors:
            return httpx.Response(200, json={"errors": errors})
        return httpx.Response(200, json={"data": data or {}})

    return httpx.MockTransport(handler)


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def raw_schema():
    """The sample schema as raw ``__schema`` JSON."""
    return schema_dict(explorer_types(), mutation="Mutation")


@pytest.fixture
def schema(raw_schema):
    return IntrospectionSchema.model_validate(raw_schema)


@pytest.fixture
def catalog(schema):
    return TypeCatalog(schema)


@pytest.fixture
def classifier(catalog):
    return FieldClassifier(catalog)


@pytest.fixture
def synthesizer(catalog, classifier):
    return SelectionSetSynthesizer(catalog, classifier)


@pytest.fixture
def builder(catalog):
    return QueryBuilder(catalog)


@pytest.fixture
def query_root():
    """A TypeRef pointing at the Query root type."""
    return TypeRef.named("Query", TypeKind.OBJECT)
