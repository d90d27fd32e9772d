"""Core modules for schema-driven query synthesis."""

from .auth import (
    ApiKeyAuth,
    Auth,
    BasicAuth,
    BearerAuth,
    NoAuth,
    auth_from_options,
)
from .catalog import OperationKind, TypeCatalog
from .classifier import FieldClassifier, FieldKind
from .errors import ExplorerError, GraphQLError, SchemaLoadError, TransportError
from .executor import GraphQLExecutor
from .introspection import INTROSPECTION_QUERY, TYPE_REF_DEPTH
from .ir import (
    EnumValue,
    InputValue,
    IntrospectionField,
    IntrospectionSchema,
    IntrospectionType,
    TypeKind,
    TypeRef,
)
from .query_builder import ArgumentStyle, QueryBuilder, QueryDocument
from .scalars import ScalarKind, build_argument_list, coerce_literal, coerce_value
from .selection import (
    FieldSelection,
    OperationSelection,
    set_argument,
    set_connection_subfield,
    set_subfield_argument,
    toggle_field,
)
from .session import ExplorerSession
from .synthesizer import SelectionSetSynthesizer
from .typeref import named_type, render_type_string

__all__ = [
    # Auth
    "Auth",
    "ApiKeyAuth",
    "BasicAuth",
    "BearerAuth",
    "NoAuth",
    "auth_from_options",
    # Introspection model
    "EnumValue",
    "InputValue",
    "IntrospectionField",
    "IntrospectionSchema",
    "IntrospectionType",
    "TypeKind",
    "TypeRef",
    "INTROSPECTION_QUERY",
    "TYPE_REF_DEPTH",
    # Schema navigation
    "named_type",
    "render_type_string",
    "OperationKind",
    "TypeCatalog",
    "FieldClassifier",
    "FieldKind",
    # Coercion
    "ScalarKind",
    "build_argument_list",
    "coerce_literal",
    "coerce_value",
    # Selection
    "FieldSelection",
    "OperationSelection",
    "set_argument",
    "set_connection_subfield",
    "set_subfield_argument",
    "toggle_field",
    "SelectionSetSynthesizer",
    # Query Builder
    "ArgumentStyle",
    "QueryBuilder",
    "QueryDocument",
    # Executor
    "ExplorerError",
    "GraphQLError",
    "SchemaLoadError",
    "TransportError",
    "GraphQLExecutor",
    "ExplorerSession",
]
