"""Query builder for GraphQL operations.

Wraps a synthesized selection set into a complete operation document, with
the operation's arguments either declared as variables or inlined as
literals.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from graphql import GraphQLSyntaxError, parse, print_ast

from .catalog import OperationKind, TypeCatalog
from .scalars import build_argument_list, coerce_value, present_arguments
from .typeref import render_type_string


class ArgumentStyle(Enum):
    """How operation arguments are passed."""
    INLINE = "inline"        # Literals embedded in the document
    VARIABLES = "variables"  # $variables plus a separate variables object


@dataclass
class QueryDocument:
    """A complete operation document and its variables."""
    query: str
    variables: dict[str, Any] = field(default_factory=dict)

    def payload(self) -> dict[str, Any]:
        """Return the JSON body for a GraphQL-over-HTTP POST."""
        body: dict[str, Any] = {"query": self.query}
        if self.variables:
            body["variables"] = self.variables
        return body

    def formatted(self) -> str:
        """Return the document pretty-printed by graphql-core.

        A document graphql-core cannot parse, such as one declaring a
        variable of an unresolvable ``?`` type, is returned unchanged.
        """
        try:
            return print_ast(parse(self.query))
        except GraphQLSyntaxError:
            return self.query


class QueryBuilder:
    """Builds GraphQL operation documents for root fields of a schema."""

    def __init__(self, catalog: TypeCatalog):
        """Initialize with the catalog used to look up operations."""
        self.catalog = catalog

    def build(
        self,
        operation_kind: OperationKind | str,
        operation_name: str,
        resolved_args: dict[str, str],
        selection_source: str,
        style: ArgumentStyle = ArgumentStyle.INLINE,
    ) -> QueryDocument:
        """Build a query/mutation document.

        Args:
            operation_kind: 'query' or 'mutation'
            operation_name: Root field to call
            resolved_args: Raw argument values keyed by argument name
            selection_source: Selection set body from the synthesizer
            style: Inline literals or variables

        Returns:
            The document, with variables when ``style`` is VARIABLES

        Raises:
            ValueError: If the root type has no such operation
        """
        kind = OperationKind(operation_kind)
        operation = self.catalog.operation(kind, operation_name)
        if operation is None:
            raise ValueError(f"Unknown {kind.value} operation: {operation_name}")

        if self.catalog.is_leaf(operation.type):
            selection = ""
        else:
            selection = f" {{ {selection_source} }}"

        if style == ArgumentStyle.VARIABLES:
            return self._build_with_variables(kind, operation, resolved_args, selection)

        arg_str = build_argument_list(operation.args, resolved_args)
        query = f"{kind.value} {{ {operation.name}{arg_str}{selection} }}"
        return QueryDocument(query=query)

    def _build_with_variables(self, kind, operation, resolved_args, selection) -> QueryDocument:
        """Build ``query($a: T) { name(a: $a) { ... } }`` plus the variables object."""
        present = present_arguments(operation.args, resolved_args)

        var_decls = ", ".join(f"${arg.name}: {render_type_string(arg.type)}" for arg, _ in present)
        call_args = ", ".join(f"{arg.name}: ${arg.name}" for arg, _ in present)
        variables = {arg.name: coerce_value(arg.type, raw) for arg, raw in present}

        header = f"{kind.value}({var_decls})" if var_decls else kind.value
        call = f"{operation.name}({call_args})" if call_args else operation.name
        return QueryDocument(query=f"{header} {{ {call}{selection} }}", variables=variables)
