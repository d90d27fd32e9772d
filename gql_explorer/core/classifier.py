"""Field classification: leaf, plain object, or paginated connection."""

from enum import Enum

from .catalog import TypeCatalog
from .ir import IntrospectionField, TypeRef


class FieldKind(Enum):
    """How a field is selected in a query."""
    LEAF = "leaf"              # Scalar or enum, no sub-selection
    OBJECT = "object"          # Plain object, expanded with default leaf fields
    CONNECTION = "connection"  # edges/node pagination envelope


class FieldClassifier:
    """Classifies fields by the shape of their resolved type.

    There is no formal connection kind in GraphQL, so connections are detected
    by name: a type exposing an ``edges`` field (or, when
    ``strict_connections`` is set, ``edges`` or ``nodes``).
    """

    def __init__(self, catalog: TypeCatalog, strict_connections: bool = False):
        self.catalog = catalog
        self.strict_connections = strict_connections
        self._marker_names = {"edges", "nodes"} if strict_connections else {"edges"}

    def is_connection(self, field: IntrospectionField) -> bool:
        return any(f.name in self._marker_names for f in self.catalog.fields_of(field.type))

    def classify(self, field: IntrospectionField) -> FieldKind:
        if self.catalog.is_leaf(field.type):
            return FieldKind.LEAF
        if self.is_connection(field):
            return FieldKind.CONNECTION
        return FieldKind.OBJECT

    def connection_node_fields(self, field: IntrospectionField) -> list[IntrospectionField]:
        """Return the leaf fields of a connection's node type.

        Walks ``field.type -> edges -> node``; any missing hop yields [].
        """
        edges = self.catalog.field_of(field.type, "edges")
        if edges is None:
            return []
        node = self.catalog.field_of(edges.type, "node")
        if node is None:
            return []
        return [f for f in self.catalog.fields_of(node.type) if self.catalog.is_leaf(f.type)]

    def default_leaf_fields(self, ref: TypeRef | None) -> list[str]:
        """Names of all leaf fields of a type, or of all its fields if it has no leaves."""
        fields = self.catalog.fields_of(ref)
        leaves = [f.name for f in fields if self.catalog.is_leaf(f.type)]
        return leaves or [f.name for f in fields]
