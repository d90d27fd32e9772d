"""Name-indexed, read-only view over an introspected schema.

Every lookup degrades to None or an empty list when a name does not resolve,
so a partially broken schema can still be explored.
"""

import logging
from enum import Enum

from .ir import IntrospectionField, IntrospectionSchema, IntrospectionType, TypeRef
from .typeref import is_leaf_kind, named_type

logger = logging.getLogger(__name__)


class OperationKind(str, Enum):
    """Root operation types that can be explored."""
    QUERY = "query"
    MUTATION = "mutation"


class TypeCatalog:
    """Indexes the schema's flat type list by name."""

    def __init__(self, schema: IntrospectionSchema):
        self.schema = schema
        self._types: dict[str, IntrospectionType] = {}
        for type_def in schema.types:
            # First definition wins on duplicate names
            self._types.setdefault(type_def.name, type_def)

    def __len__(self) -> int:
        return len(self._types)

    def __contains__(self, name: str) -> bool:
        return name in self._types

    def lookup(self, name: str | None) -> IntrospectionType | None:
        """Look up a type by name."""
        if name is None:
            return None
        return self._types.get(name)

    def resolve(self, ref: TypeRef | None) -> IntrospectionType | None:
        """Look up the named type behind a possibly wrapped reference."""
        if ref is None:
            return None
        type_def = self.lookup(named_type(ref))
        if type_def is None:
            logger.debug("Unresolved type reference: %s", ref)
        return type_def

    def fields_of(self, ref: TypeRef | None) -> list[IntrospectionField]:
        """Return the fields of the referenced type, or [] if it has none."""
        type_def = self.resolve(ref)
        if type_def is None or not type_def.fields:
            return []
        return list(type_def.fields)

    def field_of(self, ref: TypeRef | None, name: str) -> IntrospectionField | None:
        for candidate in self.fields_of(ref):
            if candidate.name == name:
                return candidate
        return None

    def is_leaf(self, ref: TypeRef | None) -> bool:
        """True iff the named type is a SCALAR or ENUM."""
        type_def = self.resolve(ref)
        return type_def is not None and is_leaf_kind(type_def.kind)

    def root_type(self, kind: OperationKind | str) -> IntrospectionType | None:
        """Return the query or mutation root type, if the schema declares one."""
        kind = OperationKind(kind)
        if kind == OperationKind.QUERY:
            return self.lookup(self.schema.query_type_name)
        return self.lookup(self.schema.mutation_type_name)

    def operations(self, kind: OperationKind | str) -> list[IntrospectionField]:
        """Return the root fields available for an operation kind."""
        root = self.root_type(kind)
        if root is None or not root.fields:
            return []
        return list(root.fields)

    def operation(self, kind: OperationKind | str, name: str) -> IntrospectionField | None:
        for candidate in self.operations(kind):
            if candidate.name == name:
                return candidate
        return None
