"""Introspection model for GraphQL schemas.

This module defines pydantic models that mirror the JSON returned by the
standard introspection query, so a raw ``__schema`` object can be validated
once and then navigated with attribute access.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class TypeKind(str, Enum):
    """The ``__TypeKind`` values a type or type reference can carry."""
    SCALAR = "SCALAR"
    OBJECT = "OBJECT"
    INTERFACE = "INTERFACE"
    UNION = "UNION"
    ENUM = "ENUM"
    INPUT_OBJECT = "INPUT_OBJECT"
    LIST = "LIST"
    NON_NULL = "NON_NULL"

    @property
    def is_wrapper(self) -> bool:
        return self in (TypeKind.LIST, TypeKind.NON_NULL)


class _IntrospectionModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)


class TypeRef(_IntrospectionModel):
    """A possibly wrapped reference to a named type.

    ``LIST`` and ``NON_NULL`` nodes carry ``of_type`` and no name; every
    other kind carries a name and no ``of_type``.
    """
    kind: TypeKind
    name: str | None = None
    of_type: "TypeRef | None" = Field(default=None, alias="ofType")

    @classmethod
    def named(cls, name: str, kind: TypeKind = TypeKind.SCALAR) -> "TypeRef":
        return cls(kind=kind, name=name)

    @classmethod
    def non_null(cls, of_type: "TypeRef") -> "TypeRef":
        return cls(kind=TypeKind.NON_NULL, of_type=of_type)

    @classmethod
    def list_of(cls, of_type: "TypeRef") -> "TypeRef":
        return cls(kind=TypeKind.LIST, of_type=of_type)


class InputValue(_IntrospectionModel):
    """An argument of a field, or a field of an input object."""
    name: str
    type: TypeRef
    description: str | None = None
    default_value: str | None = Field(default=None, alias="defaultValue")

    @property
    def is_required(self) -> bool:
        return self.type.kind == TypeKind.NON_NULL


class IntrospectionField(_IntrospectionModel):
    """A field of an object or interface type."""
    name: str
    type: TypeRef
    args: list[InputValue] = Field(default_factory=list)
    description: str | None = None
    is_deprecated: bool = Field(default=False, alias="isDeprecated")
    deprecation_reason: str | None = Field(default=None, alias="deprecationReason")


class EnumValue(_IntrospectionModel):
    name: str
    description: str | None = None
    is_deprecated: bool = Field(default=False, alias="isDeprecated")


class IntrospectionType(_IntrospectionModel):
    """A named type in the schema's flat type list."""
    kind: TypeKind
    name: str
    description: str | None = None
    fields: list[IntrospectionField] | None = None
    input_fields: list[InputValue] | None = Field(default=None, alias="inputFields")
    enum_values: list[EnumValue] | None = Field(default=None, alias="enumValues")


class RootTypeName(_IntrospectionModel):
    name: str


class IntrospectionSchema(_IntrospectionModel):
    """The ``__schema`` object of an introspection response."""
    query_type: RootTypeName | None = Field(default=None, alias="queryType")
    mutation_type: RootTypeName | None = Field(default=None, alias="mutationType")
    types: list[IntrospectionType] = Field(default_factory=list)

    @property
    def query_type_name(self) -> str | None:
        return self.query_type.name if self.query_type else None

    @property
    def mutation_type_name(self) -> str | None:
        return self.mutation_type.name if self.mutation_type else None
