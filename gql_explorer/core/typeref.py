"""Helpers for GraphQL's nested wrapper-type references."""

from .introspection import TYPE_REF_DEPTH
from .ir import TypeKind, TypeRef

# One named node below the deepest wrapper the introspection query can return
MAX_UNWRAP_DEPTH = TYPE_REF_DEPTH + 1

LEAF_KINDS = frozenset({TypeKind.SCALAR, TypeKind.ENUM})


def named_type(ref: TypeRef | None) -> str | None:
    """Follow ``of_type`` down to the named type and return its name.

    Returns None for a malformed chain (a wrapper without ``of_type``) or a
    chain deeper than ``MAX_UNWRAP_DEPTH``.
    """
    node = ref
    for _ in range(MAX_UNWRAP_DEPTH + 1):
        if node is None:
            return None
        if node.name is not None:
            return node.name
        node = node.of_type
    return None


def unwrap_non_null(ref: TypeRef) -> TypeRef | None:
    """Strip a single NON_NULL level, leaving any other wrapper in place."""
    if ref.kind == TypeKind.NON_NULL:
        return ref.of_type
    return ref


def render_type_string(ref: TypeRef | None, _depth: int = 0) -> str:
    """Render a reference in GraphQL type syntax, e.g. ``[Int!]!``.

    Unresolvable parts of a malformed chain render as ``?``.
    """
    if ref is None or _depth > MAX_UNWRAP_DEPTH:
        return "?"
    if ref.kind == TypeKind.NON_NULL:
        return render_type_string(ref.of_type, _depth + 1) + "!"
    if ref.kind == TypeKind.LIST:
        return f"[{render_type_string(ref.of_type, _depth + 1)}]"
    return ref.name or "?"


def is_leaf_kind(kind: TypeKind | None) -> bool:
    return kind in LEAF_KINDS
