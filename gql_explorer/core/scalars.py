"""Argument coercion from raw text input to GraphQL values.

Argument values arrive as free text. They are mapped onto the well-known
scalar they target and rendered either as a GraphQL literal (for inlining into
a document) or as a native JSON value (for the ``variables`` object).

Coercion is best effort and never raises: an unparseable Int or Float becomes
``null``.

Example:
    coerce_literal(TypeRef.named("Int"), "42")       # "42"
    coerce_literal(TypeRef.named("Int"), "abc")      # "null"
    coerce_literal(TypeRef.named("String"), 'a"b')   # '"a\\"b"'
    coerce_value(TypeRef.named("Boolean"), "true")   # True
"""

import json
import re
from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Any

from .ir import InputValue, TypeKind, TypeRef
from .typeref import unwrap_non_null

_INT_PREFIX = re.compile(r"[+-]?\d+", re.ASCII)
_FLOAT_PREFIX = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


class ScalarKind(Enum):
    """Built-in GraphQL scalars, plus a fallback for everything else."""
    INT = "Int"
    FLOAT = "Float"
    BOOLEAN = "Boolean"
    STRING = "String"
    ID = "ID"
    CUSTOM = None

    @classmethod
    def for_type(cls, ref: TypeRef) -> "ScalarKind":
        """Map an argument type onto a scalar kind.

        Only one NON_NULL level is stripped; list arguments and unknown named
        types fall back to CUSTOM.
        """
        target = unwrap_non_null(ref)
        if target is None or target.kind == TypeKind.LIST or target.name is None:
            return cls.CUSTOM
        for kind in cls:
            if kind.value == target.name:
                return kind
        return cls.CUSTOM


def is_blank(raw: str | None) -> bool:
    """Absent, None and all-whitespace values are omitted from argument lists."""
    return raw is None or str(raw).strip() == ""


def parse_int(raw: str) -> int | None:
    """Parse the leading base-10 integer of ``raw``, or None."""
    match = _INT_PREFIX.match(raw.strip())
    return int(match.group()) if match else None


def parse_float(raw: str) -> float | None:
    """Parse the leading decimal number of ``raw``, or None."""
    match = _FLOAT_PREFIX.match(raw.strip())
    if not match:
        return None
    value = float(match.group())
    # Overflow to inf has no GraphQL or JSON representation
    if value in (float("inf"), float("-inf")):
        return None
    return value


def parse_boolean(raw: str) -> bool:
    return raw == "true"


def coerce_value(arg_type: TypeRef, raw: str) -> Any:
    """Coerce raw text to the native JSON value sent in ``variables``."""
    kind = ScalarKind.for_type(arg_type)
    if kind is ScalarKind.INT:
        return parse_int(raw)
    if kind is ScalarKind.FLOAT:
        return parse_float(raw)
    if kind is ScalarKind.BOOLEAN:
        return parse_boolean(raw)
    if kind in (ScalarKind.STRING, ScalarKind.ID, ScalarKind.CUSTOM):
        return raw
    raise AssertionError(f"Unhandled scalar kind: {kind}")


def coerce_literal(arg_type: TypeRef, raw: str) -> str:
    """Coerce raw text to GraphQL literal source text."""
    kind = ScalarKind.for_type(arg_type)
    if kind in (ScalarKind.STRING, ScalarKind.ID, ScalarKind.CUSTOM):
        # JSON string escaping is valid GraphQL string syntax
        return json.dumps(raw)
    # Int, Float and Boolean render as their JSON form, None as null
    return json.dumps(coerce_value(arg_type, raw))


def present_arguments(
    args: Iterable[InputValue],
    raw_values: Mapping[str, str | None],
) -> list[tuple[InputValue, str]]:
    """Return (argument, raw value) pairs for non-blank values, in declared order."""
    return [
        (arg, raw_values[arg.name])
        for arg in args
        if not is_blank(raw_values.get(arg.name))
    ]


def build_argument_list(
    args: Iterable[InputValue],
    raw_values: Mapping[str, str | None],
) -> str:
    """Build an inline argument list such as ``(first: 10, after: "abc")``.

    Returns "" when no argument has a non-blank value.
    """
    pairs = [
        f"{arg.name}: {coerce_literal(arg.type, raw)}"
        for arg, raw in present_arguments(args, raw_values)
    ]
    return f"({', '.join(pairs)})" if pairs else ""
