"""Exceptions raised when talking to a GraphQL endpoint."""

from typing import Any


class ExplorerError(Exception):
    """Base class for errors reported to the user."""


class TransportError(ExplorerError):
    """The endpoint could not be reached or answered with a non-success status."""

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class GraphQLError(ExplorerError):
    """The endpoint answered, but the response carries a non-empty ``errors`` array."""

    def __init__(self, message: str, errors: list[dict[str, Any]]):
        self.message = message
        self.errors = errors
        super().__init__(message)

    @classmethod
    def from_errors(cls, errors: list[dict[str, Any]]) -> "GraphQLError":
        message = "; ".join(
            e.get("message", str(e)) if isinstance(e, dict) else str(e) for e in errors
        )
        return cls(message, errors)


class SchemaLoadError(ExplorerError):
    """The introspection response did not contain a usable ``__schema``."""
