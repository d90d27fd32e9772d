"""Authentication handlers for GraphQL endpoints.

Every handler implements the ``Auth`` protocol: it contributes request
headers to the executor's HTTP client. Endpoints that take their key in the
URL path (such as The Graph gateway) need no handler at all.
"""

import base64
from typing import Protocol, runtime_checkable


@runtime_checkable
class Auth(Protocol):
    """Protocol for authentication handlers.

    Example:
        class TenantAuth:
            def __init__(self, token: str, tenant: str):
                self.token = token
                self.tenant = tenant

            def get_headers(self) -> dict[str, str]:
                return {"Authorization": f"Bearer {self.token}", "X-Tenant": self.tenant}
    """

    def get_headers(self) -> dict[str, str]:
        """Return headers to include in requests."""
        ...


class NoAuth:
    """Public endpoints."""

    def get_headers(self) -> dict[str, str]:
        return {}


class BearerAuth:
    def __init__(self, token: str):
        self.token = token

    def get_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


class ApiKeyAuth:
    """API key sent in a custom header (``x-api-key`` unless told otherwise)."""

    def __init__(self, api_key: str, header_name: str = "x-api-key"):
        self.api_key = api_key
        self.header_name = header_name

    def get_headers(self) -> dict[str, str]:
        return {self.header_name: self.api_key}


class BasicAuth:
    def __init__(self, username: str, password: str):
        self.username = username
        self.password = password

    def get_headers(self) -> dict[str, str]:
        encoded = base64.b64encode(f"{self.username}:{self.password}".encode()).decode()
        return {"Authorization": f"Basic {encoded}"}


def auth_from_options(
    bearer: str | None = None,
    api_key: str | None = None,
    basic: str | None = None,
) -> Auth:
    """Pick a handler from command-line style options.

    A bearer token wins over an API key, which wins over ``user:password``
    basic credentials.
    """
    if bearer:
        return BearerAuth(bearer)
    if api_key:
        return ApiKeyAuth(api_key)
    if basic:
        username, _, password = basic.partition(":")
        return BasicAuth(username, password)
    return NoAuth()
