"""Explorer settings and preset endpoints.

Settings have defaults suited to public blockchain explorers and can be
overridden through ``GQL_EXPLORER_*`` environment variables:

    GQL_EXPLORER_ENDPOINT=https://example.com/graphql
    GQL_EXPLORER_TIMEOUT=10
    GQL_EXPLORER_STRICT_CONNECTIONS=true
"""

import os
from collections.abc import Mapping
from typing import Literal

from pydantic import BaseModel, Field

ENV_PREFIX = "GQL_EXPLORER_"


class EndpointPreset(BaseModel):
    label: str
    url: str


PRESET_ENDPOINTS: list[EndpointPreset] = [
    EndpointPreset(
        label="PulseChain Scan",
        url="https://api.scan.pulsechain.com/api/v1/graphql",
    ),
    EndpointPreset(
        label="The Graph Gateway",
        url="https://gateway.thegraph.com/api/{api_key}/subgraphs/id/5zvR82QoaXYFyDEKLZ9t6v9adgnptxYpKpSbxtgVENFV",
    ),
]

DEFAULT_ENDPOINT = PRESET_ENDPOINTS[0].url


class ExplorerConfig(BaseModel):
    """Settings shared by the session, the synthesizer and the executor."""
    endpoint: str = DEFAULT_ENDPOINT
    timeout: float = Field(default=30.0, gt=0)
    max_object_fields: int = Field(default=5, ge=1)
    max_depth: int = Field(default=3, ge=1)
    strict_connections: bool = False
    prefill_connection_subfields: bool = False
    argument_style: Literal["inline", "variables"] = "inline"
    api_key: str | None = None
    headers: dict[str, str] = Field(default_factory=dict)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, **overrides) -> "ExplorerConfig":
        """Build a config from ``GQL_EXPLORER_*`` variables, then apply overrides.

        Values are validated by pydantic, so ``"true"``/``"10"`` strings are
        converted to the declared field types.
        """
        environ = os.environ if environ is None else environ
        values = {}
        for name in cls.model_fields:
            if name == "headers":
                continue
            raw = environ.get(ENV_PREFIX + name.upper())
            if raw is not None:
                values[name] = raw
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls.model_validate(values)

    def endpoint_url(self) -> str:
        """The endpoint with any ``{api_key}`` placeholder filled in."""
        if "{api_key}" in self.endpoint:
            return self.endpoint.replace("{api_key}", self.api_key or "")
        return self.endpoint


def resolve_endpoint(name_or_url: str) -> str:
    """Return the URL of a preset label (case-insensitive), or the input as given."""
    for preset in PRESET_ENDPOINTS:
        if preset.label.lower() == name_or_url.strip().lower():
            return preset.url
    return name_or_url
