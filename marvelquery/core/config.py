"""Library configuration.

Architecture:
    Configuration is a single immutable value built once by ``init()`` and
    handed to every query the resulting factory creates. Nothing reads it from
    module state; tests and multiple API accounts can hold independent
    configurations side by side.

Config Surface:
    - keys: public/private API keys (both required)
    - auto_query: rewrite embedded references into sub-queries
    - global_params: parameters applied to every query ("all") or per type
    - omit_undefined: strip None-valued parameters before merging
    - on_request / on_result: notification hooks
    - http_client: replacement transport, ``async (url) -> dict``
    - validation: toggles for each validator
    - base_url / timeout: default transport settings
    - schemas: parameter and result schema registry
"""

from __future__ import annotations

import os
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from .exceptions import MissingCredentials

if TYPE_CHECKING:
    from ..models.registry import SchemaRegistry

DEFAULT_BASE_URL = "https://gateway.marvel.com/v1/public"

PUBLIC_KEY_ENV = "MARVEL_PUBLIC_KEY"
PRIVATE_KEY_ENV = "MARVEL_PRIVATE_KEY"

OnRequestFunction = Callable[[str, tuple, dict[str, Any]], Any]
OnResultFunction = Callable[[list[dict[str, Any]]], Any]
HTTPClientFunction = Callable[[str], Awaitable[Any]]


@dataclass(frozen=True)
class APIKeys:
    """Marvel API key pair. Get one at https://developer.marvel.com/."""

    public_key: str
    private_key: str

    def __post_init__(self) -> None:
        if not self.public_key or not self.private_key:
            raise MissingCredentials("Missing public or private API key")

    def __repr__(self) -> str:
        return f"APIKeys(public_key={self.public_key!r}, private_key='***')"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> APIKeys:
        """Read keys from MARVEL_PUBLIC_KEY and MARVEL_PRIVATE_KEY.

        Raises:
            MissingCredentials: If either variable is unset or empty
        """
        env = os.environ if environ is None else environ
        return cls(
            public_key=env.get(PUBLIC_KEY_ENV, ""),
            private_key=env.get(PRIVATE_KEY_ENV, ""),
        )


@dataclass(frozen=True)
class ValidationOptions:
    """Enable or disable individual validators (all enabled by default).

    Attributes:
        parameters: Validate query parameters against the type's schema
        api_response: Validate each result against the type's schema
        auto_query: Track whether AutoQuery resolved every reference
        disable_all: Turn every validator off, overriding the flags above
        strict_parameters: Raise ParameterValidationError instead of
            recording the failure and continuing
    """

    parameters: bool = True
    api_response: bool = True
    auto_query: bool = True
    disable_all: bool = False
    strict_parameters: bool = False

    @property
    def check_parameters(self) -> bool:
        return self.parameters and not self.disable_all

    @property
    def check_results(self) -> bool:
        return self.api_response and not self.disable_all

    @property
    def check_auto_query(self) -> bool:
        return self.auto_query and not self.disable_all


def _default_schemas() -> SchemaRegistry:
    from ..models.registry import default_registry

    return default_registry()


@dataclass(frozen=True)
class Config:
    """Immutable configuration shared by every query of one factory."""

    keys: APIKeys
    auto_query: bool
    global_params: Mapping[str, Mapping[str, Any]] = field(default_factory=dict)
    omit_undefined: bool = True
    on_request: OnRequestFunction | None = None
    on_result: Mapping[str, OnResultFunction] = field(default_factory=dict)
    http_client: HTTPClientFunction | None = None
    validation: ValidationOptions = field(default_factory=ValidationOptions)
    base_url: str = DEFAULT_BASE_URL
    timeout: float = 30.0
    schemas: SchemaRegistry = field(default_factory=_default_schemas)

    def __post_init__(self) -> None:
        # Read-only views so the shared config cannot drift after init
        object.__setattr__(
            self,
            "global_params",
            MappingProxyType(
                {str(key): dict(value or {}) for key, value in self.global_params.items()}
            ),
        )
        object.__setattr__(
            self,
            "on_result",
            MappingProxyType({str(key): fn for key, fn in self.on_result.items()}),
        )
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    def result_hook(self, resource_type: str) -> OnResultFunction | None:
        """on_result callback for a type, falling back to the 'any' entry."""
        return self.on_result.get(str(resource_type)) or self.on_result.get("any")
