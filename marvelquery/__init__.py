"""MarvelQuery - Async client for the Marvel Comics API with link-following queries."""

from .api import MarvelQuery, QueryFactory, Validated, init, init_from_env
from .core import (
    DEFAULT_BASE_URL,
    APIKeys,
    AutoQueryExtensionWarning,
    Config,
    Endpoint,
    EndpointDescriptor,
    InvalidEndpoint,
    MarvelQueryError,
    MissingCredentials,
    ParameterValidationError,
    ReferenceKind,
    ResourceType,
    ResultValidationWarning,
    SchemaNotFound,
    TransportError,
    ValidationOptions,
    endpoint_from_uri,
    id_from_uri,
    validate_endpoint,
)
from .models import APIResponse, Metadata, ResponseData, SchemaRegistry, default_registry
from .runtime import ExtendedCollection, ExtendedResource
from .utils import HTTPClient

__version__ = "0.1.0"

__all__ = [
    # Entry points
    "init",
    "init_from_env",
    "QueryFactory",
    "MarvelQuery",
    "Validated",
    # Configuration
    "APIKeys",
    "Config",
    "ValidationOptions",
    "DEFAULT_BASE_URL",
    # Endpoints
    "Endpoint",
    "EndpointDescriptor",
    "ResourceType",
    "ReferenceKind",
    "validate_endpoint",
    "endpoint_from_uri",
    "id_from_uri",
    # Results
    "APIResponse",
    "Metadata",
    "ResponseData",
    "ExtendedResource",
    "ExtendedCollection",
    # Schemas
    "SchemaRegistry",
    "default_registry",
    # Transport
    "HTTPClient",
    # Exceptions
    "MarvelQueryError",
    "InvalidEndpoint",
    "MissingCredentials",
    "ParameterValidationError",
    "TransportError",
    "SchemaNotFound",
    "ResultValidationWarning",
    "AutoQueryExtensionWarning",
]
