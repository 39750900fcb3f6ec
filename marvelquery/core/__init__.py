"""Core components."""

from .config import DEFAULT_BASE_URL, APIKeys, Config, ValidationOptions
from .endpoint import (
    Endpoint,
    EndpointDescriptor,
    endpoint_from_uri,
    format_endpoint,
    id_from_uri,
    type_from_endpoint,
    validate_endpoint,
)
from .enums import ReferenceKind, ResourceType
from .exceptions import (
    AutoQueryExtensionWarning,
    InvalidEndpoint,
    MarvelQueryError,
    MissingCredentials,
    ParameterValidationError,
    ResultValidationWarning,
    SchemaNotFound,
    TransportError,
)
from .relationships import RELATIONSHIPS, reference_kind, referenced_type

__all__ = [
    # Configuration
    "APIKeys",
    "Config",
    "DEFAULT_BASE_URL",
    "ValidationOptions",
    # Endpoints
    "Endpoint",
    "EndpointDescriptor",
    "endpoint_from_uri",
    "format_endpoint",
    "id_from_uri",
    "type_from_endpoint",
    "validate_endpoint",
    # Enums
    "ReferenceKind",
    "ResourceType",
    # Relationships
    "RELATIONSHIPS",
    "reference_kind",
    "referenced_type",
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
