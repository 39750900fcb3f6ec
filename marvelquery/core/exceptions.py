"""Custom exception hierarchy."""

from __future__ import annotations

from typing import Any


class MarvelQueryError(Exception):
    """Base exception for all library errors."""

    pass


class InvalidEndpoint(MarvelQueryError):
    """Endpoint tuple or resource URI is malformed.

    Raised at construction time when a segment is not a known resource type,
    the id is not numeric, or the base and sub types are the same.
    """

    def __init__(self, message: str, endpoint: Any = None) -> None:
        super().__init__(message)
        self.endpoint = endpoint


class MissingCredentials(MarvelQueryError):
    """Public or private API key is missing."""

    pass


class ParameterValidationError(MarvelQueryError):
    """Query parameters failed schema validation.

    Only raised when strict parameter validation is configured; otherwise the
    failure is recorded on ``query.validated.parameters``.
    """

    def __init__(
        self,
        message: str,
        resource_type: str | None = None,
        errors: list[dict[str, Any]] | None = None,
    ) -> None:
        super().__init__(message)
        self.resource_type = resource_type
        self.errors = errors or []


class TransportError(MarvelQueryError):
    """Network failure or malformed response envelope."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        url: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class SchemaNotFound(MarvelQueryError):
    """No schema is registered for a known resource type."""

    pass


class ResultValidationWarning(UserWarning):
    """Some results did not match the schema for their resource type."""

    pass


class AutoQueryExtensionWarning(UserWarning):
    """A reference could not be resolved into an endpoint and was left as-is."""

    pass
