"""Runtime components of the query pipeline."""

from .autoquery import AutoQuery, ExtendedCollection, ExtendedResource, is_extended, sort_endpoints
from .params import DEFAULT_PARAMS, ParameterManager
from .transport import RESTTransport
from .url import build_url, request_hash
from .validator import ResultValidator, group_consecutive_indices

__all__ = [
    "AutoQuery",
    "ExtendedCollection",
    "ExtendedResource",
    "is_extended",
    "sort_endpoints",
    "DEFAULT_PARAMS",
    "ParameterManager",
    "RESTTransport",
    "build_url",
    "request_hash",
    "ResultValidator",
    "group_consecutive_indices",
]
