"""Public query API."""

from .client import QueryFactory, init, init_from_env
from .query import MarvelQuery, Validated

__all__ = [
    "MarvelQuery",
    "QueryFactory",
    "Validated",
    "init",
    "init_from_env",
]
