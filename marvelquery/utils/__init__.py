"""Utilities."""

from .http import HTTPClient

__all__ = ["HTTPClient"]
