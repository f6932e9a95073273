"""Exceptions raised by catalog adapters and configuration loading."""

from __future__ import annotations


class CatalogError(Exception):
    """A catalog request failed. ``str(error)`` is safe to show to users."""


class NetworkFailure(CatalogError):
    """The request could not complete (timeout, connection, HTTP status)."""

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class DecodeFailure(CatalogError):
    """The response arrived but was not in the expected shape."""


class ConfigError(Exception):
    """Required configuration is missing or invalid."""
