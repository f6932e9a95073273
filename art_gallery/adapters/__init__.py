"""Catalog adapters."""

from .base import CatalogAdapter
from .harvard import HarvardAdapter

__all__ = [
    "CatalogAdapter",
    "HarvardAdapter",
]
