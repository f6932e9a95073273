"""Test configuration and fixtures for the Virtual Art Gallery.

Controller tests run against FakeAdapter, an in-memory catalog that records
every call and can be told to fail, stall, or respond slowly.
"""
import sys
import threading
import time
from pathlib import Path
from typing import Dict, List

import pytest

# Ensure art_gallery is importable
sys.path.insert(0, str(Path(__file__).parent.parent))

from art_gallery.adapters.base import CatalogAdapter
from art_gallery.config import PAGE_SIZE, Settings
from art_gallery.controller import GalleryController
from art_gallery.models import ArtItem, FacetOption, SearchResult
from art_gallery.state import QueryState


class FakeAdapter(CatalogAdapter):
    """Catalog double; blocking like the real adapter so it runs in worker threads."""

    name = "Fake Catalog"
    short_name = "FAKE"

    def __init__(self, settings: Settings = None):
        super().__init__(settings or Settings(api_key="test-key"))
        self.total_records = 30
        self.search_error: Exception = None
        self.facet_errors: Dict[str, Exception] = {}
        self.delays: Dict[str, float] = {}  # search text -> seconds
        self.gate: threading.Event = None

        self.search_calls: List[QueryState] = []
        self.facet_calls: List[str] = []

    def search(self, query: QueryState) -> SearchResult:
        self.search_calls.append(query)
        if self.gate is not None:
            self.gate.wait(timeout=5)
        delay = self.delays.get(query.search_text)
        if delay:
            time.sleep(delay)
        if self.search_error is not None:
            raise self.search_error

        offset = (query.page - 1) * PAGE_SIZE
        count = max(0, min(PAGE_SIZE, self.total_records - offset))
        prefix = query.search_text or "all"
        items = tuple(
            ArtItem(id=f"{prefix}-{offset + n}", title=f"{prefix} #{offset + n}")
            for n in range(count)
        )
        return SearchResult(items=items, total_records=self.total_records)

    def list_facet(self, facet: str) -> List[FacetOption]:
        self.facet_calls.append(facet)
        if facet in self.facet_errors:
            raise self.facet_errors[facet]
        return [FacetOption(id=n, name=f"{facet} {n}") for n in range(1, 4)]


@pytest.fixture
def adapter() -> FakeAdapter:
    return FakeAdapter()


@pytest.fixture
def controller(adapter: FakeAdapter) -> GalleryController:
    return GalleryController(adapter)


@pytest.fixture
def log_entries(controller: GalleryController) -> List[tuple]:
    """Capture (level, message) pairs logged by the controller and adapter."""
    entries = []
    controller.set_logger(lambda level, message: entries.append((level, message)))
    return entries


@pytest.fixture
def harvard_settings() -> Settings:
    return Settings(api_key="test-key", base_url="https://api.example.org")
