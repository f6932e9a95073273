"""Harvard Art Museums adapter."""

from __future__ import annotations

from typing import Any

from .base import CatalogAdapter
from ..config import FACET_PAGE_SIZE, PAGE_SIZE
from ..errors import DecodeFailure
from ..models import FacetOption, SearchResult
from ..state import FACETS, QueryState


class HarvardAdapter(CatalogAdapter):
    """Adapter for the Harvard Art Museums API."""

    name = "Harvard Art Museums"
    short_name = "HAM"

    @property
    def base_url(self) -> str:
        return self.settings.base_url.rstrip("/")

    def build_search_params(self, query: QueryState) -> list[tuple[str, Any]]:
        """
        Build the query string for ``GET /object``.

        Only non-empty filters become constraints, and ``q`` is sent only for
        non-empty search text. Returned as ordered pairs so tests can compare
        the exact request.
        """
        params: list[tuple[str, Any]] = [("apikey", self.settings.api_key)]
        params.extend(query.filters.active())
        params.append(("page", query.page))
        params.append(("size", PAGE_SIZE))
        if query.search_text:
            params.append(("q", query.search_text))
        return params

    def search(self, query: QueryState) -> SearchResult:
        """Execute search against the object endpoint."""
        self._log_info(f"Fetching objects ({query.describe()}, timeout={self.fetch_timeout}s)")

        data = self._get_json(f"{self.base_url}/object", self.build_search_params(query))
        records = self._records(data)

        info = data.get("info")
        total = info.get("totalrecords") if isinstance(info, dict) else None
        if isinstance(total, bool) or not isinstance(total, int) or total < 0:
            self._log_error(f"Response has no usable info.totalrecords: {total!r}")
            raise DecodeFailure(f"{self.name} sent a response in an unexpected format.")

        items, skipped = self.parse_items(records)

        self._log_info(f"Received {len(items)} items (total records: {total})")
        if skipped > 0:
            self._log_info(f"Skipped {skipped} unreadable records")

        return SearchResult(items=tuple(items), total_records=total, skipped=skipped)

    def list_facet(self, facet: str) -> list[FacetOption]:
        """Fetch every option of ``facet`` from its listing endpoint."""
        if facet not in FACETS:
            raise ValueError(f"Unknown facet: {facet}. Available: {', '.join(FACETS)}")

        params = [("apikey", self.settings.api_key), ("size", FACET_PAGE_SIZE)]
        data = self._get_json(f"{self.base_url}/{facet}", params)

        options: list[FacetOption] = []
        for record in self._records(data):
            try:
                options.append(FacetOption.from_record(record))
            except (KeyError, TypeError, ValueError) as e:
                self._log_warning(f"Failed to parse {facet} option: {e}")

        self._log_info(f"Received {len(options)} {facet} options")
        return options
