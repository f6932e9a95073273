"""Query state: the user-controlled inputs that determine what gets fetched.

QueryState is an immutable value. Each transition returns a new instance, and
any change to the search text or a filter lands back on page 1.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

# Facet dimensions, in the order they are shown in the UI
FACETS = ("classification", "century", "culture")


@dataclass(frozen=True)
class FacetFilters:
    """Selected facet values. An empty string means "no constraint"."""

    classification: str = ""
    century: str = ""
    culture: str = ""

    def active(self) -> list[tuple[str, str]]:
        """Return (name, value) pairs for the non-empty filters, in facet order."""
        return [(name, getattr(self, name)) for name in FACETS if getattr(self, name)]


@dataclass(frozen=True)
class QueryState:
    search_text: str = ""
    filters: FacetFilters = FacetFilters()
    page: int = 1

    def with_search_text(self, text: str) -> "QueryState":
        return replace(self, search_text=text or "", page=1)

    def with_filter(self, name: str, value: str | None) -> "QueryState":
        if name not in FACETS:
            raise ValueError(f"Unknown filter: {name}. Available: {', '.join(FACETS)}")
        filters = replace(self.filters, **{name: value or ""})
        return replace(self, filters=filters, page=1)

    def with_page(self, page: int) -> "QueryState":
        if page < 1:
            raise ValueError(f"Page must be >= 1, got {page}")
        return replace(self, page=page)

    def describe(self) -> str:
        """Short human-readable summary for log lines."""
        parts = [f"page={self.page}"]
        if self.search_text:
            parts.append(f"q={self.search_text!r}")
        for name, value in self.filters.active():
            parts.append(f"{name}={value!r}")
        return ", ".join(parts)
