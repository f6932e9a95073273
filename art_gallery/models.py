"""Data models for the Virtual Art Gallery."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any

from .config import PAGE_SIZE
from .pagination import PaginationWindow, pagination_window
from .state import FACETS, QueryState

FACET_LABELS = {
    "classification": "Classification",
    "century": "Century",
    "culture": "Culture",
}

NO_TITLE = "No title"
NO_DATE = "No date"
UNKNOWN_ARTIST = "Unknown"
NO_DESCRIPTION = "No description"


def total_pages_for(total_records: int, page_size: int = PAGE_SIZE) -> int:
    """Number of result pages, never less than 1 so pagination stays renderable."""
    if total_records <= 0:
        return 1
    return max(1, math.ceil(total_records / page_size))


@dataclass(frozen=True)
class Person:
    name: str


@dataclass(frozen=True)
class ArtItem:
    """A catalog record as returned by the object search endpoint."""

    id: int | str
    detail_url: str = ""

    # Optional fields; the catalog omits or nulls them freely
    title: str | None = None
    dated: str | None = None
    primary_image_url: str | None = None
    description: str | None = None

    # First entry is the primary artist
    people: tuple[Person, ...] = ()

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "ArtItem":
        """Build an item from a raw API record.

        Raises KeyError when the record has no id and TypeError when it is not
        a mapping; callers skip such records.
        """
        if not isinstance(record, dict):
            raise TypeError(f"expected an object record, got {type(record).__name__}")

        people = tuple(
            Person(name=str(person["name"]))
            for person in (record.get("people") or [])
            if isinstance(person, dict) and person.get("name")
        )

        return cls(
            id=record["id"],
            detail_url=record.get("url") or "",
            title=record.get("title") or None,
            dated=record.get("dated") or None,
            primary_image_url=record.get("primaryimageurl") or None,
            description=record.get("description") or None,
            people=people,
        )

    @property
    def primary_artist(self) -> str | None:
        return self.people[0].name if self.people else None

    # Display helpers used by the card grid and the detail dialog

    @property
    def display_title(self) -> str:
        return self.title or NO_TITLE

    @property
    def display_date(self) -> str:
        return self.dated or NO_DATE

    @property
    def display_artist(self) -> str:
        return self.primary_artist or UNKNOWN_ARTIST

    @property
    def display_description(self) -> str:
        return self.description or NO_DESCRIPTION


@dataclass(frozen=True)
class FacetOption:
    """One selectable value of a facet (e.g. classification "Paintings")."""

    id: int | str
    name: str

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "FacetOption":
        if not isinstance(record, dict):
            raise TypeError(f"expected an option record, got {type(record).__name__}")
        return cls(id=record["id"], name=str(record["name"]))


@dataclass(frozen=True)
class FacetOptions:
    """Option lists for every facet, in order of arrival from the API."""

    classification: tuple[FacetOption, ...] = ()
    century: tuple[FacetOption, ...] = ()
    culture: tuple[FacetOption, ...] = ()

    def for_facet(self, name: str) -> tuple[FacetOption, ...]:
        if name not in FACETS:
            raise ValueError(f"Unknown facet: {name}. Available: {', '.join(FACETS)}")
        return getattr(self, name)

    def names(self, facet: str) -> list[str]:
        return [option.name for option in self.for_facet(facet)]


@dataclass(frozen=True)
class SearchResult:
    """One page of search results plus the catalog's total match count."""

    items: tuple[ArtItem, ...] = ()
    total_records: int = 0
    skipped: int = 0  # Records that failed to parse

    @property
    def total_pages(self) -> int:
        return total_pages_for(self.total_records)


@dataclass(frozen=True)
class GallerySnapshot:
    """Everything the presentation layer reads, published as one immutable value.

    Derived values (total pages, pagination window, "no results") are computed
    on read so they can never drift from the stored fields.
    """

    query: QueryState = field(default_factory=QueryState)
    items: tuple[ArtItem, ...] = ()
    total_records: int = 0
    filter_options: FacetOptions = field(default_factory=FacetOptions)
    loading: bool = False  # Any request of the latest set outstanding
    searching: bool = False  # The search itself outstanding
    error: str | None = None
    selected_item: ArtItem | None = None

    @property
    def page(self) -> int:
        return self.query.page

    @property
    def total_pages(self) -> int:
        return total_pages_for(self.total_records)

    @property
    def pagination(self) -> PaginationWindow:
        return pagination_window(self.page, self.total_pages)

    @property
    def has_error(self) -> bool:
        return self.error is not None

    @property
    def no_results(self) -> bool:
        """True for a successful search that matched nothing."""
        return not self.searching and not self.has_error and len(self.items) == 0

