"""Abstract base class for catalog adapters."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

import requests

from ..config import FETCH_TIMEOUT, Settings
from ..errors import DecodeFailure, NetworkFailure
from ..log import LogMixin
from ..models import ArtItem, FacetOption, SearchResult
from ..state import QueryState


class CatalogAdapter(LogMixin, ABC):
    """
    Abstract base class for catalog API adapters.

    Subclasses implement catalog-specific request building and decoding while
    this base class turns transport problems into CatalogError subclasses and
    provides logging.

    All methods are blocking; the controller runs them in worker threads.
    """

    # Subclasses must define these
    name: str = "Unknown Catalog"  # Full display name
    short_name: str = "UNK"  # Short identifier (e.g., "HAM")

    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    @property
    def log_name(self) -> str:
        return self.short_name

    @property
    def fetch_timeout(self) -> float:
        return self.settings.fetch_timeout or FETCH_TIMEOUT

    def _get_json(self, url: str, params: list[tuple[str, Any]]) -> Any:
        """
        GET ``url`` and decode the JSON body.

        Raises:
            NetworkFailure: the request did not complete with a 2xx status
            DecodeFailure: the body is not JSON
        """
        try:
            response = requests.get(
                url,
                params=params,
                timeout=self.fetch_timeout,
                verify=not self.settings.ssl_bypass,
            )
            response.raise_for_status()

        except requests.Timeout as e:
            self._log_error(f"Timeout after {self.fetch_timeout}s")
            raise NetworkFailure(
                f"{self.name} took too long to respond. Try again."
            ) from e

        except requests.ConnectionError as e:
            self._log_error("Connection failed")
            raise NetworkFailure(
                f"Could not connect to {self.name}. Check your internet connection."
            ) from e

        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            self._log_error(f"HTTP error: {status or 'unknown'}")
            raise NetworkFailure(
                f"{self.name} returned an error (status {status or 'unknown'}). "
                "Try again later.",
                status=status,
            ) from e

        except requests.RequestException as e:
            self._log_error(f"Request error: {e}")
            raise NetworkFailure(f"Error communicating with {self.name}. Try again.") from e

        try:
            return response.json()
        except ValueError as e:
            self._log_error(f"Invalid JSON from {url}: {e}")
            raise DecodeFailure(f"{self.name} sent a response that could not be read.") from e

    def _records(self, data: Any) -> list[Any]:
        """Return the ``records`` list of a response body or raise DecodeFailure."""
        records = data.get("records") if isinstance(data, dict) else None
        if not isinstance(records, list):
            self._log_error("Response has no 'records' list")
            raise DecodeFailure(f"{self.name} sent a response in an unexpected format.")
        return records

    @abstractmethod
    def search(self, query: QueryState) -> SearchResult:
        """
        Fetch one page of items matching ``query``.

        Raises:
            CatalogError: on network or decode failure
        """

    @abstractmethod
    def list_facet(self, facet: str) -> list[FacetOption]:
        """
        Fetch the selectable values of one facet.

        Raises:
            CatalogError: on network or decode failure
        """

    def parse_items(self, records: list[Any]) -> tuple[list[ArtItem], int]:
        """Decode item records, skipping the ones that fail. Returns (items, skipped)."""
        items: list[ArtItem] = []
        skipped = 0
        for record in records:
            try:
                items.append(ArtItem.from_record(record))
            except (KeyError, TypeError, ValueError) as e:
                record_id = record.get("id") if isinstance(record, dict) else None
                self._log_warning(f"Failed to parse item {record_id}: {e}")
                skipped += 1
        return items, skipped
