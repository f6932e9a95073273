"""Gallery state controller.

Owns the query state, drives facet discovery and paginated searches through a
catalog adapter, and publishes the results as an immutable GallerySnapshot.

Everything runs on one asyncio event loop. Adapter calls are blocking and run
in worker threads via ``asyncio.to_thread``; their results are applied back on
the loop, so snapshot updates never race each other. Every search and every
facet discovery gets a generation number, and a result is applied only if its
generation is still the latest one.
"""

from __future__ import annotations

import asyncio
from dataclasses import replace
from typing import Any, Callable, Coroutine

from .adapters.base import CatalogAdapter
from .errors import CatalogError
from .log import LogMixin
from .models import ArtItem, GallerySnapshot
from .state import FACETS, QueryState

Listener = Callable[[GallerySnapshot], None]


def _loop_running() -> bool:
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return False
    return True


class GalleryController(LogMixin):
    """
    Single source of truth for what the gallery shows.

    Mutations (``set_search_text``, ``set_filter``, ``set_page``) are
    synchronous: the new query is visible in ``snapshot`` immediately and the
    matching fetch is started in the background. Call ``settle()`` to wait for
    outstanding fetches. Mutations made while no event loop is running are
    remembered and fetched on the next ``settle()``.
    """

    log_name = "GALLERY"

    def __init__(self, adapter: CatalogAdapter,
                 refetch_facets_on_change: bool | None = None) -> None:
        self.adapter = adapter
        if refetch_facets_on_change is None:
            refetch_facets_on_change = adapter.settings.refetch_facets_on_change
        self.refetch_facets_on_change = refetch_facets_on_change

        self._query = QueryState()
        self._snapshot = GallerySnapshot()
        self._listeners: list[Listener] = []

        self._search_generation = 0
        self._facet_generation = 0
        self._search_pending = False
        self._facets_pending: set[str] = set()
        self._search_task: asyncio.Task | None = None
        self._tasks: set[asyncio.Task] = set()

        self._deferred_search = False
        self._deferred_facets = False
        self._started = False

    def set_logger(self, callback) -> None:
        """Set logging callback for the controller and its adapter."""
        super().set_logger(callback)
        self.adapter.set_logger(callback)

    # -------------------------------------------------------------------------
    # Read access
    # -------------------------------------------------------------------------

    @property
    def snapshot(self) -> GallerySnapshot:
        return self._snapshot

    @property
    def query(self) -> QueryState:
        return self._query

    @property
    def started(self) -> bool:
        return self._started

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener(snapshot)`` after every publish. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def start(self) -> None:
        """Load facet options and the first page of results."""
        self._started = True
        self._log_info("Starting gallery")
        self._dispatch_facets()
        self._dispatch_search()

    def set_search_text(self, text: str) -> None:
        self._apply_query(self._query.with_search_text(text), "search text changed")

    def set_filter(self, name: str, value: str | None) -> None:
        """Select ``value`` for facet ``name``; empty or None clears the filter."""
        self._apply_query(self._query.with_filter(name, value), f"{name} filter changed")

    def set_page(self, page: int) -> bool:
        """
        Go to ``page``.

        Returns False, without fetching, while a search is outstanding (its
        page count is not known yet) or when the page lies outside
        ``1..total_pages`` of the last published result.
        """
        if self._search_pending:
            self._log_warning(f"Rejected page {page} while a search is outstanding")
            return False
        total_pages = self._snapshot.total_pages
        if page < 1 or page > total_pages:
            self._log_warning(f"Rejected page {page} (valid range 1..{total_pages})")
            return False
        self._apply_query(self._query.with_page(page), "page changed")
        return True

    def select_item(self, item: ArtItem | None) -> None:
        """Open the detail view for ``item``, or close it with None."""
        self._publish(selected_item=item)

    def refresh(self) -> None:
        """Re-run the search for the current query, e.g. after an error."""
        self._log_info("Refresh requested")
        if self.refetch_facets_on_change:
            self._dispatch_facets()
        self._dispatch_search()

    def refresh_facets(self) -> None:
        """Re-fetch the facet option lists."""
        self._dispatch_facets()

    async def settle(self) -> None:
        """Start deferred fetches, then wait until no fetch is outstanding."""
        if self._deferred_facets:
            self._dispatch_facets()
        if self._deferred_search:
            self._dispatch_search()

        while self._tasks:
            results = await asyncio.gather(*list(self._tasks), return_exceptions=True)
            for result in results:
                # Cancelled searches surface as CancelledError, which is not an Exception
                if isinstance(result, Exception):
                    raise result

    # -------------------------------------------------------------------------
    # Orchestration
    # -------------------------------------------------------------------------

    def _apply_query(self, query: QueryState, reason: str) -> None:
        if query == self._query:
            return
        self._query = query
        self._log_info(f"Query changed: {reason} ({query.describe()})")
        if self.refetch_facets_on_change:
            self._dispatch_facets()
        self._dispatch_search()

    def _spawn(self, coro: Coroutine[Any, Any, None]) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def _dispatch_search(self) -> None:
        if not _loop_running():
            self._deferred_search = True
            self._publish(query=self._query)
            return
        self._deferred_search = False

        self._search_generation += 1
        generation = self._search_generation

        if self._search_task is not None and not self._search_task.done():
            self._search_task.cancel()

        self._search_pending = True
        self._publish(query=self._query)
        self._search_task = self._spawn(self._run_search(generation, self._query))

    def _dispatch_facets(self) -> None:
        if not _loop_running():
            self._deferred_facets = True
            return
        self._deferred_facets = False

        self._facet_generation += 1
        generation = self._facet_generation

        self._facets_pending = set(FACETS)
        self._publish()
        for facet in FACETS:
            self._spawn(self._run_facet(generation, facet))

    async def _run_search(self, generation: int, query: QueryState) -> None:
        try:
            result = await asyncio.to_thread(self.adapter.search, query)

        except asyncio.CancelledError:
            self._log_info(f"Search #{generation} cancelled by a newer query")
            raise

        except CatalogError as e:
            self._log_warning(f"Search #{generation} failed: {e}")
            self._finish_search(generation, items=(), error=str(e))
            return

        except Exception as e:
            self._log_error(f"Unexpected error in search #{generation}: {type(e).__name__}: {e}")
            self._finish_search(
                generation, items=(), error=f"Unexpected error from {self.adapter.name}."
            )
            return

        if generation == self._search_generation and query.page > result.total_pages:
            self._clamp_page(result.total_pages, result.total_records)
            return

        self._finish_search(
            generation,
            items=result.items,
            total_records=result.total_records,
            error=None,
        )

    def _clamp_page(self, last_page: int, total_records: int) -> None:
        """Move to the last page when the catalog shrank below the requested page."""
        self._log_warning(
            f"Page {self._query.page} is past the last page ({last_page}); reloading page {last_page}"
        )
        self._query = self._query.with_page(last_page)
        self._search_task = None  # the running task; it ends after this call
        self._dispatch_search()
        self._publish(items=(), total_records=total_records, error=None)

    def _finish_search(self, generation: int, **changes: Any) -> None:
        if generation != self._search_generation:
            self._log_info(
                f"Discarding stale search #{generation} (latest is #{self._search_generation})"
            )
            return
        self._search_pending = False
        self._publish(**changes)

    async def _run_facet(self, generation: int, facet: str) -> None:
        try:
            options = tuple(await asyncio.to_thread(self.adapter.list_facet, facet))

        except CatalogError as e:
            self._log_warning(f"{facet} options unavailable: {e}")
            options = ()

        except Exception as e:
            self._log_error(f"Unexpected error loading {facet} options: {type(e).__name__}: {e}")
            options = ()

        if generation != self._facet_generation:
            self._log_info(f"Discarding stale {facet} options #{generation}")
            return

        self._facets_pending.discard(facet)
        self._publish(filter_options=replace(self._snapshot.filter_options, **{facet: options}))

    def _publish(self, **changes: Any) -> None:
        """Replace the snapshot in one step and notify listeners."""
        changes["searching"] = self._search_pending
        changes["loading"] = self._search_pending or bool(self._facets_pending)
        self._snapshot = replace(self._snapshot, **changes)
        for listener in list(self._listeners):
            listener(self._snapshot)
