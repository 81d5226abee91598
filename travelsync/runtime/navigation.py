"""Navigation coordinator for explicit entry selection."""

from __future__ import annotations

import logging
from enum import StrEnum

from travelsync.api.catalog import CatalogIndex
from travelsync.api.state import InteractionMode
from travelsync.api.store import InteractionStore
from travelsync.api.surfaces import ScrollContainer
from travelsync.runtime.config import NavigationTimings
from travelsync.runtime.errors import RECOVERABLE_RUNTIME_ERRORS, log_recoverable
from travelsync.runtime.scheduler import Routine, Scheduler
from travelsync.runtime.selection_guard import SelectionGuard

_LOG = logging.getLogger("travelsync.navigation")


class SelectionSource(StrEnum):
    """Gesture that triggered a selection."""

    LIST_CARD = "list_card"
    GLOBE_MARKER = "globe_marker"
    GLOBE_TOOLTIP = "globe_tooltip"


class NavigationCoordinator:
    """Drives list and globe to one focused entry after a click.

    Each selection runs as one scheduler routine:

    1. mode, active item, focus point and guard phase change in one batch;
    2. after ``scroll_delay_ms`` the list item is scrolled to centre;
    3. ``settle_ms`` later the programmatic-scroll suppression ends;
    4. at ``lock_ms`` the active item is re-asserted and the lock released.

    A newer selection cancels the routine of the one it supersedes.
    """

    def __init__(
        self,
        *,
        store: InteractionStore,
        catalog: CatalogIndex,
        scheduler: Scheduler,
        container: ScrollContainer | None = None,
        guard: SelectionGuard | None = None,
        timings: NavigationTimings | None = None,
    ) -> None:
        self._store = store
        self._catalog = catalog
        self._scheduler = scheduler
        self._container = container
        self._guard = guard or SelectionGuard(store)
        self._timings = timings or NavigationTimings()
        self._routine_id: int | None = None

    @property
    def guard(self) -> SelectionGuard:
        return self._guard

    @property
    def pending(self) -> bool:
        """Return whether a selection timeline is still running."""
        return self._routine_id is not None and self._scheduler.is_pending(self._routine_id)

    def select(self, item_id: str, *, source: SelectionSource | str, element: object | None = None) -> bool:
        """Select an entry; returns ``False`` for ids missing from the catalog."""
        source = SelectionSource(source)
        entry = self._catalog.get(item_id)
        if entry is None:
            _LOG.debug("select_unknown item=%s source=%s", item_id, source)
            return False
        self._cancel_timeline()
        with self._store.batch():
            self._store.set_mode(InteractionMode.NARRATIVE)
            self._store.set_active_item_id(entry.id)
            self._store.set_focus_point(entry.coordinate)
            token = self._guard.begin()
        _LOG.info("select item=%s source=%s token=%d", entry.id, source, token)
        self._routine_id = self._scheduler.spawn(self._timeline(entry.id, token, element))
        return True

    def explore(self) -> None:
        """Hand emphasis to the globe and let it rotate freely."""
        with self._store.batch():
            self._store.set_mode(InteractionMode.EXPLORE)
            self._store.set_focus_point(None)

    def return_to_narrative(self) -> None:
        self._store.set_mode(InteractionMode.NARRATIVE)

    def close(self) -> None:
        """Cancel the running timeline without touching the store."""
        self._cancel_timeline()

    def _cancel_timeline(self) -> None:
        if self._routine_id is not None:
            self._scheduler.cancel(self._routine_id)
            self._routine_id = None

    def _timeline(self, item_id: str, token: int, element: object | None) -> Routine:
        timings = self._timings
        yield timings.scroll_delay_ms / 1000.0
        self._scroll_to(item_id, element)
        yield timings.settle_ms / 1000.0
        self._guard.settle(token)
        yield (timings.lock_ms - timings.settle_ms) / 1000.0
        if self._guard.is_current(token):
            with self._store.batch():
                self._store.set_active_item_id(item_id)
                self._guard.release(token)
        if self._guard.is_current(token):
            # A subscriber may have started a newer selection meanwhile.
            self._routine_id = None

    def _scroll_to(self, item_id: str, element: object | None) -> None:
        container = self._container
        if container is None:
            return
        target = element
        if target is None:
            target = next((item.element for item in container.list_items() if item.item_id == item_id), None)
        if target is None:
            _LOG.debug("scroll_target_missing item=%s", item_id)
            return
        try:
            container.scroll_into_view(target, centered=True, smooth=True)
        except RECOVERABLE_RUNTIME_ERRORS:
            log_recoverable(_LOG, f"scroll_into_view_failed item={item_id}")
