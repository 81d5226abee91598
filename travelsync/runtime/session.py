"""Session composition wiring store, list, globe and scheduler."""

from __future__ import annotations

import logging
from collections.abc import Collection, Iterable
from types import TracebackType

from travelsync.api.catalog import CatalogEntry, CatalogIndex
from travelsync.api.state import InteractionState, SyncPhase
from travelsync.api.surfaces import GlobeMarker, GlobeRenderer, ScrollContainer, VisibilityWatcher
from travelsync.runtime.config import SyncConfig, get_sync_config
from travelsync.runtime.globe_focus import GlobeFocusAdapter, project_markers
from travelsync.runtime.list_view import HeadlessScrollContainer
from travelsync.runtime.navigation import NavigationCoordinator, SelectionSource
from travelsync.runtime.scheduler import Scheduler
from travelsync.runtime.scroll_spy import ScrollSpy
from travelsync.runtime.selection_guard import SelectionGuard
from travelsync.runtime.store import RuntimeInteractionStore

_LOG = logging.getLogger("travelsync.session")


class SyncSession:
    """Owns one list/globe pairing and everything it schedules."""

    def __init__(
        self,
        *,
        catalog: Iterable[CatalogEntry] | CatalogIndex,
        container: ScrollContainer | None = None,
        watcher: VisibilityWatcher | None = None,
        renderer: GlobeRenderer | None = None,
        scheduler: Scheduler | None = None,
        config: SyncConfig | None = None,
        initial_state: InteractionState | None = None,
    ) -> None:
        self.config = config or get_sync_config()
        self.catalog = catalog if isinstance(catalog, CatalogIndex) else CatalogIndex(catalog)
        self.scheduler = scheduler or Scheduler()
        self.store = RuntimeInteractionStore(initial_state)
        self.guard = SelectionGuard(self.store)
        self.container = container
        self.coordinator = NavigationCoordinator(
            store=self.store,
            catalog=self.catalog,
            scheduler=self.scheduler,
            container=container,
            guard=self.guard,
            timings=self.config.navigation,
        )
        self.scroll_spy: ScrollSpy | None = None
        if container is not None and watcher is not None:
            self.scroll_spy = ScrollSpy(
                store=self.store,
                container=container,
                watcher=watcher,
                config=self.config.scroll_spy,
            )
        self.globe: GlobeFocusAdapter | None = None
        if renderer is not None:
            self.globe = GlobeFocusAdapter(
                store=self.store,
                catalog=self.catalog,
                renderer=renderer,
                coordinator=self.coordinator,
                config=self.config.globe,
            )
        self._open = False

    @property
    def is_open(self) -> bool:
        return self._open

    def open(self) -> SyncSession:
        if self._open:
            return self
        self._open = True
        if self.globe is not None:
            self.globe.attach()
        if self.scroll_spy is not None:
            self.scroll_spy.attach()
        _LOG.info("session_open entries=%d", len(self.catalog))
        return self

    def close(self) -> None:
        """Detach observers and cancel every pending timer of this session."""
        if not self._open:
            return
        self._open = False
        self.coordinator.close()
        if self.store.state.sync_phase is not SyncPhase.IDLE:
            # No timeline is left to release the guard.
            self.guard.reset()
        if self.scroll_spy is not None:
            self.scroll_spy.detach()
        if self.globe is not None:
            self.globe.detach()
        if isinstance(self.container, HeadlessScrollContainer):
            self.container.cancel_animation()
        _LOG.info("session_closed")

    def __enter__(self) -> SyncSession:
        return self.open()

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def tick(self, delta_seconds: float) -> int:
        """Advance session time from the host's frame loop."""
        return self.scheduler.advance(delta_seconds)

    def select_from_list(self, item_id: str, *, element: object | None = None) -> bool:
        return self.coordinator.select(item_id, source=SelectionSource.LIST_CARD, element=element)

    def markers(self, filtered_ids: Collection[str] | None = None) -> tuple[GlobeMarker, ...]:
        return project_markers(
            self.catalog,
            filtered_ids=filtered_ids,
            active_id=self.store.state.active_item_id,
            config=self.config.globe,
        )
