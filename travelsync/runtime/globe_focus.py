"""Globe camera focus adapter and marker projection."""

from __future__ import annotations

import logging
from collections.abc import Collection, Iterable

from travelsync.api.catalog import CatalogEntry, CatalogIndex
from travelsync.api.events import Subscription
from travelsync.api.state import GeoPoint, StateChange
from travelsync.api.store import InteractionStore
from travelsync.api.surfaces import GlobeMarker, GlobeRenderer
from travelsync.runtime.config import GlobeConfig
from travelsync.runtime.errors import RECOVERABLE_RUNTIME_ERRORS, log_recoverable
from travelsync.runtime.navigation import NavigationCoordinator, SelectionSource

_LOG = logging.getLogger("travelsync.globe")


def project_markers(
    entries: Iterable[CatalogEntry],
    *,
    filtered_ids: Collection[str] | None = None,
    active_id: str | None = None,
    config: GlobeConfig | None = None,
) -> tuple[GlobeMarker, ...]:
    """Build renderer markers.

    Entries outside ``filtered_ids`` are dimmed; the active entry is enlarged
    unless it is filtered out.
    """
    cfg = config or GlobeConfig()
    markers: list[GlobeMarker] = []
    for entry in entries:
        if filtered_ids is not None and entry.id not in filtered_ids:
            size, color = cfg.marker_size * 0.5, cfg.filtered_marker_color
        elif entry.id == active_id:
            size, color = cfg.active_marker_size, cfg.active_marker_color
        else:
            size, color = cfg.marker_size, cfg.marker_color
        markers.append(
            GlobeMarker(
                id=entry.id,
                lat=entry.coordinate.lat,
                lng=entry.coordinate.lng,
                size=size,
                color=color,
                label=entry.title,
            )
        )
    return tuple(markers)


class GlobeFocusAdapter:
    """Keeps the globe camera on the store's focus point."""

    def __init__(
        self,
        *,
        store: InteractionStore,
        catalog: CatalogIndex,
        renderer: GlobeRenderer,
        coordinator: NavigationCoordinator | None = None,
        config: GlobeConfig | None = None,
    ) -> None:
        self._store = store
        self._catalog = catalog
        self._renderer = renderer
        self._coordinator = coordinator
        self._config = config or GlobeConfig()
        self._subscription: Subscription | None = None
        self._hovered_id: str | None = None

    @property
    def attached(self) -> bool:
        return self._subscription is not None

    @property
    def hovered_item_id(self) -> str | None:
        return self._hovered_id

    @property
    def tooltip_item_id(self) -> str | None:
        """Entry the tooltip card shows: hover wins over the active entry."""
        return self._hovered_id or self._store.state.active_item_id

    def attach(self) -> None:
        if self._subscription is not None:
            return
        self._subscription = self._store.subscribe(self._on_change)
        self._apply_focus(self._store.state.focus_point)

    def detach(self) -> None:
        if self._subscription is not None:
            self._store.unsubscribe(self._subscription)
            self._subscription = None

    def handle_marker_hover(self, item_id: str | None) -> None:
        self._hovered_id = item_id

    def handle_marker_click(self, item_id: str) -> bool:
        return self._route(item_id, SelectionSource.GLOBE_MARKER)

    def handle_tooltip_click(self) -> bool:
        item_id = self.tooltip_item_id
        if item_id is None:
            return False
        return self._route(item_id, SelectionSource.GLOBE_TOOLTIP)

    def _route(self, item_id: str, source: SelectionSource) -> bool:
        if self._coordinator is None:
            _LOG.debug("globe_click_unrouted item=%s", item_id)
            return False
        return self._coordinator.select(item_id, source=source)

    def _on_change(self, change: StateChange) -> None:
        current = change.current
        if change.changed("active_item_id"):
            self._hovered_id = None
            entry = self._catalog.get(current.active_item_id)
            if entry is not None and current.focus_point != entry.coordinate:
                # Delivered as its own change once this round completes.
                self._store.set_focus_point(entry.coordinate)
        if change.changed("focus_point"):
            self._apply_focus(current.focus_point, released=change.previous.focus_point)

    def _apply_focus(self, point: GeoPoint | None, *, released: GeoPoint | None = None) -> None:
        """Fly to ``point``, or zoom back out over ``released`` and resume rotation."""
        cfg = self._config
        try:
            if point is None:
                self._renderer.set_auto_rotate(True, speed=cfg.auto_rotate_speed)
                if released is not None:
                    self._renderer.set_point_of_view(
                        released,
                        altitude=cfg.default_altitude,
                        duration_ms=cfg.animation_duration_ms,
                    )
                return
            self._renderer.set_auto_rotate(False, speed=cfg.auto_rotate_speed)
            self._renderer.set_point_of_view(
                point,
                altitude=cfg.focus_altitude,
                duration_ms=cfg.animation_duration_ms,
            )
        except RECOVERABLE_RUNTIME_ERRORS:
            log_recoverable(_LOG, "globe_focus_failed")
            return
        _LOG.debug("globe_focus point=%s", point)
