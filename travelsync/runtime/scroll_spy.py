"""Scroll-spy observer inferring the currently viewed list entry."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from enum import StrEnum
from types import TracebackType

from travelsync.api.events import Subscription
from travelsync.api.store import InteractionStore
from travelsync.api.surfaces import ScrollContainer, VisibilityEntry, VisibilityWatcher, WatchHandle
from travelsync.runtime.config import ScrollSpyConfig

_LOG = logging.getLogger("travelsync.scroll_spy")


class ScrollEdge(StrEnum):
    TOP = "top"
    BOTTOM = "bottom"


def detect_edge(container: ScrollContainer, config: ScrollSpyConfig) -> ScrollEdge | None:
    """Return the list boundary the container is resting against, if any.

    The top boundary wins when both apply (content shorter than the viewport).
    """
    if container.scroll_top <= config.top_threshold_px:
        return ScrollEdge.TOP
    remaining = container.scroll_height - container.scroll_top - container.client_height
    if remaining < config.bottom_threshold_px:
        return ScrollEdge.BOTTOM
    return None


def most_visible(entries: Sequence[VisibilityEntry]) -> VisibilityEntry | None:
    """Return the entry with the highest ratio; ties keep the first one."""
    best: VisibilityEntry | None = None
    for entry in entries:
        if best is None or entry.ratio > best.ratio:
            best = entry
    return best


class ScrollSpy:
    """Writes the most visible list entry to the store unless suppressed."""

    def __init__(
        self,
        *,
        store: InteractionStore,
        container: ScrollContainer,
        watcher: VisibilityWatcher,
        config: ScrollSpyConfig | None = None,
    ) -> None:
        self._store = store
        self._container = container
        self._watcher = watcher
        self._config = config or ScrollSpyConfig()
        self._watch: WatchHandle | None = None
        self._scroll_subscription: Subscription | None = None

    @property
    def attached(self) -> bool:
        return self._watch is not None

    def attach(self) -> None:
        """Start watching the container's current items."""
        if self._watch is not None:
            return
        items = self._container.list_items()
        self._watch = self._watcher.observe(items, self._config.visibility_options(), self.handle_visibility)
        self._scroll_subscription = self._container.add_scroll_listener(self.evaluate)
        _LOG.debug("scroll_spy_attached items=%d", len(items))
        self.evaluate()

    def detach(self) -> None:
        if self._scroll_subscription is not None:
            self._container.remove_scroll_listener(self._scroll_subscription)
            self._scroll_subscription = None
        if self._watch is not None:
            self._watch.disconnect()
            self._watch = None
            _LOG.debug("scroll_spy_detached")

    def refresh(self) -> None:
        """Re-observe after the list's items changed."""
        self.detach()
        self.attach()

    def __enter__(self) -> ScrollSpy:
        self.attach()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.detach()

    def evaluate(self) -> None:
        """Scroll-tick check: boundary overrides only."""
        if self._store.state.is_suppressed:
            return
        self._apply_edge_override()

    def handle_visibility(self, entries: Sequence[VisibilityEntry]) -> None:
        """Visibility batch: boundary overrides first, then the most visible entry."""
        if self._store.state.is_suppressed:
            _LOG.debug("scroll_spy_suppressed phase=%s", self._store.state.sync_phase)
            return
        if self._apply_edge_override():
            return
        best = most_visible(entries)
        if best is not None and best.ratio > 0.0:
            self._store.set_active_item_id(best.item_id)

    def _apply_edge_override(self) -> bool:
        edge = detect_edge(self._container, self._config)
        if edge is None:
            return False
        items = self._container.list_items()
        if not items:
            return True
        target = items[0] if edge is ScrollEdge.TOP else items[-1]
        self._store.set_active_item_id(target.item_id)
        return True
