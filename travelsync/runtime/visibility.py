"""Geometric visibility watcher over a headless list."""

from __future__ import annotations

import logging
from collections.abc import Sequence

import numpy as np

from travelsync.api.events import Subscription
from travelsync.api.surfaces import (
    ListItem,
    ScrollContainer,
    VisibilityCallback,
    VisibilityEntry,
    VisibilityOptions,
)
from travelsync.runtime.list_view import ItemBox
from travelsync.runtime.scheduler import Scheduler

_LOG = logging.getLogger("travelsync.visibility")


def focus_band(scroll_top: float, client_height: float, options: VisibilityOptions) -> tuple[float, float]:
    """Return the (top, bottom) content offsets of the shrunk viewport."""
    band_top = scroll_top + client_height * options.margin_top
    band_bottom = scroll_top + client_height * (1.0 - options.margin_bottom)
    return band_top, max(band_top, band_bottom)


def intersection_ratios(
    tops: np.ndarray,
    heights: np.ndarray,
    *,
    scroll_top: float,
    client_height: float,
    options: VisibilityOptions,
) -> np.ndarray:
    """Return the visible fraction of each item inside the focus band."""
    band_top, band_bottom = focus_band(scroll_top, client_height, options)
    overlap = np.clip(np.minimum(tops + heights, band_bottom) - np.maximum(tops, band_top), 0.0, None)
    ratios = np.zeros_like(heights, dtype=np.float64)
    np.divide(overlap, heights, out=ratios, where=heights > 0.0)
    return np.clip(ratios, 0.0, 1.0)


class _GeometricWatch:
    def __init__(
        self,
        *,
        container: ScrollContainer,
        scheduler: Scheduler,
        items: Sequence[ListItem],
        options: VisibilityOptions,
        callback: VisibilityCallback,
    ) -> None:
        boxes: list[ItemBox] = []
        for item in items:
            if not isinstance(item.element, ItemBox):
                raise TypeError(f"item {item.item_id!r} has no layout box")
            boxes.append(item.element)
        self._container = container
        self._scheduler = scheduler
        self._options = options
        self._callback = callback
        self._ids = tuple(item.item_id for item in items)
        self._tops = np.asarray([box.top for box in boxes], dtype=np.float64)
        self._heights = np.asarray([box.height for box in boxes], dtype=np.float64)
        self._thresholds = np.asarray(sorted(options.thresholds), dtype=np.float64)
        self._buckets: np.ndarray | None = None
        self._pending: dict[int, float] = {}
        self._flush_task: int | None = None
        self._subscription: Subscription | None = container.add_scroll_listener(self._measure)
        self._measure()

    @property
    def connected(self) -> bool:
        return self._subscription is not None

    def disconnect(self) -> None:
        if self._subscription is not None:
            self._container.remove_scroll_listener(self._subscription)
            self._subscription = None
        if self._flush_task is not None:
            self._scheduler.cancel(self._flush_task)
            self._flush_task = None
        self._pending.clear()

    def _measure(self) -> None:
        if not self._ids:
            return
        ratios = intersection_ratios(
            self._tops,
            self._heights,
            scroll_top=self._container.scroll_top,
            client_height=self._container.client_height,
            options=self._options,
        )
        buckets = np.searchsorted(self._thresholds, ratios, side="right")
        if self._buckets is None:
            changed = np.ones(len(self._ids), dtype=bool)
        else:
            changed = buckets != self._buckets
        self._buckets = buckets
        for index in np.flatnonzero(changed):
            self._pending[int(index)] = float(ratios[index])
        if self._pending and self._flush_task is None:
            self._flush_task = self._scheduler.call_later(0.0, self._flush)

    def _flush(self) -> None:
        self._flush_task = None
        if not self._pending:
            return
        entries = [
            VisibilityEntry(item_id=self._ids[index], ratio=self._pending[index])
            for index in sorted(self._pending)
        ]
        self._pending.clear()
        _LOG.debug("visibility_batch size=%d", len(entries))
        self._callback(entries)


class GeometricVisibilityWatcher:
    """Reports threshold crossings of item visibility on the next scheduler turn."""

    def __init__(self, container: ScrollContainer, scheduler: Scheduler) -> None:
        self._container = container
        self._scheduler = scheduler

    def observe(
        self,
        items: Sequence[ListItem],
        options: VisibilityOptions,
        callback: VisibilityCallback,
    ) -> _GeometricWatch:
        return _GeometricWatch(
            container=self._container,
            scheduler=self._scheduler,
            items=items,
            options=options,
            callback=callback,
        )
