"""Headless scrollable list surface."""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from travelsync.api.events import Subscription
from travelsync.api.surfaces import ListItem, ScrollListener
from travelsync.runtime.config import ListViewConfig
from travelsync.runtime.scheduler import Routine, Scheduler

_LOG = logging.getLogger("travelsync.list_view")


@dataclass(frozen=True, slots=True)
class ItemBox:
    """Laid-out list child in content coordinates."""

    item_id: str
    top: float
    height: float

    @property
    def bottom(self) -> float:
        return self.top + self.height


def _ease_in_out(t: float) -> float:
    return 0.5 - 0.5 * math.cos(math.pi * t)


class HeadlessScrollContainer:
    """Vertical list with clamped scrolling and optional smooth animation."""

    def __init__(
        self,
        items: Sequence[tuple[str, float]],
        *,
        client_height: float,
        gap: float = 0.0,
        padding_top: float = 0.0,
        padding_bottom: float = 0.0,
        scheduler: Scheduler | None = None,
        config: ListViewConfig | None = None,
    ) -> None:
        if client_height <= 0.0:
            raise ValueError("client_height must be > 0")
        self._client_height = float(client_height)
        self._gap = float(gap)
        self._padding_top = float(padding_top)
        self._padding_bottom = float(padding_bottom)
        self._scheduler = scheduler
        self._config = config or ListViewConfig()
        self._scroll_top = 0.0
        self._listeners: dict[int, ScrollListener] = {}
        self._next_listener_id = 1
        self._animation_id: int | None = None
        self._boxes: tuple[ItemBox, ...] = ()
        self._content_height = 0.0
        self.set_items(items)

    @property
    def scroll_top(self) -> float:
        return self._scroll_top

    @property
    def scroll_height(self) -> float:
        return max(self._client_height, self._content_height)

    @property
    def client_height(self) -> float:
        return self._client_height

    @property
    def max_scroll_top(self) -> float:
        return self.scroll_height - self._client_height

    @property
    def animating(self) -> bool:
        return self._animation_id is not None

    def set_items(self, items: Sequence[tuple[str, float]]) -> None:
        """Lay out items top to bottom and re-clamp the scroll offset."""
        ids = [item_id for item_id, _ in items]
        heights = np.asarray([height for _, height in items], dtype=np.float64)
        if heights.size and float(heights.min()) < 0.0:
            raise ValueError("item heights must be >= 0")
        gaps = np.arange(heights.size, dtype=np.float64) * self._gap
        offsets = np.concatenate(([0.0], np.cumsum(heights)[:-1])) if heights.size else heights
        tops = self._padding_top + offsets + gaps
        self._boxes = tuple(
            ItemBox(item_id=item_id, top=float(top), height=float(height))
            for item_id, top, height in zip(ids, tops, heights, strict=True)
        )
        total_gaps = self._gap * max(0, heights.size - 1)
        self._content_height = self._padding_top + float(heights.sum()) + total_gaps + self._padding_bottom
        self.scroll_to(self._scroll_top)

    def boxes(self) -> tuple[ItemBox, ...]:
        return self._boxes

    def list_items(self) -> tuple[ListItem, ...]:
        return tuple(ListItem(item_id=box.item_id, element=box) for box in self._boxes)

    def scroll_to(self, offset: float) -> None:
        """Jump to an offset and notify listeners if it changed."""
        clamped = min(max(0.0, float(offset)), self.max_scroll_top)
        if clamped == self._scroll_top:
            return
        self._scroll_top = clamped
        for listener in tuple(self._listeners.values()):
            listener()

    def scroll_into_view(self, element: object, *, centered: bool, smooth: bool) -> None:
        if not isinstance(element, ItemBox):
            raise TypeError(f"not a list element: {element!r}")
        if centered:
            target = element.top + element.height / 2.0 - self._client_height / 2.0
        else:
            target = element.top
        target = min(max(0.0, target), self.max_scroll_top)
        self.cancel_animation()
        duration_ms = self._config.smooth_scroll_ms
        if not smooth or self._scheduler is None or duration_ms <= 0.0:
            self.scroll_to(target)
            return
        _LOG.debug("smooth_scroll item=%s from=%.1f to=%.1f", element.item_id, self._scroll_top, target)
        self._animation_id = self._scheduler.spawn(self._animate(self._scroll_top, target, duration_ms))

    def cancel_animation(self) -> None:
        if self._animation_id is not None and self._scheduler is not None:
            self._scheduler.cancel(self._animation_id)
        self._animation_id = None

    def add_scroll_listener(self, listener: ScrollListener) -> Subscription:
        listener_id = self._next_listener_id
        self._next_listener_id += 1
        self._listeners[listener_id] = listener
        return Subscription(listener_id)

    def remove_scroll_listener(self, subscription: Subscription) -> None:
        self._listeners.pop(subscription.id, None)

    def _animate(self, start: float, target: float, duration_ms: float) -> Routine:
        frame_ms = max(1.0, self._config.frame_interval_ms)
        frames = max(1, math.ceil(duration_ms / frame_ms))
        for index in range(1, frames + 1):
            yield frame_ms / 1000.0
            progress = _ease_in_out(index / frames)
            self.scroll_to(start + (target - start) * progress)
        self.scroll_to(target)
        self._animation_id = None
