"""Contracts for the rendering surfaces the engine drives."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from travelsync.api.events import Subscription
from travelsync.api.state import GeoPoint

ScrollListener = Callable[[], None]


@dataclass(frozen=True, slots=True)
class ListItem:
    """List child tagged with a catalog entry id."""

    item_id: str
    element: object


@dataclass(frozen=True, slots=True)
class VisibilityEntry:
    """One ratio-change record reported by a visibility watcher."""

    item_id: str
    ratio: float


@dataclass(frozen=True, slots=True)
class VisibilityOptions:
    """Focus-band geometry and ratio thresholds for visibility watching.

    Margins are fractions of the container height removed from the top and
    bottom of the effective viewport.
    """

    margin_top: float = 0.2
    margin_bottom: float = 0.2
    thresholds: tuple[float, ...] = (0.0, 0.1, 0.2, 0.3, 0.4, 0.5, 0.6, 0.7, 0.8, 0.9, 1.0)


VisibilityCallback = Callable[[Sequence[VisibilityEntry]], None]


@runtime_checkable
class ScrollContainer(Protocol):
    """Scrollable list view contract."""

    @property
    def scroll_top(self) -> float: ...

    @property
    def scroll_height(self) -> float: ...

    @property
    def client_height(self) -> float: ...

    def list_items(self) -> Sequence[ListItem]:
        """Return tagged children in document order."""

    def scroll_into_view(self, element: object, *, centered: bool, smooth: bool) -> None:
        """Scroll an element into view."""

    def add_scroll_listener(self, listener: ScrollListener) -> Subscription:
        """Register a listener invoked after every scroll offset change."""

    def remove_scroll_listener(self, subscription: Subscription) -> None:
        """Remove a scroll listener if present."""


class WatchHandle(Protocol):
    """Active visibility watch."""

    def disconnect(self) -> None:
        """Stop watching and drop undelivered batches."""


class VisibilityWatcher(Protocol):
    """Capability that reports visibility ratio changes in batches."""

    def observe(
        self,
        items: Sequence[ListItem],
        options: VisibilityOptions,
        callback: VisibilityCallback,
    ) -> WatchHandle:
        """Start watching items."""


@dataclass(frozen=True, slots=True)
class GlobeMarker:
    """Marker record handed to the globe renderer."""

    id: str
    lat: float
    lng: float
    size: float
    color: str
    label: str


@runtime_checkable
class GlobeRenderer(Protocol):
    """Opaque 3D globe renderer."""

    def set_point_of_view(self, point: GeoPoint, *, altitude: float, duration_ms: float) -> None:
        """Animate the camera towards a coordinate."""

    def set_auto_rotate(self, enabled: bool, *, speed: float) -> None:
        """Toggle idle camera auto-rotation at ``speed``."""
