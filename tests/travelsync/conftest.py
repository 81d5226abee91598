from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

import pytest

from travelsync.api.catalog import CatalogEntry, CatalogIndex
from travelsync.api.events import Subscription
from travelsync.api.state import GeoPoint
from travelsync.api.surfaces import ListItem, VisibilityCallback, VisibilityEntry, VisibilityOptions
from travelsync.runtime.scheduler import Scheduler
from travelsync.runtime.store import RuntimeInteractionStore

PARIS = CatalogEntry(id="paris", coordinate=GeoPoint(48.8566, 2.3522), title="Paris", country="France", tags=("Culture",))
KYOTO = CatalogEntry(id="kyoto", coordinate=GeoPoint(35.0116, 135.7681), title="Kyoto", country="Japan", tags=("Asia", "Culture"))
LIMA = CatalogEntry(id="lima", coordinate=GeoPoint(-12.0464, -77.0428), title="Lima", country="Peru", tags=("Adventure",))


class FakeRenderer:
    def __init__(self) -> None:
        self.calls: list[tuple[str, tuple]] = []
        self.fail_with: Exception | None = None

    def set_point_of_view(self, point: GeoPoint, *, altitude: float, duration_ms: float) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        self.calls.append(("set_point_of_view", (point, altitude, duration_ms)))

    def set_auto_rotate(self, enabled: bool, *, speed: float) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        self.calls.append(("set_auto_rotate", (enabled, speed)))

    def auto_rotate_values(self) -> list[bool]:
        return [args[0] for name, args in self.calls if name == "set_auto_rotate"]

    def points_of_view(self) -> list[GeoPoint]:
        return [args[0] for name, args in self.calls if name == "set_point_of_view"]


@dataclass(slots=True)
class FakeScrollContainer:
    """Directly settable geometry; scroll events are fired by hand."""

    item_ids: list[str] = field(default_factory=list)
    scroll_top: float = 0.0
    scroll_height: float = 1000.0
    client_height: float = 500.0
    scrolled_into_view: list[tuple[object, bool, bool]] = field(default_factory=list)
    _listeners: dict[int, object] = field(default_factory=dict)
    _next_id: int = 1

    def list_items(self) -> list[ListItem]:
        return [ListItem(item_id=item_id, element=f"card:{item_id}") for item_id in self.item_ids]

    def scroll_into_view(self, element: object, *, centered: bool, smooth: bool) -> None:
        self.scrolled_into_view.append((element, centered, smooth))

    def add_scroll_listener(self, listener) -> Subscription:
        listener_id = self._next_id
        self._next_id += 1
        self._listeners[listener_id] = listener
        return Subscription(listener_id)

    def remove_scroll_listener(self, subscription: Subscription) -> None:
        self._listeners.pop(subscription.id, None)

    def fire_scroll(self, scroll_top: float | None = None) -> None:
        if scroll_top is not None:
            self.scroll_top = scroll_top
        for listener in tuple(self._listeners.values()):
            listener()

    @property
    def listener_count(self) -> int:
        return len(self._listeners)


class _RecordingHandle:
    def __init__(self, watcher: RecordingWatcher) -> None:
        self._watcher = watcher

    def disconnect(self) -> None:
        self._watcher.disconnected += 1
        self._watcher.callback = None


class RecordingWatcher:
    """Visibility watcher whose batches are pushed by the test."""

    def __init__(self) -> None:
        self.callback: VisibilityCallback | None = None
        self.observed: list[str] = []
        self.options: VisibilityOptions | None = None
        self.disconnected = 0

    def observe(
        self,
        items: Sequence[ListItem],
        options: VisibilityOptions,
        callback: VisibilityCallback,
    ) -> _RecordingHandle:
        self.observed = [item.item_id for item in items]
        self.options = options
        self.callback = callback
        return _RecordingHandle(self)

    def emit(self, *ratios: tuple[str, float]) -> None:
        assert self.callback is not None
        self.callback([VisibilityEntry(item_id=item_id, ratio=ratio) for item_id, ratio in ratios])


class ActiveItemRecorder:
    """Store subscriber recording every active item write that changed state."""

    def __init__(self, store: RuntimeInteractionStore) -> None:
        self.values: list[str | None] = []
        store.subscribe(self._on_change)

    def _on_change(self, change) -> None:
        if change.changed("active_item_id"):
            self.values.append(change.current.active_item_id)


@pytest.fixture
def catalog() -> CatalogIndex:
    return CatalogIndex([PARIS, KYOTO, LIMA])


@pytest.fixture
def scheduler() -> Scheduler:
    return Scheduler()


@pytest.fixture
def store() -> RuntimeInteractionStore:
    return RuntimeInteractionStore()


@pytest.fixture
def renderer() -> FakeRenderer:
    return FakeRenderer()


@pytest.fixture
def watcher() -> RecordingWatcher:
    return RecordingWatcher()
