"""Public interaction-store API contracts."""

from __future__ import annotations

from collections.abc import Callable
from contextlib import AbstractContextManager
from typing import Protocol

from travelsync.api.events import Subscription
from travelsync.api.state import GeoPoint, InteractionMode, InteractionState, StateChange, SyncPhase, ViewMode

StateHandler = Callable[[StateChange], None]


class InteractionStore(Protocol):
    """Single authoritative container for interaction state."""

    @property
    def state(self) -> InteractionState:
        """Return current state snapshot."""

    @property
    def revision(self) -> int:
        """Return number of committed changes."""

    def subscribe(self, handler: StateHandler) -> Subscription:
        """Register a change handler."""

    def unsubscribe(self, subscription: Subscription) -> None:
        """Remove a change handler if present."""

    def batch(self) -> AbstractContextManager[None]:
        """Coalesce mutations into one change notification."""

    def set_mode(self, mode: InteractionMode | str) -> None: ...

    def set_view_mode(self, view_mode: ViewMode | str) -> None: ...

    def set_active_item_id(self, item_id: str | None) -> None: ...

    def set_focus_point(self, point: GeoPoint | None) -> None: ...

    def set_sync_phase(self, phase: SyncPhase) -> None: ...

    def toggle_filter(self, tag: str) -> None: ...

    def clear_filters(self) -> None:
        """Clear tag filters and the country filter."""

    def set_active_country(self, country: str | None) -> None: ...


def create_interaction_store(initial_state: InteractionState | None = None) -> InteractionStore:
    """Create default interaction-store implementation."""
    from travelsync.runtime.store import RuntimeInteractionStore

    return RuntimeInteractionStore(initial_state)
