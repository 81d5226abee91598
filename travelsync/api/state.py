"""Public interaction-state shapes."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import StrEnum


class InteractionMode(StrEnum):
    """Which view has primary visual emphasis."""

    NARRATIVE = "narrative"
    EXPLORE = "explore"


class ViewMode(StrEnum):
    """Top-level page layout selected by the view toggle."""

    TIMELINE = "timeline"
    GLOBE = "globe"


class SyncPhase(StrEnum):
    """Selection guard phase.

    ``SCROLLING`` suppresses the scroll-spy and holds the selection lock,
    ``LOCKED`` only holds the lock, ``IDLE`` suppresses nothing.
    """

    IDLE = "idle"
    SCROLLING = "scrolling"
    LOCKED = "locked"


@dataclass(frozen=True, slots=True)
class GeoPoint:
    """Latitude/longitude pair in degrees."""

    lat: float
    lng: float


@dataclass(frozen=True, slots=True)
class InteractionState:
    """Immutable snapshot of the shared interaction state."""

    mode: InteractionMode = InteractionMode.NARRATIVE
    view_mode: ViewMode = ViewMode.TIMELINE
    active_item_id: str | None = None
    focus_point: GeoPoint | None = None
    sync_phase: SyncPhase = SyncPhase.IDLE
    active_filters: frozenset[str] = field(default_factory=frozenset)
    active_country: str | None = None

    @property
    def is_scrolling_programmatically(self) -> bool:
        return self.sync_phase is SyncPhase.SCROLLING

    @property
    def is_active_item_locked(self) -> bool:
        return self.sync_phase in (SyncPhase.SCROLLING, SyncPhase.LOCKED)

    @property
    def is_suppressed(self) -> bool:
        """Return whether the scroll-spy must not write the active item."""
        return self.is_scrolling_programmatically or self.is_active_item_locked


@dataclass(frozen=True, slots=True)
class StateChange:
    """One committed store transition delivered to subscribers."""

    previous: InteractionState
    current: InteractionState
    revision: int

    def changed(self, name: str) -> bool:
        """Return whether one state field differs between snapshots."""
        return getattr(self.previous, name) != getattr(self.current, name)

    def changed_fields(self) -> tuple[str, ...]:
        return tuple(item.name for item in fields(InteractionState) if self.changed(item.name))
