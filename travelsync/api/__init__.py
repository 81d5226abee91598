"""Public travelsync API contracts."""

from travelsync.api.catalog import CatalogEntry, CatalogIndex
from travelsync.api.events import Subscription
from travelsync.api.logging import SyncLoggingConfig
from travelsync.api.state import (
    GeoPoint,
    InteractionMode,
    InteractionState,
    StateChange,
    SyncPhase,
    ViewMode,
)
from travelsync.api.store import InteractionStore, StateHandler, create_interaction_store
from travelsync.api.surfaces import (
    GlobeMarker,
    GlobeRenderer,
    ListItem,
    ScrollContainer,
    VisibilityEntry,
    VisibilityOptions,
    VisibilityWatcher,
    WatchHandle,
)

__all__ = [
    "CatalogEntry",
    "CatalogIndex",
    "GeoPoint",
    "GlobeMarker",
    "GlobeRenderer",
    "InteractionMode",
    "InteractionState",
    "InteractionStore",
    "ListItem",
    "ScrollContainer",
    "StateChange",
    "StateHandler",
    "Subscription",
    "SyncLoggingConfig",
    "SyncPhase",
    "ViewMode",
    "VisibilityEntry",
    "VisibilityOptions",
    "VisibilityWatcher",
    "WatchHandle",
    "create_interaction_store",
]
