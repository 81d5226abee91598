"""travelsync runtime implementations."""

from travelsync.runtime.config import (
    GlobeConfig,
    ListViewConfig,
    NavigationTimings,
    ScrollSpyConfig,
    SyncConfig,
    get_sync_config,
    load_sync_config,
)
from travelsync.runtime.globe_focus import GlobeFocusAdapter, project_markers
from travelsync.runtime.list_view import HeadlessScrollContainer, ItemBox
from travelsync.runtime.logging import configure_sync_logging, setup_sync_logging
from travelsync.runtime.navigation import NavigationCoordinator, SelectionSource
from travelsync.runtime.scheduler import Scheduler
from travelsync.runtime.scroll_spy import ScrollEdge, ScrollSpy, detect_edge, most_visible
from travelsync.runtime.selection_guard import GUARD_TRANSITIONS, SelectionGuard
from travelsync.runtime.session import SyncSession
from travelsync.runtime.store import InteractionStore
from travelsync.runtime.visibility import GeometricVisibilityWatcher, intersection_ratios

__all__ = [
    "GUARD_TRANSITIONS",
    "GeometricVisibilityWatcher",
    "GlobeConfig",
    "GlobeFocusAdapter",
    "HeadlessScrollContainer",
    "InteractionStore",
    "ItemBox",
    "ListViewConfig",
    "NavigationCoordinator",
    "NavigationTimings",
    "Scheduler",
    "ScrollEdge",
    "ScrollSpy",
    "ScrollSpyConfig",
    "SelectionGuard",
    "SelectionSource",
    "SyncConfig",
    "SyncSession",
    "configure_sync_logging",
    "detect_edge",
    "get_sync_config",
    "intersection_ratios",
    "load_sync_config",
    "most_visible",
    "project_markers",
    "setup_sync_logging",
]
