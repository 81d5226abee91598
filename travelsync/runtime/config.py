"""Centralized configuration for sync sessions."""

from __future__ import annotations

import os
from collections.abc import Mapping
from contextvars import ContextVar
from dataclasses import dataclass, field

from travelsync.api.surfaces import VisibilityOptions

_DEFAULT_THRESHOLDS: tuple[float, ...] = (0.0, 0.1, 0.2, 0.3, 0.4, 0.5, 0.6, 0.7, 0.8, 0.9, 1.0)


@dataclass(frozen=True, slots=True)
class ScrollSpyConfig:
    top_threshold_px: float = 50.0
    bottom_threshold_px: float = 5.0
    focus_band_margin: float = 0.2
    thresholds: tuple[float, ...] = _DEFAULT_THRESHOLDS

    def visibility_options(self) -> VisibilityOptions:
        return VisibilityOptions(
            margin_top=self.focus_band_margin,
            margin_bottom=self.focus_band_margin,
            thresholds=self.thresholds,
        )


@dataclass(frozen=True, slots=True)
class NavigationTimings:
    """Selection timeline durations.

    ``settle_ms`` and ``lock_ms`` are both measured from the scroll start.
    """

    scroll_delay_ms: float = 100.0
    settle_ms: float = 1000.0
    lock_ms: float = 2000.0

    def __post_init__(self) -> None:
        if self.scroll_delay_ms < 0.0 or self.settle_ms < 0.0:
            raise ValueError("navigation timings must be >= 0")
        if self.lock_ms < self.settle_ms:
            raise ValueError("lock_ms must be >= settle_ms")


@dataclass(frozen=True, slots=True)
class GlobeConfig:
    default_altitude: float = 1.5
    focus_altitude: float = 0.8
    animation_duration_ms: float = 1000.0
    auto_rotate_speed: float = 0.3
    marker_size: float = 1.2
    active_marker_size: float = 1.6
    marker_color: str = "#f59e0b"
    active_marker_color: str = "#fbbf24"
    filtered_marker_color: str = "#666666"


@dataclass(frozen=True, slots=True)
class ListViewConfig:
    smooth_scroll_ms: float = 400.0
    frame_interval_ms: float = 1000.0 / 60.0


@dataclass(frozen=True, slots=True)
class SyncConfig:
    scroll_spy: ScrollSpyConfig = field(default_factory=ScrollSpyConfig)
    navigation: NavigationTimings = field(default_factory=NavigationTimings)
    globe: GlobeConfig = field(default_factory=GlobeConfig)
    list_view: ListViewConfig = field(default_factory=ListViewConfig)


_SYNC_CONFIG: ContextVar[SyncConfig | None] = ContextVar("travelsync_config", default=None)


def _raw(name: str, *, env: Mapping[str, str] | None = None) -> str | None:
    value = os.getenv(name) if env is None else env.get(name)
    return None if value is None else str(value)


def _float(
    name: str,
    default: float,
    *,
    minimum: float | None = None,
    maximum: float | None = None,
    env: Mapping[str, str] | None = None,
) -> float:
    raw = _raw(name, env=env)
    if raw is None:
        value = float(default)
    else:
        try:
            value = float(raw.strip())
        except ValueError:
            value = float(default)
    if minimum is not None:
        value = max(float(minimum), value)
    if maximum is not None:
        value = min(float(maximum), value)
    return value


def _text(name: str, default: str, *, env: Mapping[str, str] | None = None) -> str:
    raw = _raw(name, env=env)
    if raw is None:
        return str(default)
    value = raw.strip()
    return value if value else str(default)


def _csv(name: str, *, env: Mapping[str, str] | None = None) -> tuple[str, ...]:
    raw = _text(name, "", env=env)
    if not raw:
        return ()
    return tuple(item.strip() for item in raw.split(",") if item.strip())


def _thresholds(env: Mapping[str, str] | None) -> tuple[float, ...]:
    values: set[float] = set()
    for item in _csv("TRAVELSYNC_VISIBILITY_THRESHOLDS", env=env):
        try:
            value = float(item)
        except ValueError:
            continue
        if 0.0 <= value <= 1.0:
            values.add(value)
    if not values:
        return _DEFAULT_THRESHOLDS
    return tuple(sorted(values))


def load_sync_config(*, env: Mapping[str, str] | None = None) -> SyncConfig:
    scope_env = env
    settle_ms = _float("TRAVELSYNC_NAV_SETTLE_MS", 1000.0, minimum=0.0, env=scope_env)
    return SyncConfig(
        scroll_spy=ScrollSpyConfig(
            top_threshold_px=_float(
                "TRAVELSYNC_SCROLL_TOP_THRESHOLD_PX", 50.0, minimum=0.0, env=scope_env
            ),
            bottom_threshold_px=_float(
                "TRAVELSYNC_SCROLL_BOTTOM_THRESHOLD_PX", 5.0, minimum=0.0, env=scope_env
            ),
            focus_band_margin=_float(
                "TRAVELSYNC_FOCUS_BAND_MARGIN", 0.2, minimum=0.0, maximum=0.49, env=scope_env
            ),
            thresholds=_thresholds(scope_env),
        ),
        navigation=NavigationTimings(
            scroll_delay_ms=_float("TRAVELSYNC_NAV_SCROLL_DELAY_MS", 100.0, minimum=0.0, env=scope_env),
            settle_ms=settle_ms,
            lock_ms=_float("TRAVELSYNC_NAV_LOCK_MS", 2000.0, minimum=settle_ms, env=scope_env),
        ),
        globe=GlobeConfig(
            default_altitude=_float(
                "TRAVELSYNC_GLOBE_DEFAULT_ALTITUDE", 1.5, minimum=0.0, env=scope_env
            ),
            focus_altitude=_float("TRAVELSYNC_GLOBE_FOCUS_ALTITUDE", 0.8, minimum=0.0, env=scope_env),
            animation_duration_ms=_float(
                "TRAVELSYNC_GLOBE_ANIMATION_MS", 1000.0, minimum=0.0, env=scope_env
            ),
            auto_rotate_speed=_float("TRAVELSYNC_GLOBE_AUTO_ROTATE_SPEED", 0.3, env=scope_env),
        ),
        list_view=ListViewConfig(
            smooth_scroll_ms=_float(
                "TRAVELSYNC_LIST_SMOOTH_SCROLL_MS", 400.0, minimum=0.0, env=scope_env
            ),
        ),
    )


def initialize_sync_config(*, env: Mapping[str, str] | None = None) -> SyncConfig:
    config = load_sync_config(env=env)
    _SYNC_CONFIG.set(config)
    return config


def set_sync_config(config: SyncConfig) -> SyncConfig:
    _SYNC_CONFIG.set(config)
    return config


def get_sync_config() -> SyncConfig:
    config = _SYNC_CONFIG.get()
    if config is not None:
        return config
    return initialize_sync_config()


__all__ = [
    "GlobeConfig",
    "ListViewConfig",
    "NavigationTimings",
    "ScrollSpyConfig",
    "SyncConfig",
    "get_sync_config",
    "initialize_sync_config",
    "load_sync_config",
    "set_sync_config",
]
