"""Interaction-store implementation."""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import replace

from travelsync.api.events import Subscription
from travelsync.api.state import GeoPoint, InteractionMode, InteractionState, StateChange, SyncPhase, ViewMode
from travelsync.api.store import StateHandler

_LOG = logging.getLogger("travelsync.store")


class RuntimeInteractionStore:
    """Snapshot-swapping store with ordered synchronous notification.

    Changes made by subscribers while a notification round is running are
    queued and delivered after that round, before the outermost mutation
    returns.
    """

    def __init__(self, initial_state: InteractionState | None = None) -> None:
        self._state = initial_state if initial_state is not None else InteractionState()
        self._revision = 0
        self._next_id = 1
        self._subscribers: dict[int, StateHandler] = {}
        self._batch_depth = 0
        self._batch_origin: InteractionState | None = None
        self._pending: deque[StateChange] = deque()
        self._dispatching = False

    @property
    def state(self) -> InteractionState:
        return self._state

    @property
    def revision(self) -> int:
        return self._revision

    def subscribe(self, handler: StateHandler) -> Subscription:
        sub_id = self._next_id
        self._next_id += 1
        self._subscribers[sub_id] = handler
        return Subscription(sub_id)

    def unsubscribe(self, subscription: Subscription) -> None:
        self._subscribers.pop(subscription.id, None)

    @contextmanager
    def batch(self) -> Iterator[None]:
        if self._batch_depth == 0:
            self._batch_origin = self._state
        self._batch_depth += 1
        try:
            yield
        finally:
            self._batch_depth -= 1
            if self._batch_depth == 0:
                origin = self._batch_origin
                self._batch_origin = None
                if origin is not None and origin != self._state:
                    self._revision += 1
                    self._enqueue(StateChange(previous=origin, current=self._state, revision=self._revision))

    def set_mode(self, mode: InteractionMode | str) -> None:
        self._commit(mode=InteractionMode(mode))

    def set_view_mode(self, view_mode: ViewMode | str) -> None:
        self._commit(view_mode=ViewMode(view_mode))

    def set_active_item_id(self, item_id: str | None) -> None:
        self._commit(active_item_id=item_id)

    def set_focus_point(self, point: GeoPoint | None) -> None:
        self._commit(focus_point=point)

    def set_sync_phase(self, phase: SyncPhase) -> None:
        self._commit(sync_phase=SyncPhase(phase))

    def toggle_filter(self, tag: str) -> None:
        normalized = tag.strip()
        if not normalized:
            raise ValueError("filter tag must not be empty")
        filters = self._state.active_filters
        if normalized in filters:
            self._commit(active_filters=filters - {normalized})
        else:
            self._commit(active_filters=filters | {normalized})

    def clear_filters(self) -> None:
        self._commit(active_filters=frozenset(), active_country=None)

    def set_active_country(self, country: str | None) -> None:
        self._commit(active_country=country)

    def _commit(self, **changes: object) -> bool:
        current = self._state
        updated = replace(current, **changes)
        if updated == current:
            return False
        self._state = updated
        if self._batch_depth > 0:
            return True
        self._revision += 1
        self._enqueue(StateChange(previous=current, current=updated, revision=self._revision))
        return True

    def _enqueue(self, change: StateChange) -> None:
        if _LOG.isEnabledFor(logging.DEBUG):
            _LOG.debug("state_change revision=%d fields=%s", change.revision, ",".join(change.changed_fields()))
        self._pending.append(change)
        if self._dispatching:
            return
        self._dispatching = True
        try:
            while self._pending:
                pending = self._pending.popleft()
                for handler in tuple(self._subscribers.values()):
                    handler(pending)
        except Exception:
            self._pending.clear()
            raise
        finally:
            self._dispatching = False


InteractionStore = RuntimeInteractionStore
