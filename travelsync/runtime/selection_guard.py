"""Selection guard state machine protecting the active item.

Transition table (timeouts measured from the scroll start of a selection):

=========  ==========  ==========  ===========================================
trigger    source      target      fired by
=========  ==========  ==========  ===========================================
select     any         SCROLLING   a new selection
settle     SCROLLING   LOCKED      scroll-settle timeout (``settle_ms``)
release    LOCKED      IDLE        lock timeout (``lock_ms``)
reset      any         IDLE        closing a session mid-selection
=========  ==========  ==========  ===========================================

Every selection receives a monotonic token. ``settle`` and ``release`` carry
the token of the selection that scheduled them and are discarded when a newer
selection has started since.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from travelsync.api.state import SyncPhase
from travelsync.api.store import InteractionStore

_LOG = logging.getLogger("travelsync.navigation")


@dataclass(frozen=True, slots=True)
class GuardTransition:
    trigger: str
    source: SyncPhase | None
    target: SyncPhase


GUARD_TRANSITIONS: tuple[GuardTransition, ...] = (
    GuardTransition("select", None, SyncPhase.SCROLLING),
    GuardTransition("settle", SyncPhase.SCROLLING, SyncPhase.LOCKED),
    GuardTransition("release", SyncPhase.LOCKED, SyncPhase.IDLE),
    GuardTransition("reset", None, SyncPhase.IDLE),
)


class SelectionGuard:
    """Drives ``InteractionState.sync_phase`` through the transition table."""

    def __init__(self, store: InteractionStore) -> None:
        self._store = store
        self._token = 0

    @property
    def token(self) -> int:
        return self._token

    @property
    def phase(self) -> SyncPhase:
        return self._store.state.sync_phase

    def is_current(self, token: int) -> bool:
        return token == self._token

    def begin(self) -> int:
        """Start a selection and return its token."""
        self._token += 1
        self._fire("select")
        return self._token

    def settle(self, token: int) -> bool:
        if not self.is_current(token):
            _LOG.debug("guard_stale trigger=settle token=%d current=%d", token, self._token)
            return False
        return self._fire("settle")

    def release(self, token: int) -> bool:
        if not self.is_current(token):
            _LOG.debug("guard_stale trigger=release token=%d current=%d", token, self._token)
            return False
        return self._fire("release")

    def reset(self) -> None:
        """Invalidate outstanding tokens and clear suppression."""
        self._token += 1
        self._fire("reset")

    def _fire(self, trigger: str) -> bool:
        source = self._store.state.sync_phase
        for transition in GUARD_TRANSITIONS:
            if transition.trigger != trigger:
                continue
            if transition.source is not None and transition.source != source:
                continue
            self._store.set_sync_phase(transition.target)
            _LOG.debug("guard_transition trigger=%s source=%s target=%s", trigger, source, transition.target)
            return True
        _LOG.debug("guard_ignored trigger=%s source=%s", trigger, source)
        return False
