from __future__ import annotations

import pytest

from travelsync.api.state import GeoPoint, InteractionMode, InteractionState, StateChange, SyncPhase, ViewMode
from travelsync.api.store import create_interaction_store
from travelsync.runtime.store import RuntimeInteractionStore


def test_store_defaults_match_session_start() -> None:
    store = create_interaction_store()
    state = store.state
    assert state.mode is InteractionMode.NARRATIVE
    assert state.view_mode is ViewMode.TIMELINE
    assert state.active_item_id is None
    assert state.focus_point is None
    assert state.sync_phase is SyncPhase.IDLE
    assert state.active_filters == frozenset()
    assert state.active_country is None
    assert store.revision == 0


def test_store_mutation_is_visible_to_subscribers_before_return() -> None:
    store = RuntimeInteractionStore()
    seen: list[tuple[str | None, str | None]] = []
    store.subscribe(lambda change: seen.append((change.current.active_item_id, store.state.active_item_id)))

    store.set_active_item_id("paris")

    assert seen == [("paris", "paris")]
    assert store.revision == 1


def test_store_equal_write_is_a_noop() -> None:
    store = RuntimeInteractionStore()
    changes: list[StateChange] = []
    store.subscribe(changes.append)

    store.set_active_item_id("paris")
    store.set_active_item_id("paris")
    store.set_focus_point(GeoPoint(1.0, 2.0))
    store.set_focus_point(GeoPoint(1.0, 2.0))

    assert len(changes) == 2
    assert store.revision == 2


def test_store_batch_coalesces_into_single_change() -> None:
    store = RuntimeInteractionStore(InteractionState(mode=InteractionMode.EXPLORE))
    changes: list[StateChange] = []
    store.subscribe(changes.append)

    with store.batch():
        store.set_mode("narrative")
        store.set_active_item_id("kyoto")
        with store.batch():
            store.set_focus_point(GeoPoint(35.0, 135.0))
        assert changes == []

    assert len(changes) == 1
    assert set(changes[0].changed_fields()) == {"mode", "active_item_id", "focus_point"}
    assert changes[0].previous.mode is InteractionMode.EXPLORE


def test_store_batch_without_net_change_emits_nothing() -> None:
    store = RuntimeInteractionStore()
    changes: list[StateChange] = []
    store.subscribe(changes.append)

    with store.batch():
        store.set_active_item_id("paris")
        store.set_active_item_id(None)

    assert changes == []


def test_store_nested_mutations_are_delivered_in_order() -> None:
    store = RuntimeInteractionStore()
    log: list[str] = []

    def first(change: StateChange) -> None:
        log.append(f"first:{change.current.active_item_id}:{change.current.focus_point is not None}")
        if change.changed("active_item_id"):
            store.set_focus_point(GeoPoint(0.0, 0.0))

    def second(change: StateChange) -> None:
        log.append(f"second:{change.current.active_item_id}:{change.current.focus_point is not None}")

    store.subscribe(first)
    store.subscribe(second)
    store.set_active_item_id("lima")

    assert log == [
        "first:lima:False",
        "second:lima:False",
        "first:lima:True",
        "second:lima:True",
    ]


def test_store_unsubscribe_stops_dispatch() -> None:
    store = RuntimeInteractionStore()
    changes: list[StateChange] = []
    subscription = store.subscribe(changes.append)
    store.unsubscribe(subscription)

    store.set_mode(InteractionMode.EXPLORE)

    assert changes == []


def test_store_toggle_and_clear_filters() -> None:
    store = RuntimeInteractionStore()
    store.toggle_filter("Asia")
    store.toggle_filter(" Beach ")
    store.set_active_country("Japan")
    assert store.state.active_filters == frozenset({"Asia", "Beach"})

    store.toggle_filter("Asia")
    assert store.state.active_filters == frozenset({"Beach"})

    store.clear_filters()
    assert store.state.active_filters == frozenset()
    assert store.state.active_country is None


def test_store_validates_inputs() -> None:
    store = RuntimeInteractionStore()
    with pytest.raises(ValueError):
        store.set_mode("sideways")
    with pytest.raises(ValueError):
        store.set_view_mode("map")
    with pytest.raises(ValueError):
        store.toggle_filter("   ")
    assert store.revision == 0


def test_store_view_mode_switch() -> None:
    store = RuntimeInteractionStore()
    store.set_view_mode("globe")
    assert store.state.view_mode is ViewMode.GLOBE


def test_store_drops_queued_changes_when_subscriber_raises() -> None:
    store = RuntimeInteractionStore()
    seen: list[str | None] = []

    def failing(change: StateChange) -> None:
        if change.current.active_item_id == "boom":
            store.set_focus_point(GeoPoint(1.0, 1.0))
            raise RuntimeError("subscriber failed")

    store.subscribe(failing)
    store.subscribe(lambda change: seen.append(change.current.active_item_id))

    with pytest.raises(RuntimeError):
        store.set_active_item_id("boom")
    store.set_active_item_id("ok")

    assert seen == ["ok"]
    assert store.state.focus_point == GeoPoint(1.0, 1.0)
