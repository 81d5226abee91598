from __future__ import annotations

import pytest

from travelsync.runtime.config import ListViewConfig
from travelsync.runtime.list_view import HeadlessScrollContainer, ItemBox
from travelsync.runtime.scheduler import Scheduler


def _container(**kwargs) -> HeadlessScrollContainer:
    return HeadlessScrollContainer(
        [("a", 100.0), ("b", 200.0), ("c", 100.0)],
        client_height=250.0,
        gap=10.0,
        padding_top=20.0,
        padding_bottom=20.0,
        **kwargs,
    )


def test_layout_stacks_items_with_gaps_and_padding() -> None:
    container = _container()

    assert container.boxes() == (
        ItemBox("a", 20.0, 100.0),
        ItemBox("b", 130.0, 200.0),
        ItemBox("c", 340.0, 100.0),
    )
    assert container.scroll_height == 460.0
    assert container.max_scroll_top == 210.0
    assert [item.item_id for item in container.list_items()] == ["a", "b", "c"]


def test_short_content_cannot_scroll() -> None:
    container = HeadlessScrollContainer([("a", 50.0)], client_height=300.0)

    container.scroll_to(100.0)

    assert container.scroll_height == 300.0
    assert container.scroll_top == 0.0


def test_scroll_to_clamps_and_notifies_only_on_change() -> None:
    container = _container()
    events: list[float] = []
    container.add_scroll_listener(lambda: events.append(container.scroll_top))

    container.scroll_to(-5.0)
    container.scroll_to(1000.0)
    container.scroll_to(1000.0)

    assert events == [210.0]


def test_scroll_into_view_centres_without_animation() -> None:
    container = _container()
    box = container.boxes()[1]

    container.scroll_into_view(box, centered=True, smooth=True)

    assert container.scroll_top == 105.0
    assert not container.animating


def test_smooth_scroll_animates_on_scheduler_frames() -> None:
    scheduler = Scheduler()
    container = _container(scheduler=scheduler, config=ListViewConfig(smooth_scroll_ms=500.0, frame_interval_ms=125.0))
    events: list[float] = []
    container.add_scroll_listener(lambda: events.append(container.scroll_top))

    container.scroll_into_view(container.boxes()[2], centered=True, smooth=True)
    assert container.animating
    assert container.scroll_top == 0.0

    scheduler.advance(0.25)
    assert container.scroll_top == pytest.approx(105.0)

    scheduler.advance(0.25)
    assert container.scroll_top == 210.0
    assert not container.animating
    assert len(events) == 4
    assert events == sorted(events)


def test_new_scroll_cancels_running_animation() -> None:
    scheduler = Scheduler()
    container = _container(scheduler=scheduler, config=ListViewConfig(smooth_scroll_ms=500.0, frame_interval_ms=125.0))

    container.scroll_into_view(container.boxes()[2], centered=False, smooth=True)
    scheduler.advance(0.125)
    container.scroll_into_view(container.boxes()[0], centered=False, smooth=False)
    scheduler.advance(1.0)

    assert container.scroll_top == 20.0
    assert scheduler.running_routine_count == 0


def test_cancel_animation_freezes_offset() -> None:
    scheduler = Scheduler()
    container = _container(scheduler=scheduler, config=ListViewConfig(smooth_scroll_ms=500.0, frame_interval_ms=125.0))

    container.scroll_into_view(container.boxes()[2], centered=True, smooth=True)
    scheduler.advance(0.125)
    frozen = container.scroll_top
    container.cancel_animation()
    scheduler.advance(1.0)

    assert container.scroll_top == frozen
    assert not container.animating


def test_scroll_into_view_rejects_foreign_elements() -> None:
    container = _container()
    with pytest.raises(TypeError):
        container.scroll_into_view("card:a", centered=True, smooth=False)


def test_set_items_reclamps_scroll_offset() -> None:
    container = _container()
    container.scroll_to(210.0)

    container.set_items([("a", 100.0)])

    assert container.scroll_top == 0.0


@pytest.mark.parametrize(
    ("items", "client_height"),
    [
        ([("a", -1.0)], 100.0),
        ([("a", 10.0)], 0.0),
    ],
)
def test_invalid_geometry_is_rejected(items, client_height) -> None:
    with pytest.raises(ValueError):
        HeadlessScrollContainer(items, client_height=client_height)


def test_listener_removal() -> None:
    container = _container()
    events: list[float] = []
    subscription = container.add_scroll_listener(lambda: events.append(container.scroll_top))
    container.remove_scroll_listener(subscription)

    container.scroll_to(50.0)

    assert events == []
