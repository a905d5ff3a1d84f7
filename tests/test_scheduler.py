import pytest

from sumstrike.utils.scheduler import EventScheduler


def test_one_shot_fires_once_after_delay():
    scheduler = EventScheduler()
    calls = []
    scheduler.schedule("row", 0.3, lambda: calls.append("row"))

    assert scheduler.advance(0.2) == 0
    assert scheduler.is_pending("row")
    assert scheduler.remaining("row") == pytest.approx(0.1)
    assert scheduler.advance(0.1) == 1
    assert calls == ["row"]
    assert not scheduler.is_pending("row")
    assert scheduler.advance(5.0) == 0


def test_repeating_fires_every_interval_including_catch_up():
    scheduler = EventScheduler()
    calls = []
    scheduler.schedule_repeating("countdown", 1.0, lambda: calls.append(scheduler.now))

    scheduler.advance(1.0)
    scheduler.advance(2.5)
    assert len(calls) == 3
    assert scheduler.remaining("countdown") == pytest.approx(0.5)


def test_frame_sized_deltas_reach_round_due_times():
    scheduler = EventScheduler()
    calls = []
    scheduler.schedule_repeating("countdown", 1.0, lambda: calls.append(1))
    for _ in range(10):
        scheduler.advance(0.1)
    assert calls == [1]


def test_rescheduling_same_name_replaces_pending_entry():
    scheduler = EventScheduler()
    calls = []
    scheduler.schedule("row", 0.3, lambda: calls.append("first"))
    scheduler.advance(0.2)
    scheduler.schedule("row", 0.3, lambda: calls.append("second"))

    scheduler.advance(0.2)
    assert calls == []
    scheduler.advance(0.1)
    assert calls == ["second"]


def test_cancel_and_cancel_all():
    scheduler = EventScheduler()
    calls = []
    scheduler.schedule("row", 0.3, lambda: calls.append("row"))
    scheduler.schedule_repeating("countdown", 1.0, lambda: calls.append("tick"))

    assert scheduler.cancel("row")
    assert not scheduler.cancel("row")
    assert scheduler.pending_names() == ["countdown"]
    scheduler.cancel_all()
    assert scheduler.pending_names() == []
    scheduler.advance(10.0)
    assert calls == []


def test_callback_cancelling_everything_stops_the_batch():
    scheduler = EventScheduler()
    calls = []

    def stop_all():
        calls.append("stop")
        scheduler.cancel_all()

    scheduler.schedule("row", 0.5, stop_all)
    scheduler.schedule_repeating("countdown", 1.0, lambda: calls.append("tick"))
    scheduler.advance(3.0)
    assert calls == ["stop"]


def test_due_order_is_by_time_then_scheduling_order():
    scheduler = EventScheduler()
    calls = []
    scheduler.schedule("b", 0.5, lambda: calls.append("b"))
    scheduler.schedule("a", 0.2, lambda: calls.append("a"))
    scheduler.schedule("c", 0.5, lambda: calls.append("c"))
    scheduler.advance(1.0)
    assert calls == ["a", "b", "c"]


def test_non_positive_inputs():
    scheduler = EventScheduler()
    with pytest.raises(ValueError):
        scheduler.schedule_repeating("countdown", 0.0, lambda: None)
    assert scheduler.advance(0.0) == 0
    assert scheduler.advance(-1.0) == 0
    assert scheduler.now == 0.0
    assert scheduler.remaining("missing") is None
