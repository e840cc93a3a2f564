import logging

from timesheet_tracker.core.enums import RefreshReason
from timesheet_tracker.sync.trigger import RecomputeTrigger


def test_listeners_receive_the_reason():
    trigger = RecomputeTrigger()
    seen = []
    trigger.subscribe(seen.append)

    trigger.invalidate(RefreshReason.CLOCK_ACTION)
    trigger.invalidate("tick")

    assert seen == [RefreshReason.CLOCK_ACTION, RefreshReason.TICK]


def test_default_reason_is_poll():
    trigger = RecomputeTrigger()
    seen = []
    trigger.subscribe(seen.append)

    trigger.invalidate()

    assert seen == [RefreshReason.POLL]


def test_unsubscribe_stops_notifications():
    trigger = RecomputeTrigger()
    seen = []
    unsubscribe = trigger.subscribe(seen.append)

    unsubscribe()
    unsubscribe()

    assert trigger.invalidate(RefreshReason.BROADCAST) == 0
    assert seen == []


def test_failing_listener_does_not_stop_the_others(caplog):
    trigger = RecomputeTrigger()
    seen = []

    def broken(reason):
        raise RuntimeError("boom")

    trigger.subscribe(broken)
    trigger.subscribe(seen.append)

    with caplog.at_level(logging.ERROR, logger="timesheet_tracker.sync.trigger"):
        handled = trigger.invalidate(RefreshReason.POLL)

    assert handled == 1
    assert seen == [RefreshReason.POLL]
    assert "Recompute listener failed" in caplog.text


def test_intervals_are_advertised():
    trigger = RecomputeTrigger(poll_interval_seconds=15, tick_interval_seconds=60)

    assert (trigger.poll_interval_seconds, trigger.tick_interval_seconds) == (15, 60)
