import logging

import pytest

from hugoland.core.scheduler import Scheduler
from tests.helpers.builders import make_clock


def test_call_later_runs_once_when_due() -> None:
    clock = make_clock()
    scheduler = Scheduler(clock)
    calls: list[str] = []
    scheduler.call_later(5, lambda: calls.append("fired"), name="once")

    clock.advance(4)
    assert scheduler.run_pending() == 0
    clock.advance(1)
    assert scheduler.run_pending() == 1
    clock.advance(100)
    assert scheduler.run_pending() == 0

    assert calls == ["fired"]
    assert scheduler.pending() == []


def test_call_every_catches_up_on_missed_intervals() -> None:
    clock = make_clock()
    scheduler = Scheduler(clock)
    calls: list[int] = []
    task = scheduler.call_every(1, lambda: calls.append(1), name="countdown")

    clock.advance(3.5)
    executed = scheduler.run_pending()

    assert executed == 3
    assert task.run_count == 3
    assert len(calls) == 3


def test_cancelled_task_does_not_run() -> None:
    clock = make_clock()
    scheduler = Scheduler(clock)
    calls: list[int] = []
    task = scheduler.call_every(1, lambda: calls.append(1))

    scheduler.cancel(task)
    clock.advance(5)
    scheduler.run_pending()

    assert calls == []
    assert task.cancelled


def test_task_can_cancel_itself_mid_catch_up() -> None:
    clock = make_clock()
    scheduler = Scheduler(clock)
    remaining = [3]
    handle = {}

    def countdown() -> None:
        remaining[0] -= 1
        if remaining[0] == 0:
            scheduler.cancel(handle["task"])

    handle["task"] = scheduler.call_every(1, countdown)
    clock.advance(10)
    executed = scheduler.run_pending()

    assert executed == 3
    assert remaining == [0]


def test_failing_callback_is_logged_and_others_still_run(caplog) -> None:
    clock = make_clock()
    scheduler = Scheduler(clock)
    calls: list[str] = []

    def broken() -> None:
        raise RuntimeError("boom")

    scheduler.call_later(1, broken, name="broken")
    scheduler.call_later(1, lambda: calls.append("ok"), name="ok")
    clock.advance(1)

    with caplog.at_level(logging.ERROR, logger="hugoland.core.scheduler"):
        executed = scheduler.run_pending()

    assert executed == 2
    assert calls == ["ok"]
    assert "broken" in caplog.text


def test_cancel_all_clears_everything() -> None:
    clock = make_clock()
    scheduler = Scheduler(clock)
    first = scheduler.call_every(1, lambda: None)
    second = scheduler.call_later(2, lambda: None)

    scheduler.cancel_all()

    assert scheduler.pending() == []
    assert first.cancelled and second.cancelled


def test_call_every_rejects_non_positive_interval() -> None:
    scheduler = Scheduler(make_clock())

    with pytest.raises(ValueError):
        scheduler.call_every(0, lambda: None)
