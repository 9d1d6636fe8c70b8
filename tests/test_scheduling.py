from __future__ import annotations

from datetime import timedelta

from indastreet.scheduling import ManualScheduler


def test_call_later_runs_once_when_due():
    scheduler = ManualScheduler()
    calls = []
    scheduler.call_later(2, lambda: calls.append(scheduler.elapsed))

    scheduler.advance(1.5)
    assert calls == []
    scheduler.advance(1)
    assert calls == [2]
    scheduler.advance(10)
    assert calls == [2]
    assert scheduler.pending() == 0


def test_call_every_repeats_until_cancelled():
    scheduler = ManualScheduler()
    calls = []
    task = scheduler.call_every(1, lambda: calls.append(scheduler.elapsed))

    scheduler.advance(3)
    assert calls == [1, 2, 3]
    task.cancel()
    scheduler.advance(3)
    assert len(calls) == 3


def test_due_order_and_clock():
    scheduler = ManualScheduler()
    order = []
    scheduler.call_later(3, lambda: order.append("b"))
    scheduler.call_later(1, lambda: order.append("a"))
    start = scheduler.now()

    scheduler.advance(5)
    assert order == ["a", "b"]
    assert scheduler.now() - start == timedelta(seconds=5)
