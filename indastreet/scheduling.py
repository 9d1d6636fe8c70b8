"""Cancellable timers and clocks shared by the state stores."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Callable, Protocol

from textual.timer import Timer


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ScheduledTask(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Deferred callbacks on the UI event loop."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledTask: ...

    def call_every(self, interval: float, callback: Callable[[], None]) -> ScheduledTask: ...


class _TimerTask:
    def __init__(self, timer: Timer) -> None:
        self._timer = timer

    def cancel(self) -> None:
        self._timer.stop()


class TextualScheduler:
    """Scheduler backed by a Textual message pump's timers."""

    def __init__(self, owner) -> None:
        # Any App, Screen or Widget; timers die with the owner.
        self._owner = owner

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledTask:
        return _TimerTask(self._owner.set_timer(delay, callback))

    def call_every(self, interval: float, callback: Callable[[], None]) -> ScheduledTask:
        return _TimerTask(self._owner.set_interval(interval, callback))


@dataclass
class _ManualTask:
    due: float
    callback: Callable[[], None]
    interval: float | None = None
    cancelled: bool = False
    seq: int = 0

    def cancel(self) -> None:
        self.cancelled = True


@dataclass
class ManualScheduler:
    """
    Deterministic scheduler driven by a virtual clock.

    ``advance(seconds)`` moves the clock forward and runs every callback that
    falls due, in due order. ``now()`` is usable as the stores' clock.
    """

    start: datetime = field(default_factory=lambda: datetime(2025, 1, 1, tzinfo=timezone.utc))
    elapsed: float = 0.0
    _tasks: list[_ManualTask] = field(default_factory=list)
    _seq: int = 0

    def now(self) -> datetime:
        return self.start + timedelta(seconds=self.elapsed)

    def call_later(self, delay: float, callback: Callable[[], None]) -> _ManualTask:
        return self._add(_ManualTask(due=self.elapsed + delay, callback=callback))

    def call_every(self, interval: float, callback: Callable[[], None]) -> _ManualTask:
        return self._add(_ManualTask(due=self.elapsed + interval, callback=callback, interval=interval))

    def pending(self) -> int:
        return sum(1 for task in self._tasks if not task.cancelled)

    def advance(self, seconds: float) -> None:
        target = self.elapsed + seconds
        while True:
            due = [task for task in self._tasks if not task.cancelled and task.due <= target]
            if not due:
                break
            task = min(due, key=lambda t: (t.due, t.seq))
            self.elapsed = max(self.elapsed, task.due)
            if task.interval is None:
                task.cancelled = True
            else:
                task.due += task.interval
            task.callback()
        self.elapsed = target
        self._tasks = [task for task in self._tasks if not task.cancelled]

    def _add(self, task: _ManualTask) -> _ManualTask:
        self._seq += 1
        task.seq = self._seq
        self._tasks.append(task)
        return task
