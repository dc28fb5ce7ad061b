"""Clock-driven scheduler for the game's independent timers."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Callable, Dict, List

from hugoland.core.clock import Clock

logger = logging.getLogger(__name__)

# A repeating task never runs more than this many times per run_pending call.
MAX_CATCH_UP_RUNS = 10_000


@dataclass(slots=True)
class ScheduledTask:
    """Handle for a callback registered with the scheduler."""

    task_id: int
    name: str
    callback: Callable[[], None]
    due_at: datetime
    interval: timedelta | None = None
    cancelled: bool = False
    run_count: int = field(default=0)

    @property
    def repeating(self) -> bool:
        return self.interval is not None


class Scheduler:
    """Runs due callbacks whenever the owner calls ``run_pending``.

    Tasks do not share ordering guarantees beyond due time. A repeating task
    that fell behind runs once per elapsed interval, so countdowns stay exact
    even when the host loop stalls.
    """

    def __init__(self, clock: Clock) -> None:
        self._clock = clock
        self._tasks: Dict[int, ScheduledTask] = {}
        self._next_id = 1

    def call_later(self, delay_seconds: float, callback: Callable[[], None], *, name: str = "") -> ScheduledTask:
        return self._register(callback, timedelta(seconds=delay_seconds), None, name)

    def call_every(self, interval_seconds: float, callback: Callable[[], None], *, name: str = "") -> ScheduledTask:
        if interval_seconds <= 0:
            raise ValueError("Interval must be positive.")
        interval = timedelta(seconds=interval_seconds)
        return self._register(callback, interval, interval, name)

    def cancel(self, task: ScheduledTask | None) -> None:
        if task is None:
            return
        task.cancelled = True
        self._tasks.pop(task.task_id, None)

    def cancel_all(self) -> None:
        for task in list(self._tasks.values()):
            task.cancelled = True
        self._tasks.clear()

    def pending(self) -> List[ScheduledTask]:
        return sorted(self._tasks.values(), key=lambda task: (task.due_at, task.task_id))

    def run_pending(self) -> int:
        """Run every task that is due; return the number of callbacks executed."""
        now = self._clock.now()
        executed = 0
        for task in self.pending():
            runs = 0
            while not task.cancelled and task.due_at <= now and runs < MAX_CATCH_UP_RUNS:
                runs += 1
                if task.interval is None:
                    self._tasks.pop(task.task_id, None)
                    task.cancelled = True
                else:
                    task.due_at = task.due_at + task.interval
                executed += 1
                task.run_count += 1
                try:
                    task.callback()
                except Exception:
                    logger.exception("Scheduled task '%s' failed", task.name or task.task_id)
        return executed

    def _register(
        self,
        callback: Callable[[], None],
        delay: timedelta,
        interval: timedelta | None,
        name: str,
    ) -> ScheduledTask:
        task = ScheduledTask(
            task_id=self._next_id,
            name=name,
            callback=callback,
            due_at=self._clock.now() + delay,
            interval=interval,
        )
        self._next_id += 1
        self._tasks[task.task_id] = task
        return task
