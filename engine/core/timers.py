"""
Frame-driven one-shot timers.

Timers are advanced by the game loop's fixed timestep rather than by
wall-clock threads, so a callback always runs between two ticks and
never interleaves with one.

Each task can carry a guard that is evaluated when the task comes due.
The guard sees the state as it is at fire time, not as it was when
the task was scheduled; if it returns False the task is dropped.

Usage:
    scheduler = Scheduler()
    scheduler.schedule(3000, hide_prompt, guard=lambda: state.is_idle)

    # once per frame
    scheduler.advance(dt * 1000)
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass, field
from typing import Callable, Optional

logger = logging.getLogger(__name__)


@dataclass
class ScheduledTask:
    """
    A one-shot delayed callback.

    Attributes:
        due_ms: Scheduler time at which the task fires
        callback: Called once when the task comes due
        guard: Optional predicate checked at fire time
        name: Label for logging
        cancelled: Set by cancel(); cancelled tasks never fire
    """
    due_ms: float
    callback: Callable[[], None]
    guard: Optional[Callable[[], bool]] = None
    name: str = ""
    cancelled: bool = False
    seq: int = field(default=0, compare=False)

    def cancel(self) -> None:
        """Prevent this task from firing."""
        self.cancelled = True

    def should_fire(self) -> bool:
        """Evaluate the guard against current state."""
        if self.cancelled:
            return False
        return self.guard is None or self.guard()


class Scheduler:
    """
    Runs one-shot tasks against an internal millisecond clock.

    The clock only moves when advance() is called. Tasks due in the
    same advance() run in due-time order, ties in scheduling order.
    """

    def __init__(self):
        self._now_ms = 0.0
        self._tasks: list[ScheduledTask] = []
        self._counter = itertools.count()

    @property
    def now_ms(self) -> float:
        """Current scheduler time in milliseconds."""
        return self._now_ms

    @property
    def pending(self) -> list[ScheduledTask]:
        """Tasks that have not fired or been cancelled yet."""
        return [t for t in self._tasks if not t.cancelled]

    def schedule(
        self,
        delay_ms: float,
        callback: Callable[[], None],
        guard: Optional[Callable[[], bool]] = None,
        name: str = "",
    ) -> ScheduledTask:
        """
        Schedule a one-shot callback.

        Args:
            delay_ms: Delay from now in milliseconds
            callback: Function to call when due
            guard: Predicate evaluated at fire time; False drops the task
            name: Label for logging

        Returns:
            The scheduled task (keep it to cancel)
        """
        task = ScheduledTask(
            due_ms=self._now_ms + max(0.0, delay_ms),
            callback=callback,
            guard=guard,
            name=name,
            seq=next(self._counter),
        )
        self._tasks.append(task)
        return task

    def advance(self, elapsed_ms: float) -> int:
        """
        Move the clock forward and run every task that came due.

        Args:
            elapsed_ms: Milliseconds elapsed since the last advance

        Returns:
            Number of callbacks actually run
        """
        self._now_ms += elapsed_ms

        due = sorted(
            (t for t in self._tasks if t.due_ms <= self._now_ms),
            key=lambda t: (t.due_ms, t.seq),
        )
        if not due:
            return 0

        self._tasks = [t for t in self._tasks if t.due_ms > self._now_ms]

        fired = 0
        for task in due:
            if not task.should_fire():
                logger.debug(f"Skipped task '{task.name}' at {self._now_ms:.0f}ms")
                continue
            task.callback()
            fired += 1
        return fired

    def clear(self) -> None:
        """Drop all pending tasks."""
        self._tasks.clear()
