from __future__ import annotations

import asyncio
import heapq
import itertools
from typing import Any, Callable, Coroutine

from bookingsync.application.ports.scheduler import ScheduledTask, SchedulerPort


class _ManualTimer(ScheduledTask):
    def __init__(self, due: float, callback: Callable[[], None]) -> None:
        self.due = due
        self.callback = callback
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class _SpawnedTask(ScheduledTask):
    def __init__(self, task: asyncio.Task) -> None:
        self._task = task

    def cancel(self) -> None:
        self._task.cancel()

    @property
    def cancelled(self) -> bool:
        return self._task.cancelled()


class ManualScheduler(SchedulerPort):
    """
    Virtual clock scheduler. Timers only fire when `advance()` moves the clock past them.

    Coroutines passed to `spawn()` still run as tasks on the running event loop.
    """

    def __init__(self) -> None:
        self._now = 0.0
        self._queue: list[tuple[float, int, _ManualTimer]] = []
        self._seq = itertools.count()
        self.spawned: list[asyncio.Task] = []

    @property
    def now(self) -> float:
        return self._now

    @property
    def pending(self) -> int:
        return sum(1 for _, _, timer in self._queue if not timer.cancelled)

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledTask:
        timer = _ManualTimer(self._now + delay, callback)
        heapq.heappush(self._queue, (timer.due, next(self._seq), timer))
        return timer

    def spawn(self, coro: Coroutine[Any, Any, None]) -> ScheduledTask:
        task = asyncio.get_running_loop().create_task(coro)
        self.spawned.append(task)
        return _SpawnedTask(task)

    def advance(self, seconds: float) -> int:
        """Move the clock forward, firing due timers in due order. Returns how many fired."""
        target = self._now + seconds
        fired = 0
        while self._queue and self._queue[0][0] <= target:
            due, _, timer = heapq.heappop(self._queue)
            self._now = due
            if timer.cancelled:
                continue
            timer.callback()
            fired += 1
        self._now = target
        return fired
