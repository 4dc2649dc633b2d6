from __future__ import annotations

import asyncio
from typing import Any, Callable, Coroutine

from bookingsync.application.ports.scheduler import ScheduledTask, SchedulerPort


class _TimerTask(ScheduledTask):
    def __init__(self, handle: asyncio.TimerHandle) -> None:
        self._handle = handle

    def cancel(self) -> None:
        self._handle.cancel()

    @property
    def cancelled(self) -> bool:
        return self._handle.cancelled()


class _CoroutineTask(ScheduledTask):
    def __init__(self, task: asyncio.Task) -> None:
        self._task = task

    def cancel(self) -> None:
        self._task.cancel()

    @property
    def cancelled(self) -> bool:
        return self._task.cancelled()


class AsyncioScheduler(SchedulerPort):
    """Schedules work on the currently running event loop."""

    def __init__(self) -> None:
        # Keeps spawned tasks referenced until they finish.
        self._tasks: set[asyncio.Task] = set()

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledTask:
        loop = asyncio.get_running_loop()
        return _TimerTask(loop.call_later(delay, callback))

    def spawn(self, coro: Coroutine[Any, Any, None]) -> ScheduledTask:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return _CoroutineTask(task)
