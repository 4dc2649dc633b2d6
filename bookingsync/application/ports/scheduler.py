from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Coroutine


class ScheduledTask(ABC):
    @abstractmethod
    def cancel(self) -> None:
        raise NotImplementedError

    @property
    @abstractmethod
    def cancelled(self) -> bool:
        raise NotImplementedError


class SchedulerPort(ABC):
    @abstractmethod
    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledTask:
        """Run `callback` once on the event loop after `delay` seconds."""
        raise NotImplementedError

    @abstractmethod
    def spawn(self, coro: Coroutine[Any, Any, None]) -> ScheduledTask:
        """Start a fire-and-forget coroutine on the event loop."""
        raise NotImplementedError
