from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from bookingsync.application.use_cases.booking_session import BookingSession


class SessionStorePort(ABC):
    @abstractmethod
    def create(self) -> "BookingSession":
        raise NotImplementedError

    @abstractmethod
    def get(self, session_id: str) -> "BookingSession | None":
        raise NotImplementedError

    @abstractmethod
    def delete(self, session_id: str) -> bool:
        raise NotImplementedError
