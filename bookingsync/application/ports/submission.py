from __future__ import annotations

from abc import ABC, abstractmethod

from bookingsync.domain.entities.booking_record import BookingRecord


class SubmissionPort(ABC):
    @abstractmethod
    async def submit(self, record: BookingRecord) -> None:
        """
        Deliver a confirmed booking to the remote collaborator.

        Raises SubmissionTransportError (or any other exception) on failure.
        Nothing is returned; callers never inspect the remote response.
        """
        raise NotImplementedError
