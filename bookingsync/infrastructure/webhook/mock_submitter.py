from __future__ import annotations

import logging

from bookingsync.application.dto.booking_payload import BookingPayloadDTO
from bookingsync.application.ports.submission import SubmissionPort
from bookingsync.domain.entities.booking_record import BookingRecord


class MockSubmitter(SubmissionPort):
    def __init__(self) -> None:
        self.sent: list[dict[str, str | None]] = []
        self._logger = logging.getLogger(__name__)

    async def submit(self, record: BookingRecord) -> None:
        payload = BookingPayloadDTO.from_record(record).to_wire()
        self.sent.append(payload)
        self._logger.info("Mock booking submission", extra={"payload": payload})
