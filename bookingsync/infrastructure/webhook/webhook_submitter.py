from __future__ import annotations

from bookingsync.application.dto.booking_payload import BookingPayloadDTO
from bookingsync.application.ports.submission import SubmissionPort
from bookingsync.domain.entities.booking_record import BookingRecord
from bookingsync.infrastructure.webhook.webhook_client import WebhookClient


class WebhookSubmitter(SubmissionPort):
    def __init__(self, client: WebhookClient) -> None:
        self._client = client

    async def submit(self, record: BookingRecord) -> None:
        payload = BookingPayloadDTO.from_record(record)
        await self._client.post_json(payload.to_wire())
