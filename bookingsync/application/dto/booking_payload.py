from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from bookingsync.domain.entities.booking_record import BookingRecord


class BookingPayloadDTO(BaseModel):
    """Body posted to the booking webhook. Keys keep the form's camelCase names."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    purpose: str | None = None
    date: str | None = None
    start_time: str | None = Field(None, alias="startTime")
    end_time: str | None = Field(None, alias="endTime")
    timezone: str | None = Field(None, alias="timeZone")
    email: str | None = None

    @staticmethod
    def from_record(record: BookingRecord) -> "BookingPayloadDTO":
        return BookingPayloadDTO(
            purpose=record.purpose,
            date=record.date.isoformat() if record.date else None,
            start_time=record.start_time,
            end_time=record.end_time,
            timezone=record.timezone,
            email=record.email,
        )

    def to_wire(self) -> dict[str, str | None]:
        return self.model_dump(by_alias=True)
