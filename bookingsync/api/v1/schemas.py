import datetime as dt

from pydantic import BaseModel, ConfigDict, Field

from bookingsync.application.use_cases.booking_session import SessionSnapshot
from bookingsync.domain.entities.booking_options import DEFAULT_TIMEZONE
from bookingsync.domain.entities.booking_record import BookingRecord
from bookingsync.domain.entities.chat_message import ChatMessage, Sender
from bookingsync.domain.entities.submission_state import SubmissionState


class BookingSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    purpose: str | None = None
    date: dt.date | None = None
    start_time: str | None = Field(None, alias="startTime")
    end_time: str | None = Field(None, alias="endTime")
    timezone: str = Field(DEFAULT_TIMEZONE, alias="timeZone")
    email: str | None = None

    @staticmethod
    def from_record(record: BookingRecord) -> "BookingSchema":
        return BookingSchema(
            purpose=record.purpose,
            date=record.date,
            start_time=record.start_time,
            end_time=record.end_time,
            timezone=record.timezone,
            email=record.email,
        )


class BookingEditSchema(BaseModel):
    """Partial form edit. Only the keys sent are applied; an empty string clears a field."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    purpose: str | None = None
    date: str | None = None
    start_time: str | None = Field(None, alias="startTime")
    end_time: str | None = Field(None, alias="endTime")
    timezone: str | None = Field(None, alias="timeZone")
    email: str | None = None


class MessageSchema(BaseModel):
    id: int
    text: str
    sender: Sender
    created_at: float

    @staticmethod
    def from_message(message: ChatMessage) -> "MessageSchema":
        return MessageSchema(id=message.id, text=message.text, sender=message.sender, created_at=message.created_at)


class SessionSchema(BaseModel):
    session_id: str
    booking: BookingSchema
    messages: list[MessageSchema]
    agent_typing: bool
    submission_state: SubmissionState

    @staticmethod
    def from_snapshot(snapshot: SessionSnapshot) -> "SessionSchema":
        return SessionSchema(
            session_id=snapshot.session_id,
            booking=BookingSchema.from_record(snapshot.booking),
            messages=[MessageSchema.from_message(m) for m in snapshot.messages],
            agent_typing=snapshot.agent_typing,
            submission_state=snapshot.submission_state,
        )


class SendMessageRequestSchema(BaseModel):
    text: str


class SendMessageResponseSchema(BaseModel):
    message: MessageSchema
    agent_typing: bool


class ConfirmResponseSchema(BaseModel):
    submission_state: SubmissionState


class OptionsSchema(BaseModel):
    purposes: list[str]
    timezones: list[str]
    time_slots: list[str]
