from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from bookingsync.application.exceptions import BookingValidationError
from bookingsync.application.ports.intent_engine import IntentEnginePort
from bookingsync.application.ports.scheduler import SchedulerPort
from bookingsync.application.ports.submission import SubmissionPort
from bookingsync.application.use_cases.chat_turn import GREETING, ChatTurnUseCase
from bookingsync.application.use_cases.submission import SubmissionController
from bookingsync.application.use_cases.sync_booking import apply_update, changed_fields
from bookingsync.application.utils.booking_rules import validate_update
from bookingsync.domain.entities.booking_record import BookingRecord
from bookingsync.domain.entities.chat_message import ChatMessage, Sender
from bookingsync.domain.entities.chat_transcript import ChatTranscript
from bookingsync.domain.entities.partial_update import PartialBookingUpdate
from bookingsync.domain.entities.submission_state import SubmissionState


@dataclass(frozen=True)
class SessionSnapshot:
    session_id: str
    booking: BookingRecord
    messages: tuple[ChatMessage, ...]
    agent_typing: bool
    submission_state: SubmissionState


class BookingSession:
    """
    Owns the single booking record of a session and the two surfaces that edit it.

    Direct form edits and chat-derived updates both end up in `_commit`, so the
    record has exactly one write path.
    """

    def __init__(
        self,
        session_id: str,
        engine: IntentEnginePort,
        submitter: SubmissionPort,
        scheduler: SchedulerPort,
        reply_delay: float = 1.5,
        resolve_delay: float = 4.0,
        dismiss_delay: float = 4.0,
    ) -> None:
        self.session_id = session_id
        self._record = BookingRecord()
        self._transcript = ChatTranscript()
        self._transcript.append(GREETING, Sender.agent)
        self._chat = ChatTurnUseCase(
            transcript=self._transcript,
            engine=engine,
            scheduler=scheduler,
            on_update=self.apply_update,
            reply_delay=reply_delay,
            session_id=session_id,
        )
        self._submission = SubmissionController(
            submitter=submitter,
            scheduler=scheduler,
            resolve_delay=resolve_delay,
            dismiss_delay=dismiss_delay,
            session_id=session_id,
        )
        self._logger = logging.getLogger(__name__)

    @property
    def record(self) -> BookingRecord:
        return self._record

    @property
    def transcript(self) -> ChatTranscript:
        return self._transcript

    @property
    def submission(self) -> SubmissionController:
        return self._submission

    @property
    def chat(self) -> ChatTurnUseCase:
        return self._chat

    def edit_fields(self, **changes: Any) -> BookingRecord:
        """Structured surface entry point. Values are checked against their field domains."""
        update = validate_update(PartialBookingUpdate(values=changes))
        return self._commit(update, source="form")

    def apply_update(self, update: PartialBookingUpdate) -> BookingRecord:
        """Conversational entry point. The engine already built the update inside the field domains."""
        return self._commit(update, source="chat")

    def send_message(self, text: str) -> ChatMessage | None:
        return self._chat.send(text)

    def confirm(self) -> SubmissionState:
        missing = self._record.missing_fields()
        if missing:
            raise BookingValidationError(missing)
        return self._submission.confirm(self._record)

    def close(self) -> None:
        self._chat.cancel_pending()
        self._submission.cancel()

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            session_id=self.session_id,
            booking=self._record,
            messages=self._transcript.all(),
            agent_typing=self._chat.agent_typing,
            submission_state=self._submission.state,
        )

    def _commit(self, update: PartialBookingUpdate, source: str) -> BookingRecord:
        before = self._record
        self._record = apply_update(update, into=before)
        fields = changed_fields(before, self._record)
        if fields:
            self._logger.info(
                "Booking updated",
                extra={"session_id": self.session_id, "fields": ",".join(fields), "source": source},
            )
        return self._record
