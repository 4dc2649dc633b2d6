from __future__ import annotations

import logging
from typing import Callable

from bookingsync.application.ports.intent_engine import IntentEnginePort
from bookingsync.application.ports.scheduler import ScheduledTask, SchedulerPort
from bookingsync.application.utils.booking_rules import is_blank
from bookingsync.domain.entities.chat_message import ChatMessage, Sender
from bookingsync.domain.entities.chat_transcript import ChatTranscript
from bookingsync.domain.entities.partial_update import PartialBookingUpdate

GREETING = "Hello! I'm your AI scheduling assistant. How can I help you book an appointment today?"


class ChatTurnUseCase:
    """
    Accepts user utterances and delivers the agent reply after a simulated thinking delay.

    Every utterance schedules its own reply. Replies are not serialized or
    coalesced, so with several pending they land in completion order.
    """

    def __init__(
        self,
        transcript: ChatTranscript,
        engine: IntentEnginePort,
        scheduler: SchedulerPort,
        on_update: Callable[[PartialBookingUpdate], None],
        reply_delay: float = 1.5,
        session_id: str | None = None,
    ) -> None:
        self._transcript = transcript
        self._engine = engine
        self._scheduler = scheduler
        self._on_update = on_update
        self._reply_delay = reply_delay
        self._session_id = session_id
        self._pending: dict[int, ScheduledTask] = {}
        self._logger = logging.getLogger(__name__)

    @property
    def agent_typing(self) -> bool:
        return bool(self._pending)

    @property
    def pending_replies(self) -> int:
        return len(self._pending)

    def send(self, utterance: str) -> ChatMessage | None:
        """Append the user message now and schedule the agent reply. Blank input is ignored."""
        if is_blank(utterance):
            return None

        message = self._transcript.append(utterance, Sender.user)
        self._pending[message.id] = self._scheduler.call_later(
            self._reply_delay, lambda: self._reply(message)
        )
        return message

    def _reply(self, message: ChatMessage) -> None:
        self._pending.pop(message.id, None)
        interpretation = self._engine.interpret(message.text)
        self._logger.info(
            "Agent reply ready",
            extra={"session_id": self._session_id, "intent": interpretation.intent or "fallback"},
        )
        if interpretation.update:
            self._on_update(interpretation.update)
        self._transcript.append(interpretation.reply, Sender.agent)

    def cancel_pending(self) -> None:
        for task in self._pending.values():
            task.cancel()
        self._pending.clear()
