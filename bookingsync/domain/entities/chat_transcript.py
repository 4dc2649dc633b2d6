from __future__ import annotations

import itertools
import time

from bookingsync.domain.entities.chat_message import ChatMessage, Sender


class ChatTranscript:
    """Append-only, ordered log of chat turns. Message ids grow with creation order."""

    def __init__(self) -> None:
        self._messages: list[ChatMessage] = []
        self._ids = itertools.count(1)

    def append(self, text: str, sender: Sender) -> ChatMessage:
        message = ChatMessage(id=next(self._ids), text=text, sender=sender, created_at=time.time())
        self._messages.append(message)
        return message

    def all(self) -> tuple[ChatMessage, ...]:
        return tuple(self._messages)

    def last(self) -> ChatMessage | None:
        return self._messages[-1] if self._messages else None

    def __len__(self) -> int:
        return len(self._messages)
