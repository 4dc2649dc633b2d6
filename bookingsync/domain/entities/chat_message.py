from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Sender(str, Enum):
    user = "user"
    agent = "agent"


@dataclass(frozen=True)
class ChatMessage:
    id: int
    text: str
    sender: Sender
    created_at: float
