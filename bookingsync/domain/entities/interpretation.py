from __future__ import annotations

from dataclasses import dataclass

from bookingsync.domain.entities.partial_update import PartialBookingUpdate


@dataclass(frozen=True)
class Interpretation:
    reply: str
    update: PartialBookingUpdate | None = None
    intent: str | None = None  # None when no rule matched
