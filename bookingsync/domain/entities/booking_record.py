from __future__ import annotations

from dataclasses import dataclass
from datetime import date as Date

from bookingsync.domain.entities.booking_options import DEFAULT_TIMEZONE

# Form order; all of them must be set before a booking can be confirmed.
REQUIRED_FIELDS: tuple[str, ...] = ("purpose", "date", "start_time", "end_time", "timezone", "email")


@dataclass(frozen=True)
class BookingRecord:
    purpose: str | None = None
    date: Date | None = None
    start_time: str | None = None  # "HH:00"
    end_time: str | None = None  # "HH:00"
    timezone: str = DEFAULT_TIMEZONE
    email: str | None = None

    def missing_fields(self) -> list[str]:
        return [name for name in REQUIRED_FIELDS if getattr(self, name) in (None, "")]

    def is_complete(self) -> bool:
        return not self.missing_fields()
