from __future__ import annotations

from dataclasses import replace

from bookingsync.domain.entities.booking_record import BookingRecord
from bookingsync.domain.entities.partial_update import PartialBookingUpdate


def apply_update(update: PartialBookingUpdate, into: BookingRecord) -> BookingRecord:
    """Last-write-wins shallow merge. Fields absent from `update` are left untouched."""
    if not update:
        return into
    return replace(into, **dict(update.values))


def changed_fields(before: BookingRecord, after: BookingRecord) -> list[str]:
    return [name for name in before.__dataclass_fields__ if getattr(before, name) != getattr(after, name)]
