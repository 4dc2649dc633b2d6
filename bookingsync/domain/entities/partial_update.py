from __future__ import annotations

from dataclasses import dataclass, field, fields
from types import MappingProxyType
from typing import Any, Iterator, Mapping

from bookingsync.domain.entities.booking_record import BookingRecord

BOOKING_FIELDS: frozenset[str] = frozenset(f.name for f in fields(BookingRecord))


@dataclass(frozen=True)
class PartialBookingUpdate:
    """Sparse set of field assignments for a BookingRecord.

    Only the keys present are meant to change; absent keys stay as they are.
    """

    values: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        unknown = set(self.values) - BOOKING_FIELDS
        if unknown:
            raise ValueError(f"Unknown booking fields: {', '.join(sorted(unknown))}")
        object.__setattr__(self, "values", MappingProxyType(dict(self.values)))

    @staticmethod
    def of(**values: Any) -> "PartialBookingUpdate":
        return PartialBookingUpdate(values=values)

    def field_names(self) -> list[str]:
        return sorted(self.values)

    def __iter__(self) -> Iterator[str]:
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)

    def __bool__(self) -> bool:
        return bool(self.values)
