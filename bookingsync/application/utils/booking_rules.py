from __future__ import annotations

import re
from datetime import date
from typing import Any

from bookingsync.application.exceptions import InvalidFieldError
from bookingsync.domain.entities.booking_options import PURPOSES, TIME_SLOTS, TIMEZONES
from bookingsync.domain.entities.partial_update import BOOKING_FIELDS, PartialBookingUpdate

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def normalize_utterance(text: str) -> str:
    return (text or "").casefold()


def is_blank(text: str | None) -> bool:
    return not (text or "").strip()


def validate_field(name: str, value: Any) -> Any:
    """
    Check a single value against its booking field domain.

    Returns the normalized value (None means "unset"). Empty strings unset a
    field, except the time zone which always has a value.
    """
    if name not in BOOKING_FIELDS:
        raise InvalidFieldError(name, value, "unknown field")

    if isinstance(value, str):
        value = value.strip()
    if value in (None, ""):
        if name == "timezone":
            raise InvalidFieldError(name, value, "time zone cannot be empty")
        return None

    if name == "purpose":
        if value not in PURPOSES:
            raise InvalidFieldError(name, value, f"must be one of {', '.join(PURPOSES)}")
        return value

    if name == "timezone":
        if value not in TIMEZONES:
            raise InvalidFieldError(name, value, f"must be one of {', '.join(TIMEZONES)}")
        return value

    if name in ("start_time", "end_time"):
        if value not in TIME_SLOTS:
            raise InvalidFieldError(name, value, "must be an hourly slot between 00:00 and 23:00")
        return value

    if name == "date":
        if isinstance(value, date):
            return value
        try:
            return date.fromisoformat(str(value))
        except ValueError:
            raise InvalidFieldError(name, value, "must be an ISO date (YYYY-MM-DD)") from None

    if name == "email":
        if not isinstance(value, str) or not EMAIL_PATTERN.match(value):
            raise InvalidFieldError(name, value, "must be a valid email address")
        return value

    return value


def validate_update(update: PartialBookingUpdate) -> PartialBookingUpdate:
    return PartialBookingUpdate(values={name: validate_field(name, value) for name, value in update.values.items()})
