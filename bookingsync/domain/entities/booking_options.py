from __future__ import annotations

PURPOSES: tuple[str, ...] = (
    "Consultation",
    "Technical Support",
    "Business Inquiry",
    "General Check-in",
    "Follow-up Meeting",
)

TIMEZONES: tuple[str, ...] = ("UTC", "GMT", "EST", "PST", "IST", "CET", "JST")

DEFAULT_TIMEZONE = "UTC"

TIME_SLOTS: tuple[str, ...] = tuple(f"{hour:02d}:00" for hour in range(24))
