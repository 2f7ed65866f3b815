from __future__ import annotations

from datetime import date, datetime
from typing import Any

from ..core.constants import DATE_FORMAT


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value.strip(), DATE_FORMAT).date()


def format_iso_date(value: date) -> str:
    return value.strftime(DATE_FORMAT)


def coerce_date(value: Any) -> date:
    """Accept date, datetime (incl. pandas Timestamp) or ISO string."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        # Spreadsheet cells sometimes come back as "2024-01-10 00:00:00".
        return parse_iso_date(value.strip()[:10])
    raise TypeError(f"Unsupported date value: {value!r}")


def today_local() -> date:
    """Current local date.

    Note: Wrapped so tests can patch it.
    """
    return date.today()


def to_12_hour(clock: str) -> str:
    hours, minutes = clock.split(":")
    hour = int(hours)
    suffix = "PM" if hour >= 12 else "AM"
    display = 12 if hour == 0 else hour - 12 if hour > 12 else hour
    return f"{display}:{minutes} {suffix}"


def slot_display_label(slot: str) -> str:
    """"9:10-11:10" -> "9:10 AM – 11:10 AM". Unknown shapes are returned as-is."""
    parts = slot.split("-")
    if len(parts) != 2:
        return slot
    try:
        return f"{to_12_hour(parts[0])} – {to_12_hour(parts[1])}"
    except ValueError:
        return slot
