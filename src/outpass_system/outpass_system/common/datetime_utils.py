from __future__ import annotations

from datetime import date, datetime
from typing import Union

from ..core.exceptions import ValidationError

CalendarInput = Union[str, date, datetime]


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_instant(value: CalendarInput, field_name: str) -> datetime:
    """Parse a calendar instant.

    Accepts ``YYYY-MM-DD``, an ISO-8601 date-time, or an existing date/datetime.
    A bare date maps to midnight local time. Offset-aware input is converted to
    local time and made naive so every stored instant compares the same way.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        return datetime.combine(value, datetime.min.time())
    elif value is None or isinstance(value, str):
        text = (value or "").strip()
        if not text:
            raise ValidationError(f"{field_name} is required")
        try:
            if len(text) == 10:
                return datetime.combine(parse_iso_date(text), datetime.min.time())
            parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            raise ValidationError(f"Invalid date format for {field_name}")
    else:
        raise ValidationError(f"Invalid date format for {field_name}")

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
