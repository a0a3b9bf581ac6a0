from __future__ import annotations

from typing import Iterable, Union

from ..common.datetime_utils import parse_iso_date
from ..core.exceptions import ValidationError
from .base import DayClassifier
from .holiday_calendar import HolidayCalendar
from .weekday_calendar import WeekdayCalendar


def parse_holidays(value: Union[str, Iterable[str], None]) -> list:
    """Parse ``HOLIDAYS`` setting: comma separated ``YYYY-MM-DD`` values or a list of them."""
    if not value:
        return []
    items = value.split(",") if isinstance(value, str) else list(value)
    out = []
    for item in items:
        text = str(item).strip()
        if not text:
            continue
        try:
            out.append(parse_iso_date(text))
        except ValueError:
            raise ValidationError(f"Invalid holiday date: {text!r}")
    return out


def build_day_classifier(holidays: Union[str, Iterable[str], None] = None) -> DayClassifier:
    """Factory Pattern: plain weekday calendar unless holidays are configured."""
    parsed = parse_holidays(holidays)
    if not parsed:
        return WeekdayCalendar()
    return HolidayCalendar(parsed)
