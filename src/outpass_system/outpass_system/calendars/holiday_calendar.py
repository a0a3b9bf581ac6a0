from __future__ import annotations

from datetime import date
from typing import Iterable

from ..core.enums import DayType
from .weekday_calendar import WeekdayCalendar


class HolidayCalendar(WeekdayCalendar):
    """Weekday calendar where configured holidays count as non-working days."""

    def __init__(self, holidays: Iterable[date]):
        self._holidays = frozenset(holidays)

    @property
    def holidays(self) -> frozenset:
        return self._holidays

    def classify(self, day: date) -> DayType:
        if day in self._holidays:
            return DayType.WEEKEND_OR_HOLIDAY
        return super().classify(day)
