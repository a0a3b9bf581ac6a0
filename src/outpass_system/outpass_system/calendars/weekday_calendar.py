from __future__ import annotations

from datetime import date

from ..core.enums import DayType
from .base import DayClassifier

# Monday..Friday per date.weekday()
WORKING_WEEKDAYS = frozenset({0, 1, 2, 3, 4})


class WeekdayCalendar(DayClassifier):
    """Five working weekdays, no holidays."""

    def classify(self, day: date) -> DayType:
        if day.weekday() in WORKING_WEEKDAYS:
            return DayType.WEEKDAY
        return DayType.WEEKEND_OR_HOLIDAY
