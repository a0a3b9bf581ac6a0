from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Union

from ..core.enums import DayType


class DayClassifier(ABC):
    """Strategy Pattern: decide whether a leave starts on a working weekday."""

    @abstractmethod
    def classify(self, day: date) -> DayType:
        raise NotImplementedError

    def classify_instant(self, value: Union[date, datetime]) -> DayType:
        if isinstance(value, datetime):
            value = value.date()
        return self.classify(value)
