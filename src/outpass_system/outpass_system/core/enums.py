from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Roles supplied by the identity provider."""

    MENTOR = "mentor"
    WARDEN = "warden"
    PARENT = "parent"
    ADMIN = "admin"


class RequestStatus(str, Enum):
    """Outpass approval state. Only moves forward."""

    PENDING = "pending"
    MENTOR_APPROVED = "mentor_approved"
    WARDEN_APPROVED = "warden_approved"
    REJECTED = "rejected"


class DayType(str, Enum):
    """Classification of the day the leave starts; decides the approval path."""

    WEEKDAY = "weekday"
    WEEKEND_OR_HOLIDAY = "weekend_or_holiday"


class DecisionKind(str, Enum):
    APPROVE = "approve"
    REJECT = "reject"
