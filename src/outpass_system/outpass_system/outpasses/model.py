from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import DayType, RequestStatus, Role


@dataclass(frozen=True)
class Actor:
    """Authenticated caller as supplied by the identity provider."""

    actor_id: str
    role: Role


@dataclass(frozen=True)
class Decision:
    """One approve/reject audit entry. Written once, never overwritten."""

    actor_id: str
    timestamp: datetime
    remarks: Optional[str] = None


@dataclass(frozen=True)
class OutpassRequest:
    request_id: int
    student_name: str
    student_id: str
    guardian_name: str
    guardian_number: str
    out_date: datetime
    in_date: datetime
    reason: str
    day_type: DayType
    status: RequestStatus
    created_by: str
    created_at: datetime
    updated_at: datetime
    mentor_decision: Optional[Decision] = None
    warden_decision: Optional[Decision] = None
    rejection: Optional[Decision] = None


@dataclass(frozen=True)
class OutpassStatistics:
    total: int = 0
    pending: int = 0
    approved: int = 0
    rejected: int = 0
    mentor_approved: int = 0
    warden_approved: int = 0
