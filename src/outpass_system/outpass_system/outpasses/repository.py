from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import DayType, RequestStatus
from .model import OutpassRequest


class OutpassRepository(Protocol):
    def create(
        self,
        *,
        student_name: str,
        student_id: str,
        guardian_name: str,
        guardian_number: str,
        out_date: datetime,
        in_date: datetime,
        reason: str,
        day_type: DayType,
        created_by: str,
        created_at: datetime,
    ) -> int:
        """Store a new pending request and return its id."""

        raise NotImplementedError

    def get(self, *, request_id: int) -> Optional[OutpassRequest]:
        raise NotImplementedError

    def save(self, outpass: OutpassRequest, *, expected_status: RequestStatus) -> bool:
        """Replace the stored record only if its status still equals ``expected_status``."""

        raise NotImplementedError

    def list_all(self, *, created_by: Optional[str] = None) -> Sequence[OutpassRequest]:
        """Return records in insertion order."""

        raise NotImplementedError
