from __future__ import annotations

import threading
from datetime import datetime
from typing import Dict, Optional, Sequence

from ..core.enums import DayType, RequestStatus
from .model import OutpassRequest
from .repository import OutpassRepository


class InMemoryOutpassRepository(OutpassRepository):
    """Process-local store.

    Records are immutable values, so a reader holding one always sees a whole
    snapshot. Writes are serialized by a single lock.
    """

    def __init__(self):
        self._lock = threading.RLock()
        self._next_id = 1
        self._rows: Dict[int, OutpassRequest] = {}

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
        with self._lock:
            rid = self._next_id
            self._next_id += 1
            self._rows[rid] = OutpassRequest(
                request_id=rid,
                student_name=student_name,
                student_id=student_id,
                guardian_name=guardian_name,
                guardian_number=guardian_number,
                out_date=out_date,
                in_date=in_date,
                reason=reason,
                day_type=day_type,
                status=RequestStatus.PENDING,
                created_by=created_by,
                created_at=created_at,
                updated_at=created_at,
            )
            return rid

    def get(self, *, request_id: int) -> Optional[OutpassRequest]:
        with self._lock:
            return self._rows.get(int(request_id))

    def save(self, outpass: OutpassRequest, *, expected_status: RequestStatus) -> bool:
        with self._lock:
            current = self._rows.get(outpass.request_id)
            if current is None or current.status != expected_status:
                return False
            self._rows[outpass.request_id] = outpass
            return True

    def list_all(self, *, created_by: Optional[str] = None) -> Sequence[OutpassRequest]:
        with self._lock:
            rows = list(self._rows.values())
        if created_by is not None:
            rows = [r for r in rows if r.created_by == created_by]
        return rows
