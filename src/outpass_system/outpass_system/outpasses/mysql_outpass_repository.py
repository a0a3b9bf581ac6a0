from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional, Sequence

from ..core.enums import DayType, RequestStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Decision, OutpassRequest
from .repository import OutpassRepository

_COLUMNS = """
    request_id, student_name, student_id, guardian_name, guardian_number,
    out_date, in_date, reason, day_type, status, created_by, created_at, updated_at,
    mentor_decided_by, mentor_decided_at, mentor_remarks,
    warden_decided_by, warden_decided_at, warden_remarks,
    rejected_by, rejected_at, rejection_remarks
"""


def _decision(r: Dict[str, Any], by: str, at: str, remarks: str) -> Optional[Decision]:
    if not r.get(by):
        return None
    return Decision(actor_id=str(r[by]), timestamp=r[at], remarks=r.get(remarks))


def _row_to_outpass(r: Dict[str, Any]) -> OutpassRequest:
    return OutpassRequest(
        request_id=int(r["request_id"]),
        student_name=r["student_name"],
        student_id=r.get("student_id") or "",
        guardian_name=r["guardian_name"],
        guardian_number=r["guardian_number"],
        out_date=r["out_date"],
        in_date=r["in_date"],
        reason=r["reason"],
        day_type=DayType(r["day_type"]),
        status=RequestStatus(r["status"]),
        created_by=str(r["created_by"]),
        created_at=r["created_at"],
        updated_at=r["updated_at"],
        mentor_decision=_decision(r, "mentor_decided_by", "mentor_decided_at", "mentor_remarks"),
        warden_decision=_decision(r, "warden_decided_by", "warden_decided_at", "warden_remarks"),
        rejection=_decision(r, "rejected_by", "rejected_at", "rejection_remarks"),
    )


def _decision_params(decision: Optional[Decision]) -> tuple:
    if decision is None:
        return (None, None, None)
    return (decision.actor_id, decision.timestamp, decision.remarks)


class MySQLOutpassRepository(OutpassRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO outpass_requests(
                    student_name, student_id, guardian_name, guardian_number,
                    out_date, in_date, reason, day_type, status,
                    created_by, created_at, updated_at
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    student_name,
                    student_id,
                    guardian_name,
                    guardian_number,
                    out_date,
                    in_date,
                    reason,
                    day_type.value,
                    RequestStatus.PENDING.value,
                    created_by,
                    created_at,
                    created_at,
                ),
            )
            return int(cur.lastrowid)

    def get(self, *, request_id: int) -> Optional[OutpassRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM outpass_requests WHERE request_id=%s",
                (int(request_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            return _row_to_outpass(r)

    def save(self, outpass: OutpassRequest, *, expected_status: RequestStatus) -> bool:
        # Decision columns are only filled while still NULL; status guard makes this a compare-and-set.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE outpass_requests
                SET status=%s, updated_at=%s,
                    mentor_decided_by=COALESCE(mentor_decided_by, %s),
                    mentor_decided_at=COALESCE(mentor_decided_at, %s),
                    mentor_remarks=COALESCE(mentor_remarks, %s),
                    warden_decided_by=COALESCE(warden_decided_by, %s),
                    warden_decided_at=COALESCE(warden_decided_at, %s),
                    warden_remarks=COALESCE(warden_remarks, %s),
                    rejected_by=COALESCE(rejected_by, %s),
                    rejected_at=COALESCE(rejected_at, %s),
                    rejection_remarks=COALESCE(rejection_remarks, %s)
                WHERE request_id=%s AND status=%s
                """,
                (
                    outpass.status.value,
                    outpass.updated_at,
                    *_decision_params(outpass.mentor_decision),
                    *_decision_params(outpass.warden_decision),
                    *_decision_params(outpass.rejection),
                    int(outpass.request_id),
                    expected_status.value,
                ),
            )
            return cur.rowcount > 0

    def list_all(self, *, created_by: Optional[str] = None) -> Sequence[OutpassRequest]:
        clauses = ["1=1"]
        params: list[object] = []
        if created_by is not None:
            clauses.append("created_by=%s")
            params.append(str(created_by))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM outpass_requests WHERE {where} ORDER BY request_id ASC",
                tuple(params),
            )
            return [_row_to_outpass(r) for r in fetchall(cur)]
