from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Callable, List, Optional

from ..calendars.base import DayClassifier
from ..common.datetime_utils import CalendarInput, now_local, parse_instant
from ..common.validators import optional_text, require_non_empty
from ..core.constants import DEFAULT_REASON, DEFAULT_REJECTION_REMARKS
from ..core.enums import DayType, DecisionKind, RequestStatus, Role
from ..core.exceptions import ForbiddenTransitionError, NotFoundError, ValidationError
from . import policy
from .model import Actor, Decision, OutpassRequest
from .repository import OutpassRepository

logger = logging.getLogger(__name__)

LOCK_STRIPES = 64


@dataclass(frozen=True)
class NewOutpass:
    student_name: Optional[str]
    guardian_name: Optional[str]
    guardian_number: Optional[str]
    out_date: Optional[CalendarInput]
    in_date: Optional[CalendarInput]
    student_id: Optional[str] = None
    reason: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: dict) -> "NewOutpass":
        """Build from the camelCase JSON body used by the web client."""
        if not isinstance(payload, dict):
            raise ValidationError("Request body must be a JSON object")
        return cls(
            student_name=payload.get("studentName"),
            student_id=payload.get("studentId"),
            guardian_name=payload.get("guardianName"),
            guardian_number=payload.get("guardianNumber"),
            out_date=payload.get("outDate"),
            in_date=payload.get("inDate"),
            reason=payload.get("reason"),
        )


class OutpassService:
    """Submits outpass requests and applies mentor/warden decisions."""

    def __init__(
        self,
        outpasses: OutpassRepository,
        calendar: DayClassifier,
        *,
        clock: Callable[[], datetime] = now_local,
    ):
        self._outpasses = outpasses
        self._calendar = calendar
        self._clock = clock
        # Fixed pool: records share a lock by id, the store still guards each write.
        self._locks: List[threading.Lock] = [threading.Lock() for _ in range(LOCK_STRIPES)]

    def _lock_for(self, request_id: int) -> threading.Lock:
        return self._locks[request_id % LOCK_STRIPES]

    def submit(self, data: NewOutpass, *, requester: Actor) -> OutpassRequest:
        student_name = require_non_empty(data.student_name, "Student name")
        guardian_name = require_non_empty(data.guardian_name, "Guardian name")
        guardian_number = require_non_empty(data.guardian_number, "Guardian number")
        if data.out_date is None or data.in_date is None:
            raise ValidationError("Please provide all required fields")

        out_date = parse_instant(data.out_date, "Out date")
        in_date = parse_instant(data.in_date, "In date")
        if in_date < out_date:
            raise ValidationError("In date must be after or equal to out date")

        day_type = self._calendar.classify_instant(out_date)
        now = self._clock()
        request_id = self._outpasses.create(
            student_name=student_name,
            student_id=optional_text(data.student_id) or "",
            guardian_name=guardian_name,
            guardian_number=guardian_number,
            out_date=out_date,
            in_date=in_date,
            reason=optional_text(data.reason) or DEFAULT_REASON,
            day_type=day_type,
            created_by=str(requester.actor_id),
            created_at=now,
        )
        logger.info(
            "outpass %s submitted by %s (%s), day_type=%s",
            request_id,
            requester.actor_id,
            requester.role.value,
            day_type.value,
        )
        return self.get(request_id)

    def get(self, request_id: int) -> OutpassRequest:
        outpass = self._outpasses.get(request_id=int(request_id))
        if outpass is None:
            raise NotFoundError("Outpass request not found")
        return outpass

    def act(
        self,
        request_id: int,
        *,
        actor: Actor,
        kind: DecisionKind,
        remarks: Optional[str] = None,
    ) -> OutpassRequest:
        request_id = int(request_id)
        with self._lock_for(request_id):
            current = self.get(request_id)
            target = policy.next_status(
                role=actor.role,
                status=current.status,
                day_type=current.day_type,
                kind=kind,
            )
            if target is None:
                error = policy.refusal(role=actor.role, status=current.status, day_type=current.day_type)
                logger.warning(
                    "outpass %s: %s by %s (%s) refused in status %s: %s",
                    request_id,
                    kind.value,
                    actor.actor_id,
                    actor.role.value,
                    current.status.value,
                    error.reason,
                )
                raise error

            updated = self._apply(current, actor=actor, kind=kind, target=target, remarks=remarks)
            if not self._outpasses.save(updated, expected_status=current.status):
                raise ForbiddenTransitionError(
                    "This request has already been processed",
                    reason=ForbiddenTransitionError.ALREADY_PROCESSED,
                )

        logger.info(
            "outpass %s: %s -> %s by %s (%s)",
            request_id,
            current.status.value,
            target.value,
            actor.actor_id,
            actor.role.value,
        )
        return updated

    def approve(self, request_id: int, *, actor: Actor, remarks: Optional[str] = None) -> OutpassRequest:
        return self.act(request_id, actor=actor, kind=DecisionKind.APPROVE, remarks=remarks)

    def reject(self, request_id: int, *, actor: Actor, remarks: Optional[str] = None) -> OutpassRequest:
        return self.act(request_id, actor=actor, kind=DecisionKind.REJECT, remarks=remarks)

    def _apply(
        self,
        current: OutpassRequest,
        *,
        actor: Actor,
        kind: DecisionKind,
        target: RequestStatus,
        remarks: Optional[str],
    ) -> OutpassRequest:
        now = self._clock()
        if kind == DecisionKind.REJECT:
            slot = "rejection"
            decision = Decision(
                actor_id=str(actor.actor_id),
                timestamp=now,
                remarks=optional_text(remarks) or DEFAULT_REJECTION_REMARKS,
            )
        else:
            slot = "mentor_decision" if actor.role == Role.MENTOR else "warden_decision"
            decision = Decision(actor_id=str(actor.actor_id), timestamp=now, remarks=optional_text(remarks))

        # Decision slots are append-only.
        if getattr(current, slot) is not None:
            raise ForbiddenTransitionError(
                "This request has already been processed",
                reason=ForbiddenTransitionError.ALREADY_PROCESSED,
            )
        return replace(current, status=target, updated_at=now, **{slot: decision})

    def list_outpasses(
        self,
        *,
        created_by: Optional[str] = None,
        status: Optional[RequestStatus] = None,
        day_type: Optional[DayType] = None,
        limit: Optional[int] = None,
    ) -> List[OutpassRequest]:
        """Most recent first; requests created at the same instant keep insertion order."""
        rows = self._outpasses.list_all(created_by=created_by)
        if status is not None:
            rows = [r for r in rows if r.status == status]
        if day_type is not None:
            rows = [r for r in rows if r.day_type == day_type]
        ordered = sorted(rows, key=lambda r: r.created_at, reverse=True)
        if limit is not None:
            ordered = ordered[: int(limit)]
        return ordered
