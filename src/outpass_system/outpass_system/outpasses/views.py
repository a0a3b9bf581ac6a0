from __future__ import annotations

from typing import List, Optional

from ..core.enums import RequestStatus, Role
from ..core.exceptions import AuthorizationError, NotFoundError
from . import policy
from .model import Actor, OutpassRequest, OutpassStatistics
from .service import OutpassService


class OutpassQueryService:
    """Role-scoped read views over outpass requests."""

    def __init__(self, outpasses: OutpassService):
        self._outpasses = outpasses

    @staticmethod
    def _owner_scope(actor: Actor) -> Optional[str]:
        # Parents only ever see what they submitted.
        return str(actor.actor_id) if actor.role == Role.PARENT else None

    def pending_for(self, actor: Actor) -> List[OutpassRequest]:
        if actor.role not in policy.APPROVER_ROLES:
            raise AuthorizationError("Access denied")
        return [r for r in self._outpasses.list_outpasses() if policy.is_pending_for(actor.role, r)]

    def history_for(self, actor: Actor) -> List[OutpassRequest]:
        return self._outpasses.list_outpasses(created_by=self._owner_scope(actor))

    def get_for(self, actor: Actor, request_id: int) -> OutpassRequest:
        outpass = self._outpasses.get(request_id)
        owner = self._owner_scope(actor)
        if owner is not None and outpass.created_by != owner:
            raise NotFoundError("Outpass request not found")
        return outpass

    def statistics_for(self, actor: Actor) -> OutpassStatistics:
        rows = self._outpasses.list_outpasses(created_by=self._owner_scope(actor))
        counts = {status: 0 for status in RequestStatus}
        for r in rows:
            counts[r.status] += 1

        # "approved" includes requests still waiting on the warden.
        return OutpassStatistics(
            total=len(rows),
            pending=counts[RequestStatus.PENDING],
            approved=counts[RequestStatus.MENTOR_APPROVED] + counts[RequestStatus.WARDEN_APPROVED],
            rejected=counts[RequestStatus.REJECTED],
            mentor_approved=counts[RequestStatus.MENTOR_APPROVED],
            warden_approved=counts[RequestStatus.WARDEN_APPROVED],
        )
