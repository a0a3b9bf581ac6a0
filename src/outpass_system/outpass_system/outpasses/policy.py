"""Routing policy for outpass approvals.

One table decides who may act on a request and where each action leads.
Everything else (legal action sets, pending queues, refusal reasons) is read
off that table.
"""
from __future__ import annotations

from typing import Dict, FrozenSet, Optional, Tuple

from ..core.enums import DayType, DecisionKind, RequestStatus, Role
from ..core.exceptions import ForbiddenTransitionError
from .model import OutpassRequest

TERMINAL_STATUSES: FrozenSet[RequestStatus] = frozenset({RequestStatus.WARDEN_APPROVED, RequestStatus.REJECTED})

_TRANSITIONS: Dict[Tuple[Role, RequestStatus, DayType], Dict[DecisionKind, RequestStatus]] = {
    (Role.MENTOR, RequestStatus.PENDING, DayType.WEEKDAY): {
        DecisionKind.APPROVE: RequestStatus.MENTOR_APPROVED,
        DecisionKind.REJECT: RequestStatus.REJECTED,
    },
    (Role.WARDEN, RequestStatus.PENDING, DayType.WEEKEND_OR_HOLIDAY): {
        DecisionKind.APPROVE: RequestStatus.WARDEN_APPROVED,
        DecisionKind.REJECT: RequestStatus.REJECTED,
    },
    (Role.WARDEN, RequestStatus.MENTOR_APPROVED, DayType.WEEKDAY): {
        DecisionKind.APPROVE: RequestStatus.WARDEN_APPROVED,
        DecisionKind.REJECT: RequestStatus.REJECTED,
    },
}

APPROVER_ROLES: FrozenSet[Role] = frozenset(role for role, _, _ in _TRANSITIONS)


def is_terminal(status: RequestStatus) -> bool:
    return status in TERMINAL_STATUSES


def legal_actions(*, role: Role, status: RequestStatus, day_type: DayType) -> FrozenSet[DecisionKind]:
    return frozenset(_TRANSITIONS.get((role, status, day_type), {}))


def next_status(
    *, role: Role, status: RequestStatus, day_type: DayType, kind: DecisionKind
) -> Optional[RequestStatus]:
    """Target status of the action, or None when the action is not legal."""
    return _TRANSITIONS.get((role, status, day_type), {}).get(kind)


def awaiting_role(*, status: RequestStatus, day_type: DayType) -> Optional[Role]:
    """Role that must act next; None once the request is terminal."""
    for role, row_status, row_day_type in _TRANSITIONS:
        if row_status == status and row_day_type == day_type:
            return role
    return None


def refusal(*, role: Role, status: RequestStatus, day_type: DayType) -> ForbiddenTransitionError:
    """Build the error explaining why ``role`` may not act right now."""
    if role not in APPROVER_ROLES:
        return ForbiddenTransitionError(
            f"Role {role.value!r} cannot approve or reject outpass requests",
            reason=ForbiddenTransitionError.ROLE_NOT_PERMITTED,
        )
    if is_terminal(status):
        return ForbiddenTransitionError(
            "This request has already been processed",
            reason=ForbiddenTransitionError.ALREADY_PROCESSED,
        )
    waiting_for = awaiting_role(status=status, day_type=day_type)
    if role == Role.WARDEN and waiting_for == Role.MENTOR:
        return ForbiddenTransitionError(
            "Weekday requests must be approved by mentor first",
            reason=ForbiddenTransitionError.AWAITING_MENTOR,
        )
    if role == Role.MENTOR and status != RequestStatus.PENDING:
        return ForbiddenTransitionError(
            "This request has already been processed by the mentor",
            reason=ForbiddenTransitionError.ALREADY_PROCESSED,
        )
    return ForbiddenTransitionError(
        f"This request cannot be handled by {role.value}",
        reason=ForbiddenTransitionError.ROLE_NOT_PERMITTED,
    )


def is_pending_for(role: Role, outpass: OutpassRequest) -> bool:
    """Whether the request sits in ``role``'s pending queue."""
    return bool(legal_actions(role=role, status=outpass.status, day_type=outpass.day_type))
