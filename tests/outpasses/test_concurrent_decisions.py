from __future__ import annotations

import threading
from dataclasses import replace

from conftest import MONDAY, SATURDAY, new_outpass
from src.outpass_system.outpass_system.core.enums import DecisionKind, RequestStatus
from src.outpass_system.outpass_system.core.exceptions import ForbiddenTransitionError
from src.outpass_system.outpass_system.outpasses.model import Actor
from src.outpass_system.outpass_system.outpasses.service import LOCK_STRIPES


def _race(service, request_id, actors_and_kinds):
    barrier = threading.Barrier(len(actors_and_kinds))
    wins = []
    losses = []

    def worker(actor, kind):
        barrier.wait()
        try:
            wins.append(service.act(request_id, actor=actor, kind=kind))
        except ForbiddenTransitionError as exc:
            losses.append(exc)

    threads = [threading.Thread(target=worker, args=pair) for pair in actors_and_kinds]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=10)
    return wins, losses


def test_only_one_of_many_wardens_wins(service, parent, warden):
    outpass = service.submit(new_outpass(SATURDAY), requester=parent)
    wardens = [replace(warden, actor_id=f"w{i}") for i in range(8)]
    kinds = [DecisionKind.APPROVE if i % 2 else DecisionKind.REJECT for i in range(8)]

    wins, losses = _race(service, outpass.request_id, list(zip(wardens, kinds)))

    assert len(wins) == 1
    assert len(losses) == 7
    assert all(e.reason == ForbiddenTransitionError.ALREADY_PROCESSED for e in losses)
    assert service.get(outpass.request_id) == wins[0]


def test_mentor_reject_and_approve_race_leaves_single_outcome(service, parent, mentor):
    outpass = service.submit(new_outpass(MONDAY), requester=parent)
    other = Actor(actor_id="mentor-2", role=mentor.role)

    wins, losses = _race(
        service,
        outpass.request_id,
        [(mentor, DecisionKind.APPROVE), (other, DecisionKind.REJECT)],
    )

    assert len(wins) == 1 and len(losses) == 1
    final = service.get(outpass.request_id)
    if final.status == RequestStatus.REJECTED:
        assert final.mentor_decision is None and final.rejection is not None
    else:
        assert final.status == RequestStatus.MENTOR_APPROVED
        assert final.rejection is None


def test_lock_pool_stays_fixed_as_records_accumulate(service, parent, warden):
    ids = [service.submit(new_outpass(SATURDAY), requester=parent).request_id for _ in range(LOCK_STRIPES + 5)]
    for rid in ids:
        service.approve(rid, actor=warden)

    assert len(service._locks) == LOCK_STRIPES
    # ids one pool-width apart share a lock and still resolve independently
    assert service._lock_for(ids[0]) is service._lock_for(ids[0] + LOCK_STRIPES)
    assert all(service.get(rid).status == RequestStatus.WARDEN_APPROVED for rid in ids)
