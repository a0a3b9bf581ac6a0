from dataclasses import replace
from datetime import datetime

from src.outpass_system.outpass_system.core.enums import DayType, RequestStatus
from src.outpass_system.outpass_system.outpasses.memory_outpass_repository import InMemoryOutpassRepository


def _create(repo, created_by="4"):
    ts = datetime(2026, 2, 1, 10, 0)
    return repo.create(
        student_name="S",
        student_id="STU001",
        guardian_name="G",
        guardian_number="123",
        out_date=datetime(2026, 2, 2),
        in_date=datetime(2026, 2, 3),
        reason="Personal",
        day_type=DayType.WEEKDAY,
        created_by=created_by,
        created_at=ts,
    )


def test_create_assigns_ids_and_pending_status():
    repo = InMemoryOutpassRepository()
    assert _create(repo) == 1
    assert _create(repo) == 2

    stored = repo.get(request_id=1)
    assert stored.status == RequestStatus.PENDING
    assert stored.created_at == stored.updated_at


def test_get_missing_returns_none():
    assert InMemoryOutpassRepository().get(request_id=7) is None


def test_save_is_compare_and_set():
    repo = InMemoryOutpassRepository()
    rid = _create(repo)
    stored = repo.get(request_id=rid)
    moved = replace(stored, status=RequestStatus.MENTOR_APPROVED)

    assert repo.save(moved, expected_status=RequestStatus.PENDING) is True
    assert repo.save(replace(stored, status=RequestStatus.REJECTED), expected_status=RequestStatus.PENDING) is False
    assert repo.get(request_id=rid).status == RequestStatus.MENTOR_APPROVED


def test_save_unknown_record_fails():
    repo = InMemoryOutpassRepository()
    rid = _create(repo)
    ghost = replace(repo.get(request_id=rid), request_id=42)
    assert repo.save(ghost, expected_status=RequestStatus.PENDING) is False


def test_list_all_insertion_order_and_creator_filter():
    repo = InMemoryOutpassRepository()
    _create(repo, "4")
    _create(repo, "5")
    _create(repo, "4")

    assert [r.request_id for r in repo.list_all()] == [1, 2, 3]
    assert [r.request_id for r in repo.list_all(created_by="4")] == [1, 3]
    assert list(repo.list_all(created_by="nobody")) == []
