from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from src.outpass_system.outpass_system.calendars.weekday_calendar import WeekdayCalendar
from src.outpass_system.outpass_system.core.enums import Role
from src.outpass_system.outpass_system.outpasses.memory_outpass_repository import InMemoryOutpassRepository
from src.outpass_system.outpass_system.outpasses.model import Actor
from src.outpass_system.outpass_system.outpasses.service import NewOutpass, OutpassService
from src.outpass_system.outpass_system.outpasses.views import OutpassQueryService

MONDAY = "2026-02-02"
WEDNESDAY = "2026-02-04"
SATURDAY = "2026-02-07"
SUNDAY = "2026-02-08"


class FakeClock:
    def __init__(self, start: datetime = datetime(2026, 2, 1, 10, 0, 0)):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


_UNSET = object()


def new_outpass(out_date=MONDAY, in_date=_UNSET, **overrides) -> NewOutpass:
    fields = dict(
        student_name="Student Name",
        student_id="STU001",
        guardian_name="Parent User",
        guardian_number="9876543210",
        out_date=out_date,
        in_date=out_date if in_date is _UNSET else in_date,
        reason="Family function",
    )
    fields.update(overrides)
    return NewOutpass(**fields)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def repo():
    return InMemoryOutpassRepository()


@pytest.fixture
def service(repo, clock):
    return OutpassService(repo, WeekdayCalendar(), clock=clock)


@pytest.fixture
def queries(service):
    return OutpassQueryService(service)


@pytest.fixture
def parent():
    return Actor(actor_id="4", role=Role.PARENT)


@pytest.fixture
def other_parent():
    return Actor(actor_id="5", role=Role.PARENT)


@pytest.fixture
def mentor():
    return Actor(actor_id="2", role=Role.MENTOR)


@pytest.fixture
def warden():
    return Actor(actor_id="3", role=Role.WARDEN)


@pytest.fixture
def admin():
    return Actor(actor_id="1", role=Role.ADMIN)
