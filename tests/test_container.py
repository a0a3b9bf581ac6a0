import pytest

from src.outpass_system.outpass_system.calendars.holiday_calendar import HolidayCalendar
from src.outpass_system.outpass_system.calendars.weekday_calendar import WeekdayCalendar
from src.outpass_system.outpass_system.container import build_container
from src.outpass_system.outpass_system.outpasses.memory_outpass_repository import InMemoryOutpassRepository


def test_memory_backend_is_default():
    container = build_container()
    assert container.conn is None
    assert isinstance(container.outpasses_repo, InMemoryOutpassRepository)
    assert type(container.calendar) is WeekdayCalendar


def test_holidays_select_holiday_calendar():
    container = build_container(holidays="2026-01-26")
    assert isinstance(container.calendar, HolidayCalendar)


def test_unknown_backend_is_rejected():
    with pytest.raises(ValueError):
        build_container(storage_backend="redis")


def test_mysql_backend_needs_db_config():
    with pytest.raises(ValueError):
        build_container(storage_backend="mysql")
