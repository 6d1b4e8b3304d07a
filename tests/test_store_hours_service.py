"""
Tests for the StoreHoursService orchestration layer.
"""

from typing import List

import pendulum

from storehours.domain.models import MealPeriod, Override, WeeklyHours
from storehours.services.store_hours_service import StoreHoursService

NY = "America/New_York"


class StubStoreSource:
    """Minimal stub matching StoreDataSourceProtocol."""

    def __init__(self, weekly_hours: List[WeeklyHours], overrides: List[Override]):
        self._weekly_hours = weekly_hours
        self._overrides = overrides
        self.calls = 0

    def get_store_times(self) -> List[WeeklyHours]:
        self.calls += 1
        return self._weekly_hours

    def get_store_overrides(self) -> List[Override]:
        return self._overrides


def _build_service(**kwargs) -> StoreHoursService:
    source = StubStoreSource(
        weekly_hours=[
            WeeklyHours(id="1", day_of_week=1, is_open=True, start_time="09:00", end_time="17:00"),
        ],
        overrides=[Override(id="o", day=5, month=8, is_open=True, start_time="18:00", end_time="23:00")],
    )
    return StoreHoursService(source=source, **kwargs)


def test_load_schedule_fetches_fresh_data():
    """Every load goes back to the source."""
    service = _build_service()

    schedule = service.load_schedule()
    service.load_schedule()

    assert schedule.home_timezone == NY
    assert service._source.calls == 2
    assert schedule.is_open_on("2025-08-04")
    assert schedule.is_open_on("2025-08-05")  # Tuesday opened by override


def test_store_timezone_preference():
    service = _build_service()
    schedule = service.load_schedule()

    assert service.display_timezone == NY
    assert service.display_label() == "New York"
    assert service.day_hours(schedule, "2025-08-04") == "9:00 AM - 5:00 PM"


def test_device_timezone_preference():
    service = _build_service(use_device_timezone=True, device_timezone="Europe/London")
    schedule = service.load_schedule()

    assert service.display_timezone == "Europe/London"
    assert service.display_label() == "London"
    assert service.day_hours(schedule, "2025-08-04") == "2:00 PM - 10:00 PM"


def test_slots_stay_in_store_time():
    """The display preference never changes the bookable slots."""
    service = _build_service(use_device_timezone=True, device_timezone="Asia/Tokyo")
    schedule = service.load_schedule()
    now = pendulum.datetime(2025, 8, 1, tz=NY)

    slots = service.slots(schedule, MealPeriod.DINNER, "2025-08-05", now=now)

    assert slots[0] == "18:00"
    assert slots[-1] == "22:30"
    assert len(slots) == 10


def test_greeting_follows_preference():
    now = pendulum.datetime(2025, 8, 4, 8, 0, tz=NY)

    assert _build_service().greeting(now=now) == "Good Morning, NYC!"
    assert (
        _build_service(use_device_timezone=True, device_timezone="Europe/London").greeting(now=now)
        == "Good Afternoon, London!"
    )
