"""
Application service that loads store data and builds a schedule.

The service fetches weekly hours and overrides through a data source adapter
and hands them to the domain-level ``StoreSchedule``. Depending on a protocol
keeps the CLI thin and lets tests plug in a stub source.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Protocol

from pendulum import DateTime

from ..domain.greeting import detect_device_timezone, display_timezone_label, greeting
from ..domain.models import MealPeriod, Override, WeeklyHours
from ..domain.slot_projector import HOME_TIMEZONE, StoreSchedule

logger = logging.getLogger(__name__)


class StoreDataSourceProtocol(Protocol):
    """Protocol describing the store data needed by the service."""

    def get_store_times(self) -> List[WeeklyHours]:
        """Return the recurring weekly hours."""

    def get_store_overrides(self) -> List[Override]:
        """Return the date overrides in source order."""


class StoreHoursService:
    """
    Orchestrates store data retrieval and schedule queries.

    The display-timezone preference is passed in once and used for every
    display query, so there is a single owner of that setting.
    """

    def __init__(
        self,
        source: StoreDataSourceProtocol,
        home_timezone: str = HOME_TIMEZONE,
        use_device_timezone: bool = False,
        device_timezone: Optional[str] = None,
    ) -> None:
        self._source = source
        self.home_timezone = home_timezone
        self.use_device_timezone = use_device_timezone
        self._device_timezone = device_timezone

    def load_schedule(self) -> StoreSchedule:
        """Fetch the current store data and build a fresh schedule."""
        weekly_hours = self._source.get_store_times()
        overrides = self._source.get_store_overrides()
        logger.info(
            "Loaded %d weekly entries and %d overrides",
            len(weekly_hours),
            len(overrides),
        )
        return StoreSchedule(weekly_hours, overrides, home_timezone=self.home_timezone)

    @property
    def display_timezone(self) -> str:
        """Timezone hours are shown in, following the preference."""
        if not self.use_device_timezone:
            return self.home_timezone
        return detect_device_timezone(self._device_timezone) or self.home_timezone

    def display_label(self) -> str:
        return display_timezone_label(self.use_device_timezone, self._device_timezone)

    def day_hours(self, schedule: StoreSchedule, target: str) -> str:
        """Formatted hours of a date in the display timezone."""
        return schedule.format_day_hours(target, timezone=self.display_timezone)

    def slots(
        self,
        schedule: StoreSchedule,
        meal_period: MealPeriod,
        target: str,
        now: Optional[DateTime] = None,
    ) -> List[str]:
        """Bookable slots for a meal period, always in the home timezone."""
        return schedule.available_slots(meal_period, target, now=now)

    def greeting(self, now: Optional[DateTime] = None) -> str:
        return greeting(
            now=now,
            use_device_timezone=self.use_device_timezone,
            device_timezone=self._device_timezone,
        )
