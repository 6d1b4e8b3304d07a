"""
Domain models for weekly store hours, date overrides and derived views.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import List, Tuple


DAY_NAMES = [
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
]


def day_of_week(value: date) -> int:
    """Return the weekday of a date with Sunday as 0 and Saturday as 6."""
    return value.isoweekday() % 7


def day_name(dow: int) -> str:
    """Get the English weekday name for a Sunday-first weekday number."""
    if 0 <= dow < len(DAY_NAMES):
        return DAY_NAMES[dow]
    return "Unknown"


@dataclass(frozen=True)
class WeeklyHours:
    """
    One recurring opening rule for a weekday.

    Times are ``HH:MM`` in the store's home timezone. Closed entries may
    carry empty strings for both times.
    """
    id: str
    day_of_week: int  # 0=Sunday, 6=Saturday
    is_open: bool
    start_time: str = ""
    end_time: str = ""


@dataclass(frozen=True)
class OverrideKey:
    """
    Partial date used to match overrides.

    Only day and month take part in equality, so an override recurs every
    year on the same calendar day.
    """
    day: int
    month: int  # 1-indexed

    @classmethod
    def for_date(cls, value: date) -> "OverrideKey":
        return cls(day=value.day, month=value.month)


@dataclass(frozen=True)
class Override:
    """A date-specific exception that fully replaces the weekday's hours."""
    id: str
    day: int
    month: int
    is_open: bool
    start_time: str = ""
    end_time: str = ""

    @property
    def key(self) -> OverrideKey:
        return OverrideKey(day=self.day, month=self.month)


@dataclass(frozen=True)
class ResolvedHours:
    """One effective opening interval for a concrete calendar date."""
    id: str
    day_of_week: int
    is_open: bool
    start_time: str
    end_time: str

    @classmethod
    def from_weekly(cls, entry: WeeklyHours) -> "ResolvedHours":
        return cls(
            id=entry.id,
            day_of_week=entry.day_of_week,
            is_open=entry.is_open,
            start_time=entry.start_time,
            end_time=entry.end_time,
        )

    @classmethod
    def from_override(cls, override: Override, dow: int) -> "ResolvedHours":
        return cls(
            id=override.id,
            day_of_week=dow,
            is_open=override.is_open,
            start_time=override.start_time,
            end_time=override.end_time,
        )


class MealPeriod(str, Enum):
    """Meal periods with fixed half-open hour ranges in the home timezone."""
    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"

    @property
    def hour_range(self) -> Tuple[int, int]:
        return _MEAL_PERIOD_HOURS[self]


_MEAL_PERIOD_HOURS = {
    MealPeriod.BREAKFAST: (6, 12),
    MealPeriod.LUNCH: (12, 18),
    MealPeriod.DINNER: (18, 24),
}


@dataclass(frozen=True)
class DaySummary:
    """Open/closed summary of one day in a rolling date window."""
    date: str  # YYYY-MM-DD
    day_of_month: int
    month_name: str  # e.g. "Aug"
    day_name: str  # e.g. "Mon"
    is_today: bool
    is_open: bool


@dataclass(frozen=True)
class WeekdaySchedule:
    """All recurring entries of one weekday."""
    day_of_week: int
    day_name: str
    entries: List[WeeklyHours] = field(default_factory=list)
    is_open: bool = False


@dataclass(frozen=True)
class SelectedDateInfo:
    """
    Display details for a selected date.

    ``entries`` holds only open intervals, already converted into the
    display timezone.
    """
    day_name: str  # e.g. "Monday"
    date_label: str  # e.g. "Aug 4, 2025"
    is_open: bool
    entries: List[ResolvedHours] = field(default_factory=list)
