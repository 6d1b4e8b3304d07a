"""
Projection of resolved store hours into display strings and booking slots.

This is pure domain logic - the schedule data is handed in by the caller and
nothing here performs I/O.
"""

import logging
from dataclasses import replace
from datetime import date
from typing import Dict, List, Optional, Sequence, Union

import pendulum
from pendulum import DateTime

from .exceptions import StoreHoursError
from .models import (
    DaySummary,
    MealPeriod,
    Override,
    ResolvedHours,
    SelectedDateInfo,
    WeekdaySchedule,
    WeeklyHours,
)
from .override_resolver import group_by_weekday, resolve_day_hours
from .timezone_converter import (
    convert_civil_time,
    current_date_in_timezone,
    is_future_time,
    parse_civil_date,
    parse_civil_time,
)

logger = logging.getLogger(__name__)

HOME_TIMEZONE = "America/New_York"

SLOT_INTERVAL_MINUTES = 30
MINUTES_PER_DAY = 24 * 60
DEFAULT_WINDOW_DAYS = 4


def generate_time_slots(meal_period: Union[MealPeriod, str]) -> List[str]:
    """
    Enumerate every 30-minute boundary of a meal period as ``HH:MM``.

    The period's hour range is half-open, e.g. breakfast yields 06:00
    through 11:30.
    """
    start_hour, end_hour = MealPeriod(meal_period).hour_range

    return [
        f"{hour:02d}:{minute:02d}"
        for hour in range(start_hour, end_hour)
        for minute in range(0, 60, SLOT_INTERVAL_MINUTES)
    ]


def _to_minutes(value: str) -> int:
    hours, minutes = parse_civil_time(value)
    return hours * 60 + minutes


def is_slot_within_hours(slot: str, entry: ResolvedHours) -> bool:
    """
    Check whether a slot falls inside an open interval.

    An interval ending before it starts runs past midnight; both its end and
    any slot earlier than its start are moved forward one day before
    comparing. Spans longer than one day boundary are not supported.
    """
    if not entry.is_open:
        return False

    try:
        start = _to_minutes(entry.start_time)
        end = _to_minutes(entry.end_time)
        slot_minutes = _to_minutes(slot)
    except StoreHoursError as exc:
        logger.warning("Skipping unreadable store hours %s: %s", entry.id, exc)
        return False

    if end < start:
        end += MINUTES_PER_DAY
        if slot_minutes < start:
            slot_minutes += MINUTES_PER_DAY

    return start <= slot_minutes < end


def filter_available_slots(
    slots: Sequence[str],
    resolved_hours: Sequence[ResolvedHours],
    target: Union[str, date],
    timezone: str = HOME_TIMEZONE,
    now: Optional[DateTime] = None,
) -> List[str]:
    """
    Keep the slots that are inside opening hours and strictly in the future.

    Args:
        slots: Candidate ``HH:MM`` slots in the store's timezone
        resolved_hours: Effective hours for ``target``
        target: The date the slots are booked for
        timezone: Timezone the slots are expressed in
        now: Reference instant, defaults to the current time

    Returns:
        The surviving slots in their original order
    """
    open_hours = [entry for entry in resolved_hours if entry.is_open]
    if not open_hours:
        return []

    current = now if now is not None else pendulum.now()

    return [
        slot for slot in slots
        if any(is_slot_within_hours(slot, entry) for entry in open_hours)
        and is_future_time(slot, target, timezone, now=current)
    ]


def format_time_12h(value: str) -> str:
    """Format ``HH:MM`` as 12-hour time, e.g. ``"13:05"`` -> ``"1:05 PM"``."""
    hours, minutes = parse_civil_time(value)
    suffix = "PM" if hours >= 12 else "AM"
    return f"{hours % 12 or 12}:{minutes:02d} {suffix}"


def format_hours_range(start_time: str, end_time: str) -> str:
    return f"{format_time_12h(start_time)} - {format_time_12h(end_time)}"


def format_hours(entries: Sequence[ResolvedHours]) -> str:
    """
    Render all open intervals joined by commas, or an empty string.

    Open entries whose times cannot be read are left out with a warning.
    """
    ranges = []
    for entry in entries:
        if not entry.is_open:
            continue
        try:
            ranges.append(format_hours_range(entry.start_time, entry.end_time))
        except StoreHoursError as exc:
            logger.warning("Skipping unreadable store hours %s: %s", entry.id, exc)

    return ", ".join(ranges)


def rolling_window_start(
    base_date: Union[str, date],
    selected_date: Union[str, date],
    count: int = DEFAULT_WINDOW_DAYS,
) -> str:
    """
    Keep a date window anchored unless the selection falls outside it.

    Returns ``base_date`` while ``selected_date`` lies within
    ``[base_date, base_date + count)``, otherwise ``selected_date``.
    """
    base = parse_civil_date(base_date)
    selected = parse_civil_date(selected_date)

    if base <= selected < base.add(days=count):
        return base.to_date_string()
    return selected.to_date_string()


class StoreSchedule:
    """
    Weekly store hours plus date overrides, queried per calendar date.

    Raw hours are authored in ``home_timezone``. Every query re-resolves from
    the source lists; nothing is cached.
    """

    def __init__(
        self,
        weekly_hours: Sequence[WeeklyHours],
        overrides: Sequence[Override] = (),
        home_timezone: str = HOME_TIMEZONE,
    ):
        self.weekly_hours = list(weekly_hours)
        self.overrides = list(overrides)
        self.home_timezone = home_timezone

    def resolve(self, target: Union[str, date]) -> List[ResolvedHours]:
        """Get the effective hours for a date (override wins)."""
        return resolve_day_hours(self.weekly_hours, self.overrides, target)

    def is_open_on(self, target: Union[str, date]) -> bool:
        """Check if any resolved interval for the date is open."""
        return any(entry.is_open for entry in self.resolve(target))

    def open_hours(
        self,
        target: Union[str, date],
        timezone: Optional[str] = None,
    ) -> List[ResolvedHours]:
        """
        Get the open intervals for a date, optionally shown in another timezone.

        Conversion is skipped when ``timezone`` is None or the home timezone.
        """
        entries = [entry for entry in self.resolve(target) if entry.is_open]

        if timezone is None or timezone == self.home_timezone:
            return entries

        date_string = parse_civil_date(target).to_date_string()
        return [
            replace(
                entry,
                start_time=convert_civil_time(
                    entry.start_time, self.home_timezone, timezone, date_string
                ),
                end_time=convert_civil_time(
                    entry.end_time, self.home_timezone, timezone, date_string
                ),
            )
            for entry in entries
        ]

    def format_day_hours(
        self,
        target: Union[str, date],
        timezone: Optional[str] = None,
        closed_text: str = "Closed",
    ) -> str:
        """
        Format a date's opening hours, e.g. ``"9:00 AM - 5:00 PM"``.

        Args:
            target: The date to describe
            timezone: Display timezone, defaults to the home timezone
            closed_text: Returned when no interval is open

        Returns:
            Intervals joined by ``", "``, or ``closed_text``
        """
        return format_hours(self.open_hours(target, timezone)) or closed_text

    def available_slots(
        self,
        meal_period: Union[MealPeriod, str],
        target: Union[str, date],
        now: Optional[DateTime] = None,
    ) -> List[str]:
        """
        Get bookable slots for a meal period on a date.

        Slots stay in the home timezone; only those inside the resolved open
        hours and after ``now`` are returned.
        """
        return filter_available_slots(
            generate_time_slots(meal_period),
            self.resolve(target),
            target,
            timezone=self.home_timezone,
            now=now,
        )

    def selected_date_info(
        self,
        target: Union[str, date],
        display_timezone: Optional[str] = None,
    ) -> SelectedDateInfo:
        civil_date = parse_civil_date(target)
        entries = self.open_hours(civil_date, display_timezone)

        return SelectedDateInfo(
            day_name=civil_date.format("dddd", locale="en"),
            date_label=civil_date.format("MMM D, YYYY", locale="en"),
            is_open=bool(entries),
            entries=entries,
        )

    def upcoming_days(
        self,
        start_date: Union[str, date, None] = None,
        count: int = DEFAULT_WINDOW_DAYS,
        today: Union[str, date, None] = None,
    ) -> List[DaySummary]:
        """
        Summarize ``count`` consecutive days starting at ``start_date``.

        ``today`` defaults to the current date in the home timezone and is
        also the default start.
        """
        today_date = parse_civil_date(
            today if today is not None else current_date_in_timezone(self.home_timezone)
        )
        start = parse_civil_date(start_date) if start_date is not None else today_date

        days: List[DaySummary] = []
        for offset in range(count):
            current = start.add(days=offset)
            days.append(
                DaySummary(
                    date=current.to_date_string(),
                    day_of_month=current.day,
                    month_name=current.format("MMM", locale="en"),
                    day_name=current.format("ddd", locale="en"),
                    is_today=current == today_date,
                    is_open=self.is_open_on(current),
                )
            )

        return days

    def month_status(
        self,
        year: int,
        month: int,
        today: Union[str, date, None] = None,
    ) -> Dict[str, bool]:
        """
        Map each date of a month, from today onward, to its open status.

        Dates before ``today`` are left out.
        """
        today_date = parse_civil_date(
            today if today is not None else current_date_in_timezone(self.home_timezone)
        )
        first = pendulum.date(year, month, 1)

        status: Dict[str, bool] = {}
        for day in range(1, first.days_in_month + 1):
            current = first.add(days=day - 1)
            if current >= today_date:
                status[current.to_date_string()] = self.is_open_on(current)

        return status

    def weekly_schedule(self) -> List[WeekdaySchedule]:
        """Get the recurring hours grouped by weekday, Sunday first."""
        return group_by_weekday(self.weekly_hours)
