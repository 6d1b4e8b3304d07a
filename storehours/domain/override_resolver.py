"""
Resolution of the effective opening hours for one calendar date.

An override matching the date's day and month takes absolute precedence
over the recurring weekly hours.
"""

from datetime import date
from typing import Dict, List, Optional, Sequence, Union

from .models import (
    Override,
    OverrideKey,
    ResolvedHours,
    WeekdaySchedule,
    WeeklyHours,
    day_name,
    day_of_week,
)
from .timezone_converter import parse_civil_date


def find_override(
    overrides: Sequence[Override],
    target: Union[str, date],
) -> Optional[Override]:
    """
    Find the override for a date, ignoring the year.

    Overrides are scanned in order and the first match wins, so later
    entries sharing the same day and month are never used.
    """
    key = OverrideKey.for_date(parse_civil_date(target))

    for override in overrides:
        if override.key == key:
            return override
    return None


def resolve_day_hours(
    weekly_hours: Sequence[WeeklyHours],
    overrides: Sequence[Override],
    target: Union[str, date],
) -> List[ResolvedHours]:
    """
    Get the authoritative opening intervals for one calendar date.

    Args:
        weekly_hours: Recurring rules, possibly several per weekday
        overrides: Date exceptions in their original order
        target: Calendar date as ``YYYY-MM-DD`` or a date object

    Returns:
        A single entry built from the matching override, or every weekly
        entry for the date's weekday. Empty when nothing applies.
    """
    civil_date = parse_civil_date(target)
    dow = day_of_week(civil_date)

    override = find_override(overrides, civil_date)
    if override is not None:
        return [ResolvedHours.from_override(override, dow)]

    return [
        ResolvedHours.from_weekly(entry)
        for entry in weekly_hours
        if entry.day_of_week == dow
    ]


def group_by_weekday(weekly_hours: Sequence[WeeklyHours]) -> List[WeekdaySchedule]:
    """
    Group recurring entries by weekday, sorted Sunday first.

    Only weekdays that have at least one entry are returned. A weekday is
    open when any of its entries is open.
    """
    grouped: Dict[int, List[WeeklyHours]] = {}

    for entry in weekly_hours:
        grouped.setdefault(entry.day_of_week, []).append(entry)

    return [
        WeekdaySchedule(
            day_of_week=dow,
            day_name=day_name(dow),
            entries=entries,
            is_open=any(entry.is_open for entry in entries),
        )
        for dow, entries in sorted(grouped.items())
    ]
