"""
Civil-time conversion between named timezones.

Two layers live here. The parsers, ``time_to_timestamp`` and
``timestamp_to_civil_time`` are strict and raise ``StoreHoursError``
subclasses on bad input. ``convert_civil_time``, ``is_future_time`` and
``current_date_in_timezone`` never raise: they log a warning and fall back
to a safe value instead.
"""

from __future__ import annotations

import logging
import math
from datetime import date, datetime
from typing import Optional, Tuple, Union

import pendulum
from pendulum import Date, DateTime

from .exceptions import (
    InvalidTimeFormat,
    InvalidTimeRange,
    StoreHoursError,
    TimezoneLookupError,
)

logger = logging.getLogger(__name__)

MS_PER_HOUR = 60 * 60 * 1000


def parse_civil_time(value: str) -> Tuple[int, int]:
    """
    Parse an ``HH:MM`` string into hour and minute.

    A trailing ``:SS`` component is tolerated and ignored.

    Raises:
        InvalidTimeFormat: If the fields are missing or non-numeric
        InvalidTimeRange: If hour is outside 0-23 or minute outside 0-59
    """
    if not isinstance(value, str):
        raise InvalidTimeFormat(f"Invalid time format: {value!r}")

    parts = value.strip().split(":")
    if len(parts) not in (2, 3):
        raise InvalidTimeFormat(f"Invalid time format: {value!r}")

    try:
        hours = int(parts[0])
        minutes = int(parts[1])
    except ValueError as exc:
        raise InvalidTimeFormat(f"Invalid time format: {value!r}") from exc

    if not 0 <= hours <= 23 or not 0 <= minutes <= 59:
        raise InvalidTimeRange(f"Invalid time values: {value!r}")

    return hours, minutes


def parse_civil_date(value: Union[str, date]) -> Date:
    """
    Parse a ``YYYY-MM-DD`` string (or pass through a date) into a pendulum Date.

    Raises:
        InvalidTimeFormat: If the fields are non-numeric or the date does not exist
    """
    if isinstance(value, datetime):
        return pendulum.date(value.year, value.month, value.day)
    if isinstance(value, date):
        return pendulum.date(value.year, value.month, value.day)
    if not isinstance(value, str):
        raise InvalidTimeFormat(f"Invalid date format: {value!r}")

    parts = value.strip().split("-")
    if len(parts) != 3:
        raise InvalidTimeFormat(f"Invalid date format: {value!r}")

    try:
        year, month, day = (int(part) for part in parts)
        return pendulum.date(year, month, day)
    except ValueError as exc:
        raise InvalidTimeFormat(f"Invalid date format: {value!r}") from exc


def _resolve_timezone(name: str):
    if not isinstance(name, str) or not name:
        raise TimezoneLookupError(f"Invalid timezone: {name!r}")
    try:
        return pendulum.timezone(name)
    except (ValueError, KeyError) as exc:
        raise TimezoneLookupError(f"Unknown timezone: {name!r}") from exc


def timezone_offset_ms(timezone: str, civil: datetime) -> int:
    """
    Return the UTC offset of ``timezone`` in milliseconds at a civil time.

    The offset is looked up for that exact wall-clock date and time, so DST
    rules are applied per date.
    """
    tz = _resolve_timezone(timezone)
    local = pendulum.datetime(
        civil.year, civil.month, civil.day,
        civil.hour, civil.minute,
        tz=tz,
    )
    return local.offset * 1000


def _utc_epoch_ms(civil: datetime) -> int:
    """Milliseconds since epoch when the civil fields are read as UTC."""
    as_utc = pendulum.datetime(
        civil.year, civil.month, civil.day,
        civil.hour, civil.minute,
        tz="UTC",
    )
    return as_utc.int_timestamp * 1000


def _instant_ms(moment: datetime) -> int:
    return int(moment.timestamp() * 1000)


def _offset_at_instant_ms(timezone: str, instant: int) -> int:
    """UTC offset of ``timezone`` in milliseconds at an absolute instant."""
    tz = _resolve_timezone(timezone)
    return pendulum.from_timestamp(instant / 1000, tz=tz).offset * 1000


def time_to_timestamp(time: str, date: Union[str, date], timezone: str) -> int:
    """
    Convert a civil time on a date in ``timezone`` to an absolute instant.

    Args:
        time: Time of day as ``HH:MM``
        date: Calendar date as ``YYYY-MM-DD``
        timezone: IANA timezone identifier

    Returns:
        Milliseconds since the Unix epoch

    Raises:
        InvalidTimeFormat: If time or date fields are non-numeric
        InvalidTimeRange: If hour or minute is out of range
        TimezoneLookupError: If the timezone is unknown
    """
    hours, minutes = parse_civil_time(time)
    civil_date = parse_civil_date(date)

    naive = pendulum.naive(civil_date.year, civil_date.month, civil_date.day, hours, minutes)
    offset = timezone_offset_ms(timezone, naive)

    return _utc_epoch_ms(naive) - offset


def timestamp_to_civil_time(instant: int, timezone: str) -> str:
    """Render an instant (ms since epoch) as ``HH:MM`` wall-clock time in ``timezone``."""
    tz = _resolve_timezone(timezone)
    zoned = pendulum.from_timestamp(instant / 1000, tz=tz)
    return zoned.format("HH:mm")


def convert_civil_time(time: str, from_tz: str, to_tz: str, date: Union[str, date]) -> str:
    """
    Convert a wall-clock time on ``date`` from one timezone to another.

    Only the whole-hour part of the offset difference is applied and the
    source minutes are kept, wrapping the hour modulo 24 without tracking a
    change of day. Zones whose offsets differ by a fractional hour
    (e.g. Asia/Kolkata) therefore convert lossily. This approximation is the
    established contract for displayed store hours.

    Never raises: on failure a warning is logged and ``time`` is returned
    unchanged.
    """
    if from_tz == to_tz:
        return time

    try:
        hours, minutes = parse_civil_time(time)
        instant = time_to_timestamp(time, date, from_tz)

        # Both offsets at the same instant
        from_offset = _offset_at_instant_ms(from_tz, instant)
        to_offset = _offset_at_instant_ms(to_tz, instant)
    except StoreHoursError as exc:
        logger.warning("Timezone conversion failed: %s", exc)
        return time

    offset_diff_hours = (to_offset - from_offset) / MS_PER_HOUR
    new_hours = math.floor(hours + offset_diff_hours) % 24

    return f"{new_hours:02d}:{minutes:02d}"


def is_future_time(
    time: str,
    date: Union[str, date],
    timezone: str,
    now: Optional[DateTime] = None,
) -> bool:
    """
    Check whether a civil time on a date is strictly after ``now``.

    Returns False instead of raising when the time cannot be evaluated.
    """
    try:
        timestamp = time_to_timestamp(time, date, timezone)
    except StoreHoursError as exc:
        logger.warning("Time comparison failed: %s", exc)
        return False

    current = now if now is not None else pendulum.now()
    return timestamp > _instant_ms(current)


def current_date_in_timezone(timezone: str, now: Optional[DateTime] = None) -> str:
    """
    Get today's date as seen from ``timezone`` in ``YYYY-MM-DD`` format.

    Falls back to the device's local date when the timezone is unknown.
    """
    current = pendulum.instance(now if now is not None else pendulum.now())

    try:
        tz = _resolve_timezone(timezone)
    except TimezoneLookupError as exc:
        logger.warning("Failed to get current date in timezone: %s", exc)
        return current.in_timezone(pendulum.local_timezone()).to_date_string()

    return current.in_timezone(tz).to_date_string()


def get_device_timezone() -> str:
    """Get the IANA name of the device's local timezone."""
    return pendulum.local_timezone().name
