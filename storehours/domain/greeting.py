"""
Time-of-day greeting and timezone labels for display.
"""

import logging
from typing import Optional

import pendulum
from pendulum import DateTime

from .exceptions import TimezoneLookupError
from .timezone_converter import get_device_timezone, timestamp_to_civil_time

logger = logging.getLogger(__name__)

REFERENCE_TIMEZONE = "America/New_York"
REFERENCE_CITY = "NYC"
REFERENCE_LABEL = "New York"

# (start hour inclusive, end hour exclusive, template)
GREETING_BUCKETS = [
    (5, 10, "Good Morning, {city}!"),
    (10, 12, "Late Morning Vibes! {city}"),
    (12, 17, "Good Afternoon, {city}!"),
    (17, 21, "Good Evening, {city}!"),
]
NIGHT_GREETING = "Night Owl in {city}!"


def city_from_timezone(timezone: str) -> str:
    """
    Derive a city name from an IANA timezone identifier.

    ``"America/Los_Angeles"`` -> ``"Los Angeles"``.
    """
    try:
        city = timezone.split("/")[-1].replace("_", " ")
    except AttributeError:
        return "Unknown City"
    return city or "Unknown City"


def detect_device_timezone(device_timezone: Optional[str] = None) -> Optional[str]:
    """Get the explicit or detected device timezone, or None if detection fails."""
    if device_timezone:
        return device_timezone
    try:
        return get_device_timezone()
    except (RuntimeError, ValueError, KeyError, OSError) as exc:
        logger.warning("Could not detect device timezone: %s", exc)
        return None


def device_city_name(device_timezone: Optional[str] = None) -> str:
    """Get the device's city name, or ``"Your City"`` if it cannot be detected."""
    timezone = detect_device_timezone(device_timezone)
    if timezone is None:
        return "Your City"
    return city_from_timezone(timezone)


def display_timezone_label(
    use_device_timezone: bool,
    device_timezone: Optional[str] = None,
) -> str:
    """Label of the timezone hours are shown in."""
    if use_device_timezone:
        return device_city_name(device_timezone)
    return REFERENCE_LABEL


def greeting_for_hour(hour: int, city: str) -> str:
    for start, end, template in GREETING_BUCKETS:
        if start <= hour < end:
            return template.format(city=city)
    return NIGHT_GREETING.format(city=city)


def greeting(
    now: Optional[DateTime] = None,
    use_device_timezone: bool = False,
    device_timezone: Optional[str] = None,
) -> str:
    """
    Build the greeting for the current time of day.

    The hour is read in the store's reference timezone, or in the device
    timezone when ``use_device_timezone`` is set. An undetectable or unknown
    device timezone falls back to the reference hour.

    Args:
        now: Reference instant, defaults to the current time
        use_device_timezone: Greet in the device's timezone and city
        device_timezone: Explicit device timezone instead of detection

    Returns:
        e.g. ``"Good Morning, NYC!"``
    """
    current = now if now is not None else pendulum.now()
    instant = int(current.timestamp() * 1000)

    city = REFERENCE_CITY
    timezone = REFERENCE_TIMEZONE
    if use_device_timezone:
        city = device_city_name(device_timezone)
        timezone = detect_device_timezone(device_timezone) or REFERENCE_TIMEZONE

    try:
        civil = timestamp_to_civil_time(instant, timezone)
    except TimezoneLookupError as exc:
        logger.warning("Falling back to %s for greeting: %s", REFERENCE_TIMEZONE, exc)
        civil = timestamp_to_civil_time(instant, REFERENCE_TIMEZONE)

    return greeting_for_hour(int(civil.split(":")[0]), city)
