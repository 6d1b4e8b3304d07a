"""
Domain layer - Pure business logic without external dependencies.
"""

from .models import MealPeriod, Override, OverrideKey, ResolvedHours, WeeklyHours
from .override_resolver import resolve_day_hours
from .slot_projector import StoreSchedule

__all__ = [
    "MealPeriod",
    "Override",
    "OverrideKey",
    "ResolvedHours",
    "WeeklyHours",
    "resolve_day_hours",
    "StoreSchedule",
]
