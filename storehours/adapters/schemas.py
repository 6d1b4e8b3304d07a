"""
Validation of store-hours payloads as returned by the store REST API.
"""

from typing import Any, List

from pydantic import BaseModel, TypeAdapter, ValidationError, field_validator

from ..domain.exceptions import StoreAPIError
from ..domain.models import Override, WeeklyHours


class _HoursPayload(BaseModel):
    """Fields shared by weekly hours and overrides."""
    id: str
    is_open: bool
    start_time: str = ""
    end_time: str = ""

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, value: Any) -> str:
        """Accept numeric ids from the backend."""
        return str(value)

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def empty_when_null(cls, value: Any) -> Any:
        """Closed entries may send null instead of an empty string."""
        return "" if value is None else value


class StoreTimePayload(_HoursPayload):
    """One element of ``GET /store-times/``."""
    day_of_week: int

    @field_validator("day_of_week")
    @classmethod
    def validate_day_of_week(cls, v: int) -> int:
        """Validate weekday is between 0 (Sunday) and 6 (Saturday)."""
        if not 0 <= v <= 6:
            raise ValueError(f"day_of_week must be between 0 and 6, got {v}")
        return v

    def to_domain(self) -> WeeklyHours:
        return WeeklyHours(
            id=self.id,
            day_of_week=self.day_of_week,
            is_open=self.is_open,
            start_time=self.start_time,
            end_time=self.end_time,
        )


class StoreOverridePayload(_HoursPayload):
    """One element of ``GET /store-overrides/``."""
    day: int
    month: int

    @field_validator("day")
    @classmethod
    def validate_day(cls, v: int) -> int:
        if not 1 <= v <= 31:
            raise ValueError(f"day must be between 1 and 31, got {v}")
        return v

    @field_validator("month")
    @classmethod
    def validate_month(cls, v: int) -> int:
        if not 1 <= v <= 12:
            raise ValueError(f"month must be between 1 and 12, got {v}")
        return v

    def to_domain(self) -> Override:
        return Override(
            id=self.id,
            day=self.day,
            month=self.month,
            is_open=self.is_open,
            start_time=self.start_time,
            end_time=self.end_time,
        )


_store_times_adapter = TypeAdapter(List[StoreTimePayload])
_overrides_adapter = TypeAdapter(List[StoreOverridePayload])


def parse_store_times(data: Any) -> List[WeeklyHours]:
    """
    Parse a JSON array of weekly hours into domain models.

    Raises:
        StoreAPIError: If the payload does not match the expected shape
    """
    try:
        payloads = _store_times_adapter.validate_python(data)
    except ValidationError as exc:
        raise StoreAPIError(f"Invalid store times payload: {exc}") from exc
    return [payload.to_domain() for payload in payloads]


def parse_store_overrides(data: Any) -> List[Override]:
    """
    Parse a JSON array of overrides into domain models, keeping their order.

    Raises:
        StoreAPIError: If the payload does not match the expected shape
    """
    try:
        payloads = _overrides_adapter.validate_python(data)
    except ValidationError as exc:
        raise StoreAPIError(f"Invalid store overrides payload: {exc}") from exc
    return [payload.to_domain() for payload in payloads]
