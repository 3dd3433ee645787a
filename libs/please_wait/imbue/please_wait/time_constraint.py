from datetime import timedelta
from typing import Annotated

from pydantic import Field

from imbue.please_wait.errors import InvalidDurationError
from imbue.please_wait.errors import UnsupportedTimeUnitError
from imbue.please_wait.primitives import TimeUnit

DurationLike = timedelta | float

NonNegativeDuration = Annotated[timedelta, Field(ge=timedelta(0))]


def to_duration(value: float, unit: TimeUnit) -> timedelta:
    """Convert a numeric value in the given unit into a timedelta.

    Negative and fractional values are allowed; the result is rounded to timedelta's
    microsecond resolution. Any unit outside TimeUnit raises UnsupportedTimeUnitError.
    """
    match unit:
        case TimeUnit.MILLIS:
            return timedelta(milliseconds=value)
        case TimeUnit.SECONDS:
            return timedelta(seconds=value)
        case TimeUnit.MINUTES:
            return timedelta(minutes=value)
        case TimeUnit.HOURS:
            return timedelta(hours=value)
        case TimeUnit.DAYS:
            return timedelta(days=value)
        case _:
            raise UnsupportedTimeUnitError(unit)


def coerce_duration(value: DurationLike, unit: TimeUnit = TimeUnit.SECONDS) -> timedelta:
    """Accept either a timedelta (unit is ignored) or a number in the given unit."""
    if isinstance(value, timedelta):
        return value
    return to_duration(value, unit)


def coerce_non_negative_duration(name: str, value: DurationLike, unit: TimeUnit = TimeUnit.SECONDS) -> timedelta:
    duration = coerce_duration(value, unit)
    if duration < timedelta(0):
        raise InvalidDurationError(name, duration)
    return duration
