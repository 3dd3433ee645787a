from enum import StrEnum
from enum import auto


class UpperCaseStrEnum(StrEnum):
    """A StrEnum whose auto() values are the upper-cased member names."""

    @staticmethod
    def _generate_next_value_(
        name: str,
        start: int,
        count: int,
        last_values: list[str],
    ) -> str:
        return name.upper()


class TimeUnit(UpperCaseStrEnum):
    """Unit attached to a numeric duration value."""

    MILLIS = auto()
    SECONDS = auto()
    MINUTES = auto()
    HOURS = auto()
    DAYS = auto()


class WaitStrategy(UpperCaseStrEnum):
    """Pacing strategy controlling how long to sleep around each condition check."""

    LINEAR = auto()
    EXPONENTIAL_BACKOFF = auto()
    AGGRESSIVE = auto()
    CONSERVATIVE = auto()
    ADAPTIVE = auto()
