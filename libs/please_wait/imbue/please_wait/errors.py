from datetime import timedelta


class PleaseWaitError(Exception):
    """Base exception for all please_wait errors."""


class ConditionTimeoutError(PleaseWaitError, TimeoutError):
    """Raised when a condition is not fulfilled before the timeout elapses."""

    def __init__(self, timeout: timedelta, alias: str | None = None) -> None:
        self.timeout = timeout
        self.alias = alias
        if alias:
            message = f"Condition with alias '{alias}' was not fulfilled within {timeout}."
        else:
            message = f"Condition was not fulfilled within {timeout}."
        super().__init__(message)


class WaitCancelledError(PleaseWaitError):
    """Raised when the cancellation event fires while waiting for a condition."""

    def __init__(self, alias: str | None = None) -> None:
        self.alias = alias
        super().__init__(f"Wait for {alias or 'condition'} was cancelled.")


class WaitConfigurationError(PleaseWaitError, ValueError):
    """Base for misconfiguration errors.

    These always propagate out of a wait, even when exceptions are ignored.
    """


class UnsupportedTimeUnitError(WaitConfigurationError):
    """Raised when a duration is given in a unit that cannot be converted."""

    def __init__(self, unit: object) -> None:
        self.unit = unit
        super().__init__(f"Unsupported time unit: {unit!r}")


class MissingLoggerError(WaitConfigurationError):
    """Raised when None is supplied where a logger sink is required.

    Use NullWaitLogger (or reset the global defaults) to disable logging instead.
    """


class InvalidDurationError(WaitConfigurationError):
    """Raised when a timeout, poll delay or poll interval is negative."""

    def __init__(self, name: str, value: timedelta) -> None:
        self.name = name
        self.value = value
        super().__init__(f"{name} must be >= 0, got {value}")
