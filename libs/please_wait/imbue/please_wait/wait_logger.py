from abc import ABC
from abc import abstractmethod
from datetime import timedelta
from typing import Final

from loguru import logger

_LOG_PREFIX: Final[str] = "[please-wait]"


class WaitLogger(ABC):
    """Sink notified by the polling engine as a wait progresses.

    Exceptions raised by a sink are not caught by the engine; they abort the wait.
    """

    @abstractmethod
    def on_wait_start(self, condition: str, timeout: timedelta) -> None: ...

    @abstractmethod
    def on_condition_check(self, condition: str, succeeded: bool, elapsed: timedelta) -> None: ...

    @abstractmethod
    def on_wait_success(self, condition: str, elapsed: timedelta, checks: int) -> None: ...

    @abstractmethod
    def on_timeout(self, condition: str, timeout: timedelta) -> None: ...

    @abstractmethod
    def on_cancellation(self, condition: str) -> None: ...


class NullWaitLogger(WaitLogger):
    """Sink that discards every event. Used when no logger is configured."""

    def on_wait_start(self, condition: str, timeout: timedelta) -> None:
        pass

    def on_condition_check(self, condition: str, succeeded: bool, elapsed: timedelta) -> None:
        pass

    def on_wait_success(self, condition: str, elapsed: timedelta, checks: int) -> None:
        pass

    def on_timeout(self, condition: str, timeout: timedelta) -> None:
        pass

    def on_cancellation(self, condition: str) -> None:
        pass


NULL_WAIT_LOGGER: Final[WaitLogger] = NullWaitLogger()


def _format_ms(duration: timedelta) -> str:
    return f"{duration / timedelta(milliseconds=1):.0f}ms"


class LoguruWaitLogger(WaitLogger):
    """Sink that forwards wait events to loguru.

    Checks and lifecycle events are logged at the configured level; timeouts and
    cancellations at WARNING so they stand out in normal output.
    """

    def __init__(self, level: str = "DEBUG") -> None:
        self.level = level.upper()

    def on_wait_start(self, condition: str, timeout: timedelta) -> None:
        logger.log(self.level, "{} Starting wait: {} (timeout: {})", _LOG_PREFIX, condition, _format_ms(timeout))

    def on_condition_check(self, condition: str, succeeded: bool, elapsed: timedelta) -> None:
        status = "passed" if succeeded else "failed"
        logger.log(
            self.level,
            "{} Condition check {}: {} (elapsed: {})",
            _LOG_PREFIX,
            status,
            condition,
            _format_ms(elapsed),
        )

    def on_wait_success(self, condition: str, elapsed: timedelta, checks: int) -> None:
        logger.log(
            self.level,
            "{} Success: {} completed in {} ({} checks)",
            _LOG_PREFIX,
            condition,
            _format_ms(elapsed),
            checks,
        )

    def on_timeout(self, condition: str, timeout: timedelta) -> None:
        logger.warning("{} Timeout: {} exceeded {}", _LOG_PREFIX, condition, _format_ms(timeout))

    def on_cancellation(self, condition: str) -> None:
        logger.warning("{} Cancelled: {}", _LOG_PREFIX, condition)
