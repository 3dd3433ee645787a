from abc import ABC
from abc import abstractmethod
from collections.abc import Callable
from collections.abc import Sequence
from typing import Any
from typing import Self

from imbue.please_wait.errors import MissingLoggerError
from imbue.please_wait.primitives import TimeUnit
from imbue.please_wait.primitives import WaitStrategy
from imbue.please_wait.time_constraint import DurationLike
from imbue.please_wait.time_constraint import coerce_non_negative_duration
from imbue.please_wait.wait_logger import WaitLogger


class WaitSettingsBuilder(ABC):
    """Fluent setters shared by the per-call wait, the reusable config and the global defaults.

    Subclasses decide where a setting lands by implementing _apply(). Every setter
    returns the builder so calls can be chained.
    """

    @abstractmethod
    def _apply(self, **updates: Any) -> None: ...

    def at_most(self, value: DurationLike, unit: TimeUnit = TimeUnit.SECONDS) -> Self:
        """Set the maximum time to wait for the condition."""
        self._apply(timeout=coerce_non_negative_duration("timeout", value, unit))
        return self

    def timeout(self, value: DurationLike, unit: TimeUnit = TimeUnit.SECONDS) -> Self:
        return self.at_most(value, unit)

    def poll_delay(self, value: DurationLike, unit: TimeUnit = TimeUnit.SECONDS) -> Self:
        """Set the pause before each condition check."""
        self._apply(poll_delay=coerce_non_negative_duration("poll_delay", value, unit))
        return self

    def poll_interval(self, value: DurationLike, unit: TimeUnit = TimeUnit.SECONDS) -> Self:
        """Set the pause after each condition check."""
        self._apply(poll_interval=coerce_non_negative_duration("poll_interval", value, unit))
        return self

    def polling(self, delay: DurationLike, interval: DurationLike, unit: TimeUnit = TimeUnit.SECONDS) -> Self:
        return self.poll_delay(delay, unit).poll_interval(interval, unit)

    def ignore_exceptions(self, is_ignoring: bool = True) -> Self:
        self._apply(ignore_exceptions=is_ignoring)
        return self

    def fail_silently(self, is_silent: bool = True) -> Self:
        self._apply(fail_silently=is_silent)
        return self

    def exception_handling(self, ignore_exceptions: bool, fail_silently: bool) -> Self:
        return self.ignore_exceptions(ignore_exceptions).fail_silently(fail_silently)

    def prereq(self, action: Callable[[], object] | None) -> Self:
        """Run a single action before every condition check. None clears the setting."""
        return self.prereqs(None if action is None else [action])

    def prereqs(self, actions: Sequence[Callable[[], object]] | None) -> Self:
        """Run these actions, in order, before every condition check. None clears the setting."""
        self._apply(prerequisites=None if actions is None else tuple(actions))
        return self

    def alias(self, name: str | None) -> Self:
        """Name the condition in log messages and timeout errors."""
        self._apply(alias=name)
        return self

    def logger(self, sink: WaitLogger | None) -> Self:
        if sink is None:
            raise MissingLoggerError("logger must not be None; use NullWaitLogger to disable logging")
        self._apply(logger=sink)
        return self

    def metrics(self, is_collecting: bool = True) -> Self:
        self._apply(collect_metrics=is_collecting)
        return self

    def strategy(self, strategy: WaitStrategy) -> Self:
        self._apply(strategy=strategy)
        return self
