import threading
from collections.abc import Callable
from datetime import timedelta

from imbue.please_wait.base_models import FrozenModel
from imbue.please_wait.wait_logger import WaitLogger


class WaitLogEvent(FrozenModel):
    """One callback received by a RecordingWaitLogger."""

    kind: str
    condition: str
    succeeded: bool | None = None
    duration: timedelta | None = None
    checks: int | None = None


class RecordingWaitLogger(WaitLogger):
    """Sink that keeps every event in memory so tests can assert on it."""

    def __init__(self) -> None:
        self.events: list[WaitLogEvent] = []

    def kinds(self) -> list[str]:
        return [event.kind for event in self.events]

    def on_wait_start(self, condition: str, timeout: timedelta) -> None:
        self.events.append(WaitLogEvent(kind="start", condition=condition, duration=timeout))

    def on_condition_check(self, condition: str, succeeded: bool, elapsed: timedelta) -> None:
        self.events.append(WaitLogEvent(kind="check", condition=condition, succeeded=succeeded, duration=elapsed))

    def on_wait_success(self, condition: str, elapsed: timedelta, checks: int) -> None:
        self.events.append(WaitLogEvent(kind="success", condition=condition, duration=elapsed, checks=checks))

    def on_timeout(self, condition: str, timeout: timedelta) -> None:
        self.events.append(WaitLogEvent(kind="timeout", condition=condition, duration=timeout))

    def on_cancellation(self, condition: str) -> None:
        self.events.append(WaitLogEvent(kind="cancellation", condition=condition))


class CallCounter:
    """Thread-safe callable that counts invocations and returns a value based on the count."""

    def __init__(self, result_for_call: Callable[[int], bool]) -> None:
        self._result_for_call = result_for_call
        self._lock = threading.Lock()
        self.count = 0

    def __call__(self) -> bool:
        with self._lock:
            self.count += 1
            call_number = self.count
        return self._result_for_call(call_number)


def true_after(calls: int) -> CallCounter:
    """Condition that is False for the first `calls` invocations and True afterwards."""
    return CallCounter(lambda call_number: call_number > calls)


def set_event_after(event: threading.Event, seconds: float) -> threading.Timer:
    """Set the event from a background timer thread after the given delay."""
    timer = threading.Timer(seconds, event.set)
    timer.daemon = True
    timer.start()
    return timer
