from datetime import timedelta

from imbue.please_wait.base_models import MutableModel

# Sentinel for "no check recorded yet"; any real check time is smaller.
UNSET_MIN_CHECK_TIME = timedelta.max


class WaitMetrics(MutableModel):
    """Statistics collected over a single wait invocation.

    Created empty when the wait starts, updated after every condition check and
    finalized with the success flag when the loop exits.
    """

    condition_checks: int = 0
    total_time: timedelta = timedelta(0)
    min_check_time: timedelta = UNSET_MIN_CHECK_TIME
    max_check_time: timedelta = timedelta(0)
    poll_delay_time: timedelta = timedelta(0)
    poll_interval_time: timedelta = timedelta(0)
    was_successful: bool = False
    condition_alias: str | None = None
    configured_timeout: timedelta = timedelta(0)
    configured_poll_delay: timedelta = timedelta(0)
    configured_poll_interval: timedelta = timedelta(0)

    @property
    def average_check_time(self) -> timedelta:
        if self.condition_checks > 0:
            return self.total_time // self.condition_checks
        return timedelta(0)

    def record_check(self, check_time: timedelta, elapsed: timedelta, poll_delay: timedelta) -> None:
        """Fold one condition check into the running statistics."""
        self.condition_checks += 1
        self.total_time = elapsed
        self.min_check_time = min(self.min_check_time, check_time)
        self.max_check_time = max(self.max_check_time, check_time)
        self.poll_delay_time += poll_delay

    def record_poll_interval(self, poll_interval: timedelta) -> None:
        self.poll_interval_time += poll_interval

    def finalize(self, was_successful: bool) -> None:
        self.was_successful = was_successful

    def __str__(self) -> str:
        status = "SUCCESS" if self.was_successful else "FAILED"
        return (
            f"WaitMetrics: {self.condition_checks} checks, {self.total_time} total time, {status}, "
            f"avg: {self.average_check_time}, min: {self.min_check_time}, max: {self.max_check_time}"
        )
