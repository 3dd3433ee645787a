from datetime import timedelta
from typing import Final
from typing import assert_never

from imbue.please_wait.base_models import FrozenModel
from imbue.please_wait.metrics import WaitMetrics
from imbue.please_wait.primitives import WaitStrategy

_MIN_AGGRESSIVE_DELAY: Final[timedelta] = timedelta(milliseconds=1)

# Keeps 2 ** (n - 1) finite for very long waits; the timeout cap applies long before this.
_MAX_BACKOFF_EXPONENT: Final[int] = 1023


def _ms(duration: timedelta) -> float:
    return duration / timedelta(milliseconds=1)


def _clamp(duration: timedelta) -> timedelta:
    return max(duration, timedelta(0))


class WaitStrategyCalculator(FrozenModel):
    """Computes the sleeps inserted before and after each condition check.

    The metrics reference is live: the adaptive strategy reads the statistics the
    engine has recorded so far.
    """

    strategy: WaitStrategy
    poll_delay: timedelta
    poll_interval: timedelta
    timeout: timedelta
    metrics: WaitMetrics | None = None

    def initial_delay(self) -> timedelta:
        """Delay to sleep before a condition check."""
        match self.strategy:
            case WaitStrategy.LINEAR | WaitStrategy.EXPONENTIAL_BACKOFF | WaitStrategy.ADAPTIVE:
                delay = self.poll_delay
            case WaitStrategy.AGGRESSIVE:
                delay = max(_MIN_AGGRESSIVE_DELAY, self.poll_delay / 4)
            case WaitStrategy.CONSERVATIVE:
                delay = self.poll_delay * 2
            case _ as unreachable:
                assert_never(unreachable)
        return _clamp(delay)

    def interval_delay(self, check_count: int) -> timedelta:
        """Delay to sleep after the given (1-based) condition check."""
        check_count = max(check_count, 1)
        match self.strategy:
            case WaitStrategy.LINEAR:
                delay = self.poll_interval
            case WaitStrategy.EXPONENTIAL_BACKOFF:
                delay = self._exponential_backoff_delay(check_count)
            case WaitStrategy.AGGRESSIVE:
                delay = max(_MIN_AGGRESSIVE_DELAY, self.poll_interval / 4)
            case WaitStrategy.CONSERVATIVE:
                delay = self.poll_interval * 2
            case WaitStrategy.ADAPTIVE:
                delay = self._adaptive_delay()
            case _ as unreachable:
                assert_never(unreachable)
        return _clamp(delay)

    def _exponential_backoff_delay(self, check_count: int) -> timedelta:
        """Base interval doubled per check after the first, capped at a quarter of the timeout.

        The cap applies to the first check too: a base interval above timeout / 4 is
        lowered to the cap rather than returned unchanged, so delays never decrease
        from one check to the next.
        """
        # Capped so that a late success can still be observed before the deadline
        max_delay_ms = _ms(self.timeout) / 4
        if check_count <= 1:
            delay_ms = _ms(self.poll_interval)
        else:
            factor = 2.0 ** min(check_count - 1, _MAX_BACKOFF_EXPONENT)
            delay_ms = _ms(self.poll_interval) * factor
        return timedelta(milliseconds=min(delay_ms, max_delay_ms))

    def _adaptive_delay(self) -> timedelta:
        if self.metrics is None or self.metrics.condition_checks < 2:
            return self.poll_interval

        average_check_ms = _ms(self.metrics.average_check_time)
        base_interval_ms = _ms(self.poll_interval)

        # Cheap checks: poll more often
        if average_check_ms < base_interval_ms / 10:
            return timedelta(milliseconds=base_interval_ms / 2)

        # Expensive checks: back off
        if average_check_ms > base_interval_ms:
            return timedelta(milliseconds=base_interval_ms * 2)

        return self.poll_interval
