"""The polling loop behind every wait.

Each invocation runs synchronously on the calling thread: prerequisites, pacing
sleeps and condition checks happen in order until the condition reaches the
expected value, the timeout elapses, or the cancellation event is set.

Sleeps go through Event.wait so that setting the cancellation event interrupts
them immediately instead of after the full poll delay or interval.
"""

import threading
import time
from collections.abc import Callable
from datetime import timedelta
from threading import Event
from typing import NoReturn

from loguru import logger

from imbue.please_wait.config import EffectiveConfig
from imbue.please_wait.errors import ConditionTimeoutError
from imbue.please_wait.errors import WaitCancelledError
from imbue.please_wait.errors import WaitConfigurationError
from imbue.please_wait.metrics import WaitMetrics
from imbue.please_wait.strategy import WaitStrategyCalculator


def _elapsed_since(start: float) -> timedelta:
    return timedelta(seconds=time.monotonic() - start)


def _pause(cancel_event: Event, duration: timedelta) -> bool:
    """Sleep for the duration unless cancelled. Returns True if the cancel event is set."""
    if duration <= timedelta(0):
        return cancel_event.is_set()
    return cancel_event.wait(timeout=min(duration.total_seconds(), threading.TIMEOUT_MAX))


def _run_prerequisites(config: EffectiveConfig) -> None:
    for prerequisite in config.prerequisites:
        try:
            prerequisite()
        except WaitConfigurationError:
            raise
        except Exception as e:
            if not config.ignore_exceptions:
                raise
            logger.trace("Ignoring exception from prerequisite of {}: {!r}", config.condition_name, e)


def _evaluate_condition(condition: Callable[[], object], config: EffectiveConfig, expected: bool) -> bool:
    """Return the condition's value, or the not-yet-satisfied value if it raised and exceptions are ignored."""
    try:
        return bool(condition())
    except WaitConfigurationError:
        raise
    except Exception as e:
        if not config.ignore_exceptions:
            raise
        logger.trace("Ignoring exception from {}: {!r}", config.condition_name, e)
        return not expected


def _cancel(config: EffectiveConfig) -> NoReturn:
    logger.trace("Wait for {} cancelled", config.condition_name)
    config.logger.on_cancellation(config.condition_name)
    raise WaitCancelledError(config.alias)


def _build_metrics(config: EffectiveConfig) -> WaitMetrics:
    return WaitMetrics(
        condition_alias=config.alias,
        configured_timeout=config.timeout,
        configured_poll_delay=config.poll_delay,
        configured_poll_interval=config.poll_interval,
    )


def run_wait(
    condition: Callable[[], object],
    config: EffectiveConfig,
    expected: bool = True,
    cancel_event: Event | None = None,
) -> WaitMetrics | None:
    """Poll the condition until it returns the expected value.

    Returns the collected metrics when metrics are enabled, otherwise None.

    Raises ConditionTimeoutError when the timeout elapses first (unless failing
    silently), and WaitCancelledError when the cancel event is set before the
    condition is met. Cancellation is checked before timeout, so it wins when both
    happen between two checks. Exceptions from the condition or prerequisites
    propagate unchanged unless exceptions are ignored. Exceptions from the logger
    sink always propagate.

    A zero timeout performs exactly one check with no pacing sleeps.
    """
    signal = cancel_event if cancel_event is not None else Event()
    sink = config.logger
    condition_name = config.condition_name
    metrics = _build_metrics(config) if config.collect_metrics else None
    calculator = WaitStrategyCalculator(
        strategy=config.strategy,
        poll_delay=config.poll_delay,
        poll_interval=config.poll_interval,
        timeout=config.timeout,
        metrics=metrics,
    )
    is_single_check = config.timeout == timedelta(0)

    start = time.monotonic()
    sink.on_wait_start(condition_name, config.timeout)

    outcome = not expected
    check_count = 0
    elapsed = timedelta(0)
    while outcome != expected and (check_count == 0 or _elapsed_since(start) < config.timeout):
        if signal.is_set():
            _cancel(config)

        _run_prerequisites(config)

        poll_delay = timedelta(0) if is_single_check else calculator.initial_delay()
        if _pause(signal, poll_delay):
            _cancel(config)

        check_start = time.monotonic()
        outcome = _evaluate_condition(condition, config, expected)
        check_time = _elapsed_since(check_start)
        check_count += 1
        elapsed = _elapsed_since(start)

        if metrics is not None:
            metrics.record_check(check_time, elapsed, poll_delay)
        sink.on_condition_check(condition_name, outcome == expected, elapsed)

        if is_single_check:
            break

        poll_interval = calculator.interval_delay(check_count)
        logger.trace("Check {} of {} done, sleeping {}", check_count, condition_name, poll_interval)
        _pause(signal, poll_interval)
        if metrics is not None:
            metrics.record_poll_interval(poll_interval)

    is_successful = outcome == expected
    if not is_successful and signal.is_set():
        _cancel(config)

    if metrics is not None:
        metrics.finalize(is_successful)

    if is_successful:
        sink.on_wait_success(condition_name, elapsed, check_count)
        return metrics

    if config.fail_silently:
        logger.trace("Wait for {} timed out after {} checks, failing silently", condition_name, check_count)
        return metrics

    sink.on_timeout(condition_name, config.timeout)
    raise ConditionTimeoutError(config.timeout, config.alias)
