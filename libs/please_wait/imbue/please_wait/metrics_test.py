"""Tests for WaitMetrics."""

from datetime import timedelta

from imbue.please_wait.metrics import UNSET_MIN_CHECK_TIME
from imbue.please_wait.metrics import WaitMetrics


def test_new_metrics_are_empty() -> None:
    metrics = WaitMetrics()

    assert metrics.condition_checks == 0
    assert metrics.total_time == timedelta(0)
    assert metrics.min_check_time == UNSET_MIN_CHECK_TIME
    assert metrics.max_check_time == timedelta(0)
    assert metrics.was_successful is False


def test_average_check_time_is_zero_without_checks() -> None:
    assert WaitMetrics().average_check_time == timedelta(0)


def test_record_check_tracks_min_max_and_total() -> None:
    metrics = WaitMetrics()

    metrics.record_check(timedelta(milliseconds=5), timedelta(milliseconds=20), timedelta(milliseconds=10))
    metrics.record_check(timedelta(milliseconds=2), timedelta(milliseconds=45), timedelta(milliseconds=10))
    metrics.record_check(timedelta(milliseconds=9), timedelta(milliseconds=70), timedelta(milliseconds=10))

    assert metrics.condition_checks == 3
    assert metrics.min_check_time == timedelta(milliseconds=2)
    assert metrics.max_check_time == timedelta(milliseconds=9)
    assert metrics.total_time == timedelta(milliseconds=70)
    assert metrics.poll_delay_time == timedelta(milliseconds=30)


def test_average_check_time_divides_total_time_by_checks() -> None:
    metrics = WaitMetrics(condition_checks=3, total_time=timedelta(milliseconds=100))

    assert metrics.average_check_time == timedelta(milliseconds=100) // 3


def test_record_poll_interval_accumulates() -> None:
    metrics = WaitMetrics()

    metrics.record_poll_interval(timedelta(milliseconds=10))
    metrics.record_poll_interval(timedelta(milliseconds=30))

    assert metrics.poll_interval_time == timedelta(milliseconds=40)


def test_str_summarizes_outcome() -> None:
    metrics = WaitMetrics()
    metrics.record_check(timedelta(milliseconds=1), timedelta(milliseconds=4), timedelta(0))
    metrics.finalize(True)

    summary = str(metrics)

    assert summary.startswith("WaitMetrics: 1 checks, 0:00:00.004000 total time, SUCCESS")
    assert "min: 0:00:00.001000" in summary


def test_str_reports_failure() -> None:
    assert "FAILED" in str(WaitMetrics())
