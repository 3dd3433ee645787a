"""Tests for the logger sinks."""

from collections.abc import Iterator
from datetime import timedelta
from typing import Any

import pytest
from loguru import logger

from imbue.please_wait.dsl import wait
from imbue.please_wait.primitives import TimeUnit
from imbue.please_wait.wait_logger import LoguruWaitLogger
from imbue.please_wait.wait_logger import NullWaitLogger


@pytest.fixture
def captured_messages() -> Iterator[list[str]]:
    messages: list[str] = []

    def sink(message: Any) -> None:
        messages.append(f"{message.record['level'].name} {message.record['message']}")

    handler_id = logger.add(sink, level="TRACE")
    yield messages
    logger.remove(handler_id)


def test_null_logger_accepts_every_event() -> None:
    sink = NullWaitLogger()

    sink.on_wait_start("c", timedelta(seconds=1))
    sink.on_condition_check("c", True, timedelta(0))
    sink.on_wait_success("c", timedelta(0), 1)
    sink.on_timeout("c", timedelta(seconds=1))
    sink.on_cancellation("c")


def test_loguru_logger_formats_events(captured_messages: list[str]) -> None:
    sink = LoguruWaitLogger(level="info")

    sink.on_wait_start("db", timedelta(seconds=2))
    sink.on_condition_check("db", False, timedelta(milliseconds=15))
    sink.on_wait_success("db", timedelta(milliseconds=30), 2)
    sink.on_timeout("db", timedelta(seconds=2))
    sink.on_cancellation("db")

    assert captured_messages == [
        "INFO [please-wait] Starting wait: db (timeout: 2000ms)",
        "INFO [please-wait] Condition check failed: db (elapsed: 15ms)",
        "INFO [please-wait] Success: db completed in 30ms (2 checks)",
        "WARNING [please-wait] Timeout: db exceeded 2000ms",
        "WARNING [please-wait] Cancelled: db",
    ]


def test_loguru_logger_used_by_wait(captured_messages: list[str]) -> None:
    wait().polling(1, 1, TimeUnit.MILLIS).alias("cache warm").logger(LoguruWaitLogger()).until(lambda: True)

    sink_messages = [message for message in captured_messages if "[please-wait]" in message]
    assert sink_messages[0] == "DEBUG [please-wait] Starting wait: cache warm (timeout: 10000ms)"
    assert sink_messages[-1].startswith("DEBUG [please-wait] Success: cache warm completed in")


def test_engine_traces_ignored_exceptions(captured_messages: list[str]) -> None:
    attempts = 0

    def flaky() -> bool:
        nonlocal attempts
        attempts += 1
        if attempts == 1:
            raise RuntimeError("boom")
        return True

    wait().polling(1, 1, TimeUnit.MILLIS).until(flaky)

    assert any(message.startswith("TRACE Ignoring exception from condition") for message in captured_messages)
