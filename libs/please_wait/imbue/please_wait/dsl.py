from collections.abc import Callable
from threading import Event
from typing import Any

from pydantic import Field

from imbue.please_wait.base_models import MutableModel
from imbue.please_wait.builder import WaitSettingsBuilder
from imbue.please_wait.config import EffectiveConfig
from imbue.please_wait.config import WaitConfig
from imbue.please_wait.config import WaitOverrides
from imbue.please_wait.config import resolve_config
from imbue.please_wait.engine import run_wait
from imbue.please_wait.metrics import WaitMetrics


class Wait(MutableModel, WaitSettingsBuilder):
    """A single wait, configured through the fluent setters and run with until().

    Settings made here win over the reusable config (if any), which in turn wins
    over the global defaults. Resolution happens when until() is called.

    Example:
        wait().at_most(5).poll_interval(50, TimeUnit.MILLIS).alias("server up").until(server.is_up)
    """

    overrides: WaitOverrides = Field(default_factory=WaitOverrides)
    reusable_config: WaitConfig | None = None

    def _apply(self, **updates: Any) -> None:
        self.overrides = self.overrides.with_updates(**updates)

    def resolve(self) -> EffectiveConfig:
        return resolve_config(self.overrides, self.reusable_config)

    def until(
        self,
        condition: Callable[[], object],
        expected: bool = True,
        cancel_event: Event | None = None,
    ) -> WaitMetrics | None:
        """Block until the condition returns the expected value.

        Returns the wait's metrics if metrics are enabled, otherwise None.
        """
        return run_wait(condition, self.resolve(), expected=expected, cancel_event=cancel_event)

    def until_true(self, condition: Callable[[], object], cancel_event: Event | None = None) -> WaitMetrics | None:
        return self.until(condition, expected=True, cancel_event=cancel_event)

    def until_false(self, condition: Callable[[], object], cancel_event: Event | None = None) -> WaitMetrics | None:
        return self.until(condition, expected=False, cancel_event=cancel_event)


def wait(config: WaitConfig | None = None) -> Wait:
    """Start building a wait, optionally on top of a reusable config."""
    return Wait(reusable_config=config)
