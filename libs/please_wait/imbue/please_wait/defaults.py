import threading
from collections.abc import Callable
from datetime import timedelta
from typing import Any
from typing import Final

from imbue.please_wait.base_models import FrozenModel
from imbue.please_wait.builder import WaitSettingsBuilder
from imbue.please_wait.primitives import WaitStrategy
from imbue.please_wait.time_constraint import NonNegativeDuration
from imbue.please_wait.wait_logger import NULL_WAIT_LOGGER
from imbue.please_wait.wait_logger import WaitLogger


class WaitDefaults(FrozenModel):
    """A complete set of wait settings, used for the process-wide defaults."""

    timeout: NonNegativeDuration = timedelta(seconds=10)
    poll_delay: NonNegativeDuration = timedelta(milliseconds=100)
    poll_interval: NonNegativeDuration = timedelta(milliseconds=100)
    ignore_exceptions: bool = True
    fail_silently: bool = False
    prerequisites: tuple[Callable[[], object], ...] = ()
    alias: str | None = None
    logger: WaitLogger = NULL_WAIT_LOGGER
    strategy: WaitStrategy = WaitStrategy.LINEAR
    collect_metrics: bool = False

    def with_updates(self, **updates: Any) -> "WaitDefaults":
        """Return a validated copy with the given fields replaced."""
        return self.model_validate({**dict(self), **updates})


HARD_CODED_DEFAULTS: Final[WaitDefaults] = WaitDefaults()

# =============================================================================
# Global Defaults Registry
#
# Holds one immutable WaitDefaults value. Writers swap in an updated copy under
# the lock; readers take whatever value is current without locking. This makes
# each individual set and the reset atomic, but it does not isolate concurrent
# writers from waits that are reading the defaults: callers that mutate the
# defaults while other threads wait must serialize that themselves.
# =============================================================================

_global_defaults: WaitDefaults = HARD_CODED_DEFAULTS
_global_defaults_lock: Final[threading.Lock] = threading.Lock()


def get_global_defaults() -> WaitDefaults:
    """Return the current process-wide defaults."""
    return _global_defaults


def update_global_defaults(**updates: Any) -> WaitDefaults:
    """Replace the given fields of the process-wide defaults and return the new value."""
    global _global_defaults
    with _global_defaults_lock:
        _global_defaults = _global_defaults.with_updates(**updates)
        return _global_defaults


def reset_global_defaults() -> None:
    """Restore every process-wide default to its hard-coded value."""
    global _global_defaults
    with _global_defaults_lock:
        _global_defaults = HARD_CODED_DEFAULTS


class GlobalConfigurationBuilder(WaitSettingsBuilder):
    """Fluent writer for the process-wide defaults.

    Unlike the per-call and reusable builders, every setter takes effect immediately
    for all later waits that do not override the field.
    """

    def _apply(self, **updates: Any) -> None:
        if "prerequisites" in updates and updates["prerequisites"] is None:
            updates["prerequisites"] = ()
        update_global_defaults(**updates)


def configure_global_defaults() -> GlobalConfigurationBuilder:
    return GlobalConfigurationBuilder()
