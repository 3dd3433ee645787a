from collections.abc import Callable
from typing import Any
from typing import Final

from pydantic import Field

from imbue.please_wait.base_models import FrozenModel
from imbue.please_wait.base_models import MutableModel
from imbue.please_wait.builder import WaitSettingsBuilder
from imbue.please_wait.defaults import WaitDefaults
from imbue.please_wait.defaults import get_global_defaults
from imbue.please_wait.primitives import WaitStrategy
from imbue.please_wait.time_constraint import NonNegativeDuration
from imbue.please_wait.wait_logger import WaitLogger

DEFAULT_CONDITION_NAME: Final[str] = "condition"


class WaitOverrides(FrozenModel):
    """Explicitly chosen settings for one layer of configuration.

    None means "not set here", so the field resolves from the next layer down.
    """

    timeout: NonNegativeDuration | None = None
    poll_delay: NonNegativeDuration | None = None
    poll_interval: NonNegativeDuration | None = None
    ignore_exceptions: bool | None = None
    fail_silently: bool | None = None
    prerequisites: tuple[Callable[[], object], ...] | None = None
    alias: str | None = None
    logger: WaitLogger | None = None
    strategy: WaitStrategy | None = None
    collect_metrics: bool | None = None

    def with_updates(self, **updates: Any) -> "WaitOverrides":
        return self.model_validate({**dict(self), **updates})


class EffectiveConfig(WaitDefaults):
    """Fully resolved settings for a single wait invocation."""

    @property
    def condition_name(self) -> str:
        """Name used for the condition in log messages."""
        return self.alias or DEFAULT_CONDITION_NAME


class WaitConfig(MutableModel, WaitSettingsBuilder):
    """Reusable configuration that can be shared across many waits.

    The global defaults are captured when the config is created, so changing them
    later does not affect waits that use this config. Settings made through the
    builder methods take precedence over the captured defaults.
    """

    overrides: WaitOverrides = Field(default_factory=WaitOverrides)
    captured_defaults: WaitDefaults = Field(default_factory=get_global_defaults)

    def _apply(self, **updates: Any) -> None:
        self.overrides = self.overrides.with_updates(**updates)

    def effective_defaults(self) -> EffectiveConfig:
        """Settings a wait would use with this config and no per-call overrides."""
        return resolve_config(WaitOverrides(), self)


def resolve_config(
    per_call: WaitOverrides,
    reusable_config: WaitConfig | None = None,
    global_defaults: WaitDefaults | None = None,
) -> EffectiveConfig:
    """Resolve every setting independently, most specific layer first.

    Order: the per-call override, then the reusable config's override, then the
    defaults that config captured. Without a reusable config, the current global
    defaults (or the ones passed in) are the base layer.
    """
    layers = [per_call]
    if reusable_config is not None:
        layers.append(reusable_config.overrides)
        base = reusable_config.captured_defaults
    elif global_defaults is not None:
        base = global_defaults
    else:
        base = get_global_defaults()

    resolved: dict[str, Any] = {}
    for name in EffectiveConfig.model_fields:
        value = getattr(base, name)
        for layer in layers:
            layer_value = getattr(layer, name)
            if layer_value is not None:
                value = layer_value
                break
        resolved[name] = value
    return EffectiveConfig(**resolved)
