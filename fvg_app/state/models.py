"""Lifecycle state models."""

from dataclasses import dataclass
from enum import Enum


class IndicatorState(str, Enum):
    """Lifecycle states of the highlighter."""
    ENABLED = "enabled"
    DISABLED = "disabled"


class LifecycleTransition(str, Enum):
    """Edges of the enabled flag."""
    DISABLE = "disable"
    ENABLE = "enable"


@dataclass(frozen=True)
class EnabledState:
    """Requested flag and the state recorded on the previous tick."""
    enabled: bool = True
    was_enabled_last_tick: bool = True

    @property
    def state(self) -> IndicatorState:
        return IndicatorState.ENABLED if self.was_enabled_last_tick else IndicatorState.DISABLED

    def with_enabled(self, enabled: bool) -> "EnabledState":
        return EnabledState(enabled=enabled, was_enabled_last_tick=self.was_enabled_last_tick)

    def recorded(self) -> "EnabledState":
        """State after the current flag has been acted on."""
        return EnabledState(enabled=self.enabled, was_enabled_last_tick=self.enabled)
