"""
Enable/disable lifecycle controller.

The host owns the enabled flag; the controller remembers what the flag was
when it was last acted on and reports the edge when it changes. Acting on
the edge (clearing the chart) is the caller's job.
"""

from typing import Optional

from ..logging.config import get_state_logger, log_state_transition
from .models import EnabledState, IndicatorState, LifecycleTransition

state_logger = get_state_logger(__name__)


class LifecycleController:
    """Edge detector over the host's enabled flag."""

    def __init__(self, enabled: bool = True):
        # Starts as enabled so that a highlighter created disabled still
        # runs one ENABLED → DISABLED clear on its first tick.
        self._state = EnabledState(enabled=enabled, was_enabled_last_tick=True)

    @property
    def enabled_state(self) -> EnabledState:
        return self._state

    @property
    def state(self) -> IndicatorState:
        return self._state.state

    @property
    def is_enabled(self) -> bool:
        return self._state.state == IndicatorState.ENABLED

    def reconcile(self, enabled: bool, trigger: str = "tick") -> Optional[LifecycleTransition]:
        """
        Record the current flag and report whether it changed.

        Args:
            enabled: Current value of the host's enabled flag
            trigger: Entry point reporting the flag, for the audit log

        Returns:
            DISABLE or ENABLE on an edge, None when nothing changed
        """
        current = self._state.with_enabled(enabled)

        if current.was_enabled_last_tick == enabled:
            self._state = current
            return None

        transition = LifecycleTransition.ENABLE if enabled else LifecycleTransition.DISABLE
        from_state = current.state
        self._state = current.recorded()

        log_state_transition(
            state_logger,
            from_state=from_state.value,
            to_state=self._state.state.value,
            trigger=trigger,
            context={"transition": transition.value}
        )
        return transition
