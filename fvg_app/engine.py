"""
Main highlighter coordinator.

Wires the bar feed, the gap detector and the annotation manager together
and runs the enable/disable lifecycle. Two entry points evaluate gaps:

- on_calculate(index), called once per bar position during the initial
  load and once per closed bar afterwards, checks central bar index - 2
- on_bar_opened(), subscribed to the feed, checks central bar count - 3

Both go through evaluate_and_apply, and an index is annotated at most once,
so it does not matter which of them reaches a given index first.
"""

from dataclasses import asdict, replace
from pathlib import Path
from typing import Any, Optional

import structlog

from .annotations.manager import AnnotationManager
from .annotations.models import Annotation
from .config.defaults import FVGParams
from .config.loader import ConfigLoader
from .config.validation import ConfigValidator
from .data.models import Bar, BarSeries
from .detection.detector import detect_gap, minimum_gap_price
from .detection.models import GapDirection
from .errors import (
    ConfigurationError,
    DataQualityError,
    MalformedDataError,
    RenderingError,
)
from .logging.config import get_detection_logger, log_gap_detection
from .rendering.base import ChartRenderer
from .state.lifecycle import LifecycleController
from .state.models import LifecycleTransition

logger = structlog.get_logger(__name__)
detection_logger = get_detection_logger(__name__)


def _validate(params: FVGParams, pip_size: Any) -> None:
    errors = ConfigValidator.validate_fvg_params(asdict(params))
    errors.extend(ConfigValidator.validate_instrument_params({"pip_size": pip_size}))
    if errors:
        error_msgs = [f"{err.field}: {err.message} (got: {err.value})" for err in errors]
        raise ConfigurationError(
            "Invalid highlighter configuration: " + "; ".join(error_msgs),
            errors=errors
        )


class FVGHighlighter:
    """
    Fair Value Gap highlighter for one bar series on one chart.

    The highlighter is single-threaded: the host calls its entry points one
    at a time from its own event loop.
    """

    def __init__(
        self,
        bars: BarSeries,
        chart: ChartRenderer,
        params: Optional[FVGParams] = None,
        pip_size: Optional[float] = None
    ) -> None:
        """
        Initialize the highlighter.

        Args:
            bars: Bar feed; any sequence of Bar works when pip_size is given
            chart: ChartRenderer the annotations are drawn on
            params: Indicator parameters, defaults when omitted
            pip_size: Price units per pip, taken from the feed when omitted

        Raises:
            ConfigurationError: If the parameters or pip size are invalid
        """
        self.bars = bars
        self.chart = chart
        self.params = params or FVGParams()
        self.pip_size = pip_size if pip_size is not None else bars.pip_size
        _validate(self.params, self.pip_size)

        self.logger = logger
        self.detection_logger = detection_logger

        self.annotations = AnnotationManager(chart, self.params)
        self.lifecycle = LifecycleController(self.params.enabled)
        self._attached = False

        self.evaluation_count = 0
        self.detections = {direction: 0 for direction in GapDirection}
        self.skipped_ticks = 0
        self.skipped_indices: list[int] = []

        self.logger.info(
            "FVG highlighter initialized",
            symbol=getattr(bars, "symbol", None),
            color=self.params.color,
            minimum_gap_pips=self.params.minimum_gap_pips,
            minimum_gap_price=self.minimum_gap_price,
            show_rectangles=self.params.show_rectangles,
            rectangle_opacity=self.params.rectangle_opacity,
            enabled=self.params.enabled
        )

    @classmethod
    def from_config(
        cls,
        bars: BarSeries,
        chart: ChartRenderer,
        instrument_id: str,
        session_overrides: Optional[dict[str, Any]] = None,
        config_dir: Optional[Path] = None
    ) -> "FVGHighlighter":
        """
        Build a highlighter from layered configuration.

        Defaults, then the instrument entry of instruments.yaml, then the
        session overrides. The configured pip size takes precedence over
        the feed's.

        Raises:
            ConfigurationError: If the merged configuration is invalid
        """
        loader = ConfigLoader.create(config_dir)
        config = loader.merge_config(instrument_id, session_overrides)

        errors = ConfigValidator.validate_config(config)
        if errors:
            error_msgs = [f"{err.field}: {err.message} (got: {err.value})" for err in errors]
            raise ConfigurationError(
                f"Invalid configuration for {instrument_id}: " + "; ".join(error_msgs),
                errors=errors,
                context={"instrument_id": instrument_id}
            )

        return cls(
            bars,
            chart,
            params=FVGParams(**config["fvg"]),
            pip_size=config["instrument"]["pip_size"],
        )

    @property
    def minimum_gap_price(self) -> float:
        return minimum_gap_price(self.params.minimum_gap_pips, self.pip_size)

    # Host lifecycle

    def attach(self) -> None:
        """Subscribe to the feed's bar-opened notification."""
        if not self._attached:
            self.bars.subscribe_bar_opened(self.on_bar_opened)
            self._attached = True

    def detach(self) -> None:
        """Unsubscribe from the feed."""
        if self._attached:
            self.bars.unsubscribe_bar_opened(self.on_bar_opened)
            self._attached = False

    def destroy(self) -> None:
        """Detach and remove everything drawn."""
        self.detach()
        self.clear_all()
        self.logger.info("FVG highlighter destroyed")

    def set_enabled(self, enabled: bool) -> Optional[LifecycleTransition]:
        """Change the enabled parameter and act on the edge immediately."""
        self.params = replace(self.params, enabled=enabled)
        return self._reconcile("set_enabled")

    def update_params(self, params: FVGParams) -> Optional[LifecycleTransition]:
        """
        Replace the indicator parameters.

        Existing annotations keep their colors and rectangles; new
        parameters apply to gaps annotated from now on.
        """
        _validate(params, self.pip_size)
        self.params = params
        self.annotations.update_params(params)
        return self._reconcile("update_params")

    def _reconcile(self, trigger: str) -> Optional[LifecycleTransition]:
        transition = self.lifecycle.reconcile(self.params.enabled, trigger)
        if transition == LifecycleTransition.DISABLE:
            self.clear_all()
        return transition

    # Evaluation entry points

    def on_calculate(self, index: int) -> Optional[Annotation]:
        """Per-bar evaluation tick; checks the window centred on index - 2."""
        self._reconcile("calculate")
        if not self.lifecycle.is_enabled:
            return None

        if index < 3:
            return None

        return self.evaluate_and_apply(index - 2, trigger="calculate")

    def on_bar_opened(self, bar: Optional[Bar] = None) -> Optional[Annotation]:
        """Feed callback; checks the window centred on bar count - 3."""
        self._reconcile("bar_opened")
        if not self.lifecycle.is_enabled:
            return None

        try:
            count = self._bar_count()
        except DataQualityError as e:
            self._record_skip(None, "bar_opened", e)
            return None

        central_index = count - 3
        if central_index < 1:
            return None

        return self.evaluate_and_apply(central_index, trigger="bar_opened")

    def backfill(self) -> int:
        """
        Run the per-bar tick over every available bar.

        Returns:
            Number of annotations created
        """
        before = len(self.annotations)
        try:
            count = self._bar_count()
        except DataQualityError as e:
            self._record_skip(None, "backfill", e)
            return 0

        for index in range(count):
            self.on_calculate(index)

        created = len(self.annotations) - before
        self.logger.info("Backfill complete", bars=count, annotations_created=created)
        return created

    def evaluate_and_apply(self, central_index: int, trigger: str = "direct") -> Optional[Annotation]:
        """
        Detect a gap around central_index and annotate it.

        Collaborator faults skip the tick. Each index is normally visited
        once, so a skipped index stays unannotated; it is logged and counted.

        Returns:
            The new Annotation, or None if there is no gap, the index is
            already annotated, the highlighter is disabled or the tick was
            skipped
        """
        if not self.lifecycle.is_enabled:
            return None

        self.evaluation_count += 1

        try:
            self._bar_count()
            gap = detect_gap(self.bars, central_index, self.minimum_gap_price)
            if gap is None:
                return None
            annotation = self.annotations.apply(central_index, gap)
        except Exception as e:
            # Anything outside DataQualityError is logged at error
            self._record_skip(central_index, trigger, e)
            return None

        if annotation is None:
            return None

        self.detections[gap.direction] += 1
        log_gap_detection(
            self.detection_logger,
            central_index=central_index,
            direction=gap.direction.value,
            gap_high=gap.gap_high,
            gap_low=gap.gap_low,
            trigger=trigger,
            context={
                "start_time": gap.start_time.isoformat(),
                "end_time": gap.end_time.isoformat(),
                "minimum_gap_price": self.minimum_gap_price,
                "rectangle": annotation.rectangle.name if annotation.rectangle else None,
            }
        )
        return annotation

    def clear_all(self) -> int:
        """
        Remove every annotation and reset every bar color.

        Returns:
            Number of annotations removed
        """
        try:
            count = self._bar_count()
        except DataQualityError as e:
            self.logger.warning(
                "Bar count unavailable during clear; resetting tracked bars only",
                error=str(e)
            )
            count = max(self.annotations.annotations, default=-1) + 1

        try:
            return self.annotations.clear_all(count)
        except RenderingError as e:
            failures = e.context.get("failures", [])
            self.logger.error(
                "Chart failed during clear",
                error=str(e),
                operation=e.operation,
                failed_operations=len(failures)
            )
            return e.context.get("cleared", 0)

    def _bar_count(self) -> int:
        try:
            count = len(self.bars)
        except Exception as e:
            raise MalformedDataError(f"Bar feed count unavailable: {e}") from e

        if not isinstance(count, int) or count < 0:
            raise MalformedDataError(f"Bar feed returned invalid count {count!r}")
        return count

    def _record_skip(self, central_index: Optional[int], trigger: str, error: Exception) -> None:
        self.skipped_ticks += 1
        if central_index is not None:
            self.skipped_indices.append(central_index)

        log = self.logger.warning if isinstance(error, DataQualityError) else self.logger.error
        log(
            "Skipped evaluation tick; index will not be revisited",
            central_index=central_index,
            trigger=trigger,
            error=str(error),
            error_type=type(error).__name__,
            context=getattr(error, "context", {})
        )

    # Introspection

    def get_annotation(self, central_index: int) -> Optional[dict[str, Any]]:
        """Annotation at central_index as a plain dict."""
        annotation = self.annotations.get(central_index)
        if annotation is None:
            return None

        rectangle = annotation.rectangle
        return {
            "central_index": annotation.central_index,
            "direction": annotation.direction.value,
            "color": annotation.color.to_hex(),
            "rectangle": {
                "name": rectangle.name,
                "start_time": rectangle.start_time.isoformat(),
                "end_time": rectangle.end_time.isoformat(),
                "gap_high": rectangle.gap_high,
                "gap_low": rectangle.gap_low,
                "color": rectangle.color.to_hex(),
            } if rectangle else None,
        }

    def get_runtime_stats(self) -> dict[str, Any]:
        """Get runtime statistics."""
        return {
            "state": self.lifecycle.state.value,
            "attached": self._attached,
            "annotations": len(self.annotations),
            "evaluations": self.evaluation_count,
            "detections": {direction.value: n for direction, n in self.detections.items()},
            "skipped_ticks": self.skipped_ticks,
            "skipped_indices": list(self.skipped_indices),
        }
