"""
Annotation manager for detected gaps.

Applying a gap colors the central bar (fill and outline) and, when enabled,
draws a filled rectangle over the gap. An index is annotated at most once;
the only way to remove annotations is clear_all, which also resets the
color of every bar on the chart.
"""

from typing import Optional

from ..config.defaults import FVGParams
from ..detection.models import GapEvent
from ..errors import RenderingError
from ..logging.config import get_logger
from ..rendering.base import ChartRenderer
from ..rendering.colors import Color
from .models import Annotation, GapRectangle

logger = get_logger(__name__)

OBJECT_PREFIX = "FVG_"


def rectangle_name(central_index: int) -> str:
    return f"{OBJECT_PREFIX}{central_index}"


class AnnotationManager:
    """Tracks and renders one annotation per central bar index."""

    def __init__(self, chart: ChartRenderer, params: FVGParams):
        self.chart = chart
        self.params = params
        self.color = Color.parse(params.color)
        self.annotations: dict[int, Annotation] = {}

    def __len__(self) -> int:
        return len(self.annotations)

    def __contains__(self, central_index: int) -> bool:
        return central_index in self.annotations

    def get(self, central_index: int) -> Optional[Annotation]:
        return self.annotations.get(central_index)

    def update_params(self, params: FVGParams) -> None:
        """Use new parameters for annotations created from now on."""
        self.params = params
        self.color = Color.parse(params.color)

    def apply(self, central_index: int, gap: GapEvent) -> Optional[Annotation]:
        """
        Annotate a detected gap.

        Returns:
            The new Annotation, or None if the index is already annotated

        Raises:
            RenderingError: If the chart rejects the drawing
        """
        if central_index in self.annotations:
            logger.debug("Index already annotated", central_index=central_index)
            return None

        rectangle = None
        try:
            self.chart.set_bar_fill_color(central_index, self.color)
            self.chart.set_bar_outline_color(central_index, self.color)

            if self.params.show_rectangles:
                rectangle = self._draw_rectangle(central_index, gap)
        except RenderingError:
            raise
        except Exception as e:
            raise RenderingError(
                f"Chart failed to draw annotation for bar {central_index}: {e}",
                operation="apply",
                object_name=rectangle_name(central_index)
            ) from e

        annotation = Annotation(
            central_index=central_index,
            direction=gap.direction,
            color=self.color,
            rectangle=rectangle,
        )
        self.annotations[central_index] = annotation
        return annotation

    def _draw_rectangle(self, central_index: int, gap: GapEvent) -> GapRectangle:
        name = rectangle_name(central_index)
        fill = self.color.with_alpha(self.params.rectangle_opacity)

        self.chart.draw_rectangle(
            name,
            gap.start_time,
            gap.gap_high,
            gap.end_time,
            gap.gap_low,
            fill,
            filled=True,
        )

        return GapRectangle(
            name=name,
            start_time=gap.start_time,
            gap_high=gap.gap_high,
            end_time=gap.end_time,
            gap_low=gap.gap_low,
            color=fill,
            filled=True,
        )

    def clear_all(self, bar_count: int) -> int:
        """
        Remove every gap rectangle and reset the color of every bar.

        Rectangles are found by enumerating chart objects with the FVG_
        prefix, so objects left over from an earlier session are removed
        too. Colors are reset for all bars in [0, bar_count), annotated or
        not. Every remove and reset is attempted even when some fail.

        Returns:
            Number of annotations that were tracked before the clear

        Raises:
            RenderingError: After all operations were attempted, if any of
                them failed; context holds "cleared" and "failures"
        """
        cleared = len(self.annotations)
        tracked_names = [
            annotation.rectangle.name
            for annotation in self.annotations.values()
            if annotation.rectangle is not None
        ]
        self.annotations.clear()
        failures: list[str] = []

        try:
            names = list(self.chart.object_names())
        except Exception as e:
            failures.append(f"object_names: {e}")
            names = tracked_names

        for name in names:
            if not name.startswith(OBJECT_PREFIX):
                continue
            try:
                self.chart.remove_object(name)
            except Exception as e:
                failures.append(f"remove_object({name}): {e}")

        bars_reset = max(bar_count, 0)
        for index in range(bars_reset):
            try:
                self.chart.reset_bar_color(index)
            except Exception as e:
                failures.append(f"reset_bar_color({index}): {e}")

        if failures:
            raise RenderingError(
                f"Chart failed {len(failures)} clear operations: " + "; ".join(failures[:5]),
                operation="clear_all",
                context={"cleared": cleared, "failures": failures}
            )

        logger.info("Cleared annotations", cleared=cleared, bars_reset=bars_reset)
        return cleared
