"""In-memory chart renderer."""

from collections.abc import Iterable
from datetime import datetime
from typing import Optional

from .base import ChartRectangle, ChartRenderer
from .colors import Color


class InMemoryChart(ChartRenderer):
    """
    Chart that records overrides and objects in dictionaries.

    Bar overrides are kept as sparse mappings from bar index to color, so a
    reset simply drops the entry.
    """

    def __init__(self, name: str = "memory"):
        super().__init__(name)
        self.fill_colors: dict[int, Color] = {}
        self.outline_colors: dict[int, Color] = {}
        self.objects: dict[str, ChartRectangle] = {}

    def set_bar_fill_color(self, index: int, color: Color) -> None:
        self.fill_colors[index] = color

    def set_bar_outline_color(self, index: int, color: Color) -> None:
        self.outline_colors[index] = color

    def reset_bar_color(self, index: int) -> None:
        self.fill_colors.pop(index, None)
        self.outline_colors.pop(index, None)

    def draw_rectangle(
        self,
        name: str,
        start_time: datetime,
        high: float,
        end_time: datetime,
        low: float,
        color: Color,
        filled: bool = False
    ) -> ChartRectangle:
        rectangle = ChartRectangle(
            name=name,
            start_time=start_time,
            high=high,
            end_time=end_time,
            low=low,
            color=color,
            is_filled=filled,
        )
        if name in self.objects:
            self.logger.debug("Replacing chart object", object_name=name)
        self.objects[name] = rectangle
        return rectangle

    def remove_object(self, name: str) -> None:
        self.objects.pop(name, None)

    def object_names(self) -> Iterable[str]:
        return list(self.objects)

    def get_object(self, name: str) -> Optional[ChartRectangle]:
        return self.objects.get(name)

    def has_color_override(self, index: int) -> bool:
        """True if either the fill or the outline of the bar is overridden."""
        return index in self.fill_colors or index in self.outline_colors

    def override_count(self) -> int:
        return len(set(self.fill_colors) | set(self.outline_colors))
