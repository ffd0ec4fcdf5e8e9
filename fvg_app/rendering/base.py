"""Base classes for chart rendering backends."""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime

from ..logging.config import get_logger
from .colors import Color


@dataclass
class ChartRectangle:
    """Rectangle drawn on the price chart."""
    name: str
    start_time: datetime
    high: float
    end_time: datetime
    low: float
    color: Color
    is_filled: bool = False


class ChartRenderer(ABC):
    """
    Drawing surface used by the annotation layer.

    Bar color overrides are addressed by bar index, drawn objects by a
    string name. Names are namespaced by their creator so that a caller can
    enumerate and remove only its own objects.
    """

    def __init__(self, name: str):
        self.name = name
        self.logger = get_logger(f"fvg.rendering.{name}")

    @abstractmethod
    def set_bar_fill_color(self, index: int, color: Color) -> None:
        """Override the body fill color of the bar at index."""
        pass

    @abstractmethod
    def set_bar_outline_color(self, index: int, color: Color) -> None:
        """Override the outline color of the bar at index."""
        pass

    @abstractmethod
    def reset_bar_color(self, index: int) -> None:
        """
        Restore the default colors of the bar at index.

        Must be a no-op for bars that were never overridden.
        """
        pass

    @abstractmethod
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
        """Draw a rectangle, replacing any object already drawn under name."""
        pass

    @abstractmethod
    def remove_object(self, name: str) -> None:
        """Remove a drawn object; unknown names are ignored."""
        pass

    @abstractmethod
    def object_names(self) -> Iterable[str]:
        """Names of every object currently drawn."""
        pass
