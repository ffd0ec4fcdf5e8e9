"""Gap detection result models."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class GapDirection(str, Enum):
    """Direction of a Fair Value Gap."""
    BULLISH = "bullish"
    BEARISH = "bearish"


@dataclass(frozen=True)
class GapEvent:
    """A confirmed gap around a central bar."""
    central_index: int
    direction: GapDirection
    gap_high: float          # Upper boundary of the untouched interval
    gap_low: float           # Lower boundary of the untouched interval
    start_time: datetime     # Open time of the bar before the central bar
    end_time: datetime       # Open time of the bar after the central bar

    @property
    def width(self) -> float:
        return self.gap_high - self.gap_low
