"""
Fair Value Gap detection.

Pure functions over a three-bar window. Nothing here keeps state or touches
the chart.
"""

from .detector import detect_gap, has_fvg, minimum_gap_price
from .models import GapDirection, GapEvent

__all__ = ["GapDirection", "GapEvent", "detect_gap", "has_fvg", "minimum_gap_price"]
