"""Annotation records kept by the annotation manager."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..detection.models import GapDirection
from ..rendering.colors import Color


@dataclass(frozen=True)
class GapRectangle:
    """Geometry and style of a drawn gap rectangle."""
    name: str
    start_time: datetime
    gap_high: float
    end_time: datetime
    gap_low: float
    color: Color             # Base RGB with the configured opacity as alpha
    filled: bool = True


@dataclass(frozen=True)
class Annotation:
    """Visual state attached to one central bar."""
    central_index: int
    direction: GapDirection
    color: Color
    rectangle: Optional[GapRectangle] = None
