"""
Chart rendering module.

Defines the narrow interface the annotation layer draws through, the color
type used for bar overrides and rectangles, and an in-memory chart used by
hosts without a drawing surface and by the test suite.
"""

from .base import ChartRectangle, ChartRenderer
from .colors import Color
from .memory import InMemoryChart

__all__ = ["ChartRectangle", "ChartRenderer", "Color", "InMemoryChart"]
