"""
Chart annotation tracking.

Keeps one annotation per central bar index and owns every bar color
override and rectangle the highlighter puts on the chart.
"""

from .manager import OBJECT_PREFIX, AnnotationManager
from .models import Annotation, GapRectangle

__all__ = ["OBJECT_PREFIX", "Annotation", "AnnotationManager", "GapRectangle"]
