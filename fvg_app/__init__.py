"""
FVG App - Fair Value Gap Highlighter

Detects three-bar Fair Value Gap patterns in a growing sequence of price
bars and maintains the chart overlay (bar color overrides and gap
rectangles) that marks them.
"""

__version__ = "0.1.0"
__author__ = "FVG Team"
