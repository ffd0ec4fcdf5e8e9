"""
Enable/disable lifecycle module.

Tracks whether the highlighter is running and detects the edges of the
host's enabled flag (ENABLED → DISABLED clears the chart, DISABLED → ENABLED
only resumes detection).
"""
