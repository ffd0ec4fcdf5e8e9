"""
Utility functions module.

Time Semantics:
- Bar open times from the feed are authoritative and always UTC
- Naive datetimes are interpreted as UTC
- Epoch integers are milliseconds
"""
