"""
Error classification for bar feed and chart collaborator failures.

Data quality errors are recoverable: the evaluation tick is skipped and the
engine keeps running. System failures signal a broken collaborator or an
invalid configuration.
"""

from .data_quality import (
    DataQualityError,
    TemporalDataError,
    MissingDataError,
    MalformedDataError,
)
from .system_failures import (
    SystemFailureError,
    RenderingError,
    ConfigurationError,
)

__all__ = [
    # Data Quality Errors
    "DataQualityError",
    "TemporalDataError",
    "MissingDataError",
    "MalformedDataError",
    # System Failures
    "SystemFailureError",
    "RenderingError",
    "ConfigurationError",
]
