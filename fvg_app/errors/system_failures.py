"""
System failure error classifications.

These exceptions represent failures of the chart collaborator or an
unusable configuration, which need intervention rather than a retry on the
next bar.
"""

from typing import Optional, Dict, Any


class SystemFailureError(Exception):
    """Base class for unrecoverable system failures."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class RenderingError(SystemFailureError):
    """The chart renderer rejected a drawing or reset operation."""

    def __init__(self, message: str, operation: Optional[str] = None,
                 object_name: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.operation = operation
        self.object_name = object_name


class ConfigurationError(SystemFailureError):
    """Configuration failed validation."""

    def __init__(self, message: str, errors: Optional[list] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.errors = errors or []
