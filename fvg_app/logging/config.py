"""
Centralized logging configuration for the FVG highlighter.

This module provides standardized logging configuration using structlog
for all components. Detection and lifecycle code log through the bound
loggers defined here so every gap and every enable/disable transition
leaves a consistent audit record.
"""
import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import FilteringBoundLogger


def configure_logging(
    level: str = "INFO",
    format_json: bool = False,
    include_timestamp: bool = True,
    include_caller: bool = False,
    extra_processors: Optional[list] = None
) -> None:
    """
    Configure structlog for the entire application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: If True, output JSON format; otherwise human-readable
        include_timestamp: Include timestamp in log output
        include_caller: Include caller information (filename, line number)
        extra_processors: Additional structlog processors to include
    """
    log_level = getattr(logging, level.upper())

    # structlog does the formatting, stdlib only routes
    logging.basicConfig(
        level=log_level,
        stream=sys.stdout,
        format="%(message)s"
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    if include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder(
            parameters=[structlog.processors.CallsiteParameter.FILENAME,
                        structlog.processors.CallsiteParameter.LINENO]
        ))

    if extra_processors:
        processors.extend(extra_processors)

    if format_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """
    Get a configured structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger instance
    """
    return structlog.get_logger(name)


def get_detection_logger(name: str) -> FilteringBoundLogger:
    """Logger bound for gap detection decisions."""
    return get_logger(name).bind(
        subsystem="detection",
        audit_trail=True
    )


def get_state_logger(name: str) -> FilteringBoundLogger:
    """Logger bound for enable/disable lifecycle transitions."""
    return get_logger(name).bind(
        subsystem="lifecycle",
        audit_trail=True
    )


def log_gap_detection(
    logger: FilteringBoundLogger,
    central_index: int,
    direction: str,
    gap_high: float,
    gap_low: float,
    trigger: str,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a confirmed gap with standardized format.

    Args:
        logger: Structlog logger instance
        central_index: Index of the central bar of the window
        direction: Gap direction value ("bullish" or "bearish")
        gap_high: Upper boundary of the gap
        gap_low: Lower boundary of the gap
        trigger: Entry point that evaluated the window
        context: Additional context data
    """
    bound_logger = logger.bind(
        central_index=central_index,
        direction=direction,
        gap_high=gap_high,
        gap_low=gap_low,
        gap_width=gap_high - gap_low,
        trigger=trigger,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.info("gap_detected")


def log_state_transition(
    logger: FilteringBoundLogger,
    from_state: str,
    to_state: str,
    trigger: str,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a lifecycle transition with standardized format.

    Args:
        logger: Structlog logger instance
        from_state: Current state
        to_state: Target state
        trigger: What triggered the transition
        context: Additional context data
    """
    bound_logger = logger.bind(
        from_state=from_state,
        to_state=to_state,
        trigger=trigger,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.info("state_transition")
