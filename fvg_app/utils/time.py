"""
Market time helpers.

Bar open times arrive as epoch milliseconds, ISO-8601 strings or datetimes
depending on the host. These helpers normalize all of them to timezone-aware
UTC datetimes.
"""

from datetime import datetime, timezone
from typing import Union

TimestampLike = Union[datetime, int, float, str]


def to_market_time(value: TimestampLike) -> datetime:
    """
    Normalize a timestamp to a UTC datetime.

    Args:
        value: datetime, epoch milliseconds, or ISO-8601 string

    Returns:
        Timezone-aware UTC datetime

    Raises:
        ValueError: If the value cannot be interpreted as a timestamp
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    if isinstance(value, bool):
        raise ValueError(f"Invalid timestamp {value!r}")

    if isinstance(value, (int, float)):
        if value < 0:
            raise ValueError(f"Timestamp must be non-negative, got {value}")
        return datetime.fromtimestamp(value / 1000.0, tz=timezone.utc)

    if isinstance(value, str):
        text = value.strip()
        if text.isdigit():
            return to_market_time(int(text))
        # fromisoformat does not accept a trailing Z before Python 3.11
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        return to_market_time(datetime.fromisoformat(text))

    raise ValueError(f"Unsupported timestamp type {type(value).__name__}")


def format_market_time(market_ts: datetime) -> str:
    """
    Format market timestamp for logging.

    Args:
        market_ts: Market timestamp to format

    Returns:
        ISO8601 formatted string
    """
    return market_ts.isoformat()
