"""
Parsers for raw bar payloads.

Hosts hand bars over as dictionaries with a timestamp and prices, keyed
either by full names ("timestamp", "high", ...) or by the short OHLC
letters. Parsing produces the keyword arguments of BarSeries.append.
"""

import math
from typing import Any

from ..errors import MalformedDataError, MissingDataError, TemporalDataError
from ..utils.time import to_market_time

FIELD_ALIASES = {
    "open_time": ("open_time", "timestamp", "ts", "time", "t"),
    "high": ("high", "h"),
    "low": ("low", "l"),
    "open": ("open", "o"),
    "close": ("close", "c"),
}

REQUIRED_FIELDS = ("open_time", "high", "low")


def _lookup(payload: dict[str, Any], field: str) -> Any:
    for key in FIELD_ALIASES[field]:
        if key in payload:
            return payload[key]
    return None


def _parse_price(raw: Any, field: str) -> float:
    try:
        price = float(raw)
    except (TypeError, ValueError) as e:
        raise MalformedDataError(
            f"Invalid {field} price '{raw}': {e}",
            raw_data=str(raw)[:100],
            expected_format="number"
        ) from e

    if not math.isfinite(price):
        raise MalformedDataError(
            f"Non-finite {field} price '{raw}'",
            raw_data=str(raw)[:100],
            expected_format="finite number"
        )
    return price


def parse_bar_payload(payload: dict[str, Any]) -> dict[str, Any]:
    """
    Parse a raw bar payload.

    Args:
        payload: Dictionary with an open timestamp, high and low, and
            optionally open and close

    Returns:
        Dictionary with open_time (UTC datetime), high, low, open, close

    Raises:
        MalformedDataError: If the payload is not a dict or a price is invalid
        MissingDataError: If a required field is absent
        TemporalDataError: If the timestamp cannot be parsed
    """
    if not isinstance(payload, dict):
        raise MalformedDataError(
            f"Bar payload must be dict, got {type(payload).__name__}",
            raw_data=str(payload)[:100]
        )

    missing = [field for field in REQUIRED_FIELDS if _lookup(payload, field) is None]
    if missing:
        raise MissingDataError(
            f"Bar payload missing required fields: {', '.join(missing)}",
            data_type="bar",
            context={"available_fields": sorted(payload)}
        )

    raw_ts = _lookup(payload, "open_time")
    try:
        open_time = to_market_time(raw_ts)
    except ValueError as e:
        raise TemporalDataError(f"Invalid bar timestamp '{raw_ts}': {e}", timestamp=raw_ts) from e

    fields: dict[str, Any] = {
        "open_time": open_time,
        "high": _parse_price(_lookup(payload, "high"), "high"),
        "low": _parse_price(_lookup(payload, "low"), "low"),
        "open": None,
        "close": None,
    }

    for optional in ("open", "close"):
        raw = _lookup(payload, optional)
        if raw is not None:
            fields[optional] = _parse_price(raw, optional)

    if fields["high"] < fields["low"]:
        raise MalformedDataError(
            f"High {fields['high']} is below low {fields['low']}",
            raw_data=str(payload)[:100]
        )

    return fields
