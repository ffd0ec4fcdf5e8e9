"""
Three-bar Fair Value Gap detection.

For a central bar N the window is bars N-1 and N+1:

- bullish when low[N-1] - high[N+1] >= minimum gap, gap is [high[N+1], low[N-1]]
- bearish when low[N+1] - high[N-1] >= minimum gap, gap is [high[N-1], low[N+1]]

The threshold is inclusive, up to float rounding of pip-quantized prices,
and bullish is checked first, so a window never reports both directions.
"""

import math
from collections.abc import Sequence
from typing import Optional

from ..data.models import Bar
from ..errors import MalformedDataError
from .models import GapDirection, GapEvent


def minimum_gap_price(minimum_gap_pips: int, pip_size: float) -> float:
    """Convert a pip threshold into price units."""
    return minimum_gap_pips * pip_size


def _read_bar(bars: Sequence[Bar], index: int) -> Bar:
    try:
        bar = bars[index]
    except (IndexError, KeyError, TypeError) as e:
        raise MalformedDataError(
            f"Bar {index} could not be read: {e}",
            expected_format="Bar",
            context={"bar_index": index}
        ) from e
    _check_prices(bar, index)
    return bar


def _reaches(distance: float, min_gap_price: float) -> bool:
    # Pip-quantized prices are not exact in binary, so a distance equal to
    # the minimum up to rounding error counts as reaching it
    return distance >= min_gap_price or math.isclose(
        distance, min_gap_price, rel_tol=1e-9, abs_tol=1e-12
    )


def _check_prices(bar: Bar, index: int) -> None:
    for name in ("high", "low"):
        value = getattr(bar, name, None)
        if not isinstance(value, (int, float)) or not math.isfinite(value):
            raise MalformedDataError(
                f"Bar {index} has non-finite {name} {value!r}",
                raw_data=str(bar)[:100],
                expected_format="finite number"
            )


def detect_gap(
    bars: Sequence[Bar],
    central_index: int,
    min_gap_price: float
) -> Optional[GapEvent]:
    """
    Look for a Fair Value Gap around a central bar.

    Args:
        bars: Random-access bar sequence
        central_index: Index of the middle bar of the window
        min_gap_price: Minimum gap width in price units

    Returns:
        GapEvent, or None when there is no gap or the window does not fit
        inside the available bars

    Raises:
        MalformedDataError: If a neighbour bar cannot be read or carries
            non-finite prices
    """
    if central_index < 1 or central_index >= len(bars) - 1:
        return None

    prev_bar = _read_bar(bars, central_index - 1)
    next_bar = _read_bar(bars, central_index + 1)

    if _reaches(prev_bar.low - next_bar.high, min_gap_price):
        direction = GapDirection.BULLISH
        gap_high, gap_low = prev_bar.low, next_bar.high
    elif _reaches(next_bar.low - prev_bar.high, min_gap_price):
        direction = GapDirection.BEARISH
        gap_high, gap_low = next_bar.low, prev_bar.high
    else:
        return None

    return GapEvent(
        central_index=central_index,
        direction=direction,
        gap_high=gap_high,
        gap_low=gap_low,
        start_time=prev_bar.open_time,
        end_time=next_bar.open_time,
    )


def has_fvg(bars: Sequence[Bar], central_index: int, min_gap_price: float) -> bool:
    """True if the window around central_index holds a gap."""
    return detect_gap(bars, central_index, min_gap_price) is not None
