"""
Canonical bar models.

A BarSeries is the feed the highlighter reads from: an append-only list of
immutable bars with stable indices, plus a "bar opened" notification.
"""

import math
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from ..errors import MalformedDataError, TemporalDataError
from ..logging.config import get_logger
from ..utils.time import TimestampLike, to_market_time
from .parsers import parse_bar_payload

logger = get_logger(__name__)

BarOpenedCallback = Callable[["Bar"], None]


@dataclass(frozen=True)
class Bar:
    """Single price bar. Open and close are optional, detection needs neither."""
    index: int               # Position in the series, never renumbered
    open_time: datetime      # UTC open time
    high: float
    low: float
    open: Optional[float] = None
    close: Optional[float] = None


class BarSeries:
    """Append-only bar sequence with subscribable bar-opened notifications."""

    def __init__(self, symbol: str = "", pip_size: float = 0.0001):
        self.symbol = symbol
        self.pip_size = pip_size
        self._bars: list[Bar] = []
        self._subscribers: list[BarOpenedCallback] = []

    def __len__(self) -> int:
        return len(self._bars)

    def __getitem__(self, index: int) -> Bar:
        if index < 0:
            raise IndexError(f"Bar index must be non-negative, got {index}")
        return self._bars[index]

    def __iter__(self):
        return iter(self._bars)

    @property
    def count(self) -> int:
        return len(self._bars)

    @property
    def last_index(self) -> int:
        """Index of the newest bar, -1 when empty."""
        return len(self._bars) - 1

    def high(self, index: int) -> float:
        return self[index].high

    def low(self, index: int) -> float:
        return self[index].low

    def open_time(self, index: int) -> datetime:
        return self[index].open_time

    def subscribe_bar_opened(self, callback: BarOpenedCallback) -> None:
        if callback not in self._subscribers:
            self._subscribers.append(callback)

    def unsubscribe_bar_opened(self, callback: BarOpenedCallback) -> None:
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    def append(
        self,
        open_time: TimestampLike,
        high: float,
        low: float,
        open: Optional[float] = None,
        close: Optional[float] = None,
        notify: bool = True
    ) -> Bar:
        """
        Append a new bar and notify bar-opened subscribers.

        Raises:
            MalformedDataError: If prices are not finite or high < low
            TemporalDataError: If open_time is invalid or earlier than the previous bar
        """
        index = len(self._bars)

        try:
            ts = to_market_time(open_time)
        except ValueError as e:
            raise TemporalDataError(
                f"Invalid open time for bar {index}: {e}",
                timestamp=open_time,
                bar_index=index
            ) from e

        if self._bars and ts < self._bars[-1].open_time:
            raise TemporalDataError(
                f"Bar {index} opens before bar {index - 1}",
                timestamp=ts,
                bar_index=index,
                context={"previous_open_time": self._bars[-1].open_time.isoformat()}
            )

        prices = {"high": high, "low": low, "open": open, "close": close}
        for name, price in prices.items():
            if price is None and name in ("open", "close"):
                continue
            if not isinstance(price, (int, float)) or isinstance(price, bool) or not math.isfinite(price):
                raise MalformedDataError(
                    f"Bar {index} has invalid {name} price {price!r}",
                    raw_data=str(prices)[:100],
                    expected_format="finite number"
                )

        if high < low:
            raise MalformedDataError(
                f"Bar {index} high {high} is below low {low}",
                raw_data=str(prices)[:100]
            )

        bar = Bar(
            index=index,
            open_time=ts,
            high=float(high),
            low=float(low),
            open=float(open) if open is not None else None,
            close=float(close) if close is not None else None,
        )
        self._bars.append(bar)

        if notify:
            for callback in list(self._subscribers):
                callback(bar)

        return bar

    def append_payload(self, payload: dict[str, Any], notify: bool = True) -> Bar:
        """Parse a raw bar payload and append it."""
        fields = parse_bar_payload(payload)
        return self.append(notify=notify, **fields)

    def load(self, payloads: list[dict[str, Any]]) -> int:
        """
        Append historical bars without firing bar-opened notifications.

        Returns:
            Number of bars loaded
        """
        for payload in payloads:
            self.append_payload(payload, notify=False)

        logger.debug("Loaded historical bars", symbol=self.symbol, count=len(payloads))
        return len(payloads)
