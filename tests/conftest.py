"""Pytest configuration and shared fixtures."""

import pytest
from typing import List

from fvg_app.data.models import Bar, BarSeries
from fvg_app.rendering.memory import InMemoryChart

from tests.factories import GAP_SERIES_PRICES, bar_time, make_bars, make_payloads


@pytest.fixture
def chart() -> InMemoryChart:
    """Empty in-memory chart."""
    return InMemoryChart()


@pytest.fixture
def gap_series() -> BarSeries:
    """Bar series with one bearish gap at bar 5 and one bullish gap at bar 9."""
    series = BarSeries(symbol="TEST", pip_size=1.0)
    series.load(make_payloads(GAP_SERIES_PRICES))
    return series


@pytest.fixture
def scenario_bars() -> List[Bar]:
    """
    Seven bars with a EURUSD-style window at indices 4, 5 and 6.

    Bar 4 has low 1.1050 and bar 6 high 1.1010, a 40 pip bullish gap.
    """
    bars = make_bars([(1.1000, 1.0990)] * 7)
    bars[4] = Bar(index=4, open_time=bar_time(4), high=1.1040, low=1.1050)
    bars[5] = Bar(index=5, open_time=bar_time(5), high=1.1045, low=1.1015)
    bars[6] = Bar(index=6, open_time=bar_time(6), high=1.1010, low=1.1020)
    return bars
