"""Tests for three-bar gap detection."""

import math

import pytest

from fvg_app.data.models import Bar
from fvg_app.detection.detector import detect_gap, has_fvg, minimum_gap_price
from fvg_app.detection.models import GapDirection
from fvg_app.errors import MalformedDataError

from tests.factories import GAP_SERIES_PRICES, bar_time, make_bars


class TestMinimumGapPrice:
    """Test pip to price conversion."""

    def test_pips_times_pip_size(self):
        assert minimum_gap_price(3, 0.0001) == pytest.approx(0.0003)
        assert minimum_gap_price(10, 0.01) == pytest.approx(0.1)

    def test_zero_pips(self):
        assert minimum_gap_price(0, 0.0001) == 0.0


class TestScenarios:
    """Worked examples on a EURUSD-style window."""

    def test_bullish_gap_detected(self, scenario_bars):
        """40 pip gap against a 3 pip threshold is reported as bullish."""
        gap = detect_gap(scenario_bars, 5, minimum_gap_price(3, 0.0001))

        assert gap is not None
        assert gap.central_index == 5
        assert gap.direction == GapDirection.BULLISH
        assert gap.gap_low == pytest.approx(1.1010)
        assert gap.gap_high == pytest.approx(1.1050)
        assert gap.start_time == bar_time(4)
        assert gap.end_time == bar_time(6)
        assert gap.width == pytest.approx(0.0040)

    def test_gap_below_threshold(self, scenario_bars):
        """Same window against a 50 pip threshold is not a gap."""
        assert detect_gap(scenario_bars, 5, minimum_gap_price(50, 0.0001)) is None
        assert has_fvg(scenario_bars, 5, minimum_gap_price(50, 0.0001)) is False


class TestThresholdBoundary:
    """The minimum gap is inclusive."""

    def test_bullish_exact_threshold(self):
        bars = make_bars([(2.5, 2.0), (2.25, 1.5), (1.75, 1.0)])

        gap = detect_gap(bars, 1, 0.25)

        assert gap is not None
        assert gap.direction == GapDirection.BULLISH
        assert gap.gap_high == 2.0
        assert gap.gap_low == 1.75

    def test_bearish_exact_threshold(self):
        bars = make_bars([(1.5, 1.0), (2.0, 1.25), (2.5, 1.75)])

        gap = detect_gap(bars, 1, 0.25)

        assert gap is not None
        assert gap.direction == GapDirection.BEARISH
        assert gap.gap_high == 1.75
        assert gap.gap_low == 1.5

    def test_just_below_threshold(self):
        bars = make_bars([(1.5, 1.0), (2.0, 1.25), (2.5, 1.5)])

        assert detect_gap(bars, 1, 0.25) is None

    @pytest.mark.parametrize("prices,direction", [
        ([(1.1020, 1.1013), (1.1015, 1.1008), (1.1010, 1.1000)], GapDirection.BULLISH),
        ([(1.1010, 1.1000), (1.1015, 1.1008), (1.1020, 1.1013)], GapDirection.BEARISH),
    ])
    def test_pip_quantized_exact_threshold(self, prices, direction):
        """A 3 pip distance meets a 3 pip minimum despite float rounding."""
        bars = make_bars(prices)

        gap = detect_gap(bars, 1, minimum_gap_price(3, 0.0001))

        assert gap is not None
        assert gap.direction == direction
        assert gap.width == pytest.approx(0.0003)

    def test_pip_quantized_one_pip_short(self):
        bars = make_bars([(1.1020, 1.1012), (1.1015, 1.1008), (1.1010, 1.1000)])

        assert detect_gap(bars, 1, minimum_gap_price(3, 0.0001)) is None


class TestDirection:
    """Direction classification and exclusivity."""

    def test_bearish_gap_boundaries(self):
        bars = make_bars(GAP_SERIES_PRICES)

        gap = detect_gap(bars, 5, 3.0)

        assert gap.direction == GapDirection.BEARISH
        assert gap.gap_low == 101.0
        assert gap.gap_high == 108.0

    def test_only_expected_windows_gap(self):
        bars = make_bars(GAP_SERIES_PRICES)

        found = {i: detect_gap(bars, i, 3.0) for i in range(len(bars))}

        assert {i for i, gap in found.items() if gap} == {5, 9}
        assert found[9].direction == GapDirection.BULLISH

    def test_single_direction_when_both_conditions_hold(self):
        """Flat identical bars with a zero threshold satisfy both conditions."""
        bars = make_bars([(1.0, 1.0), (1.0, 1.0), (1.0, 1.0)])

        gap = detect_gap(bars, 1, 0.0)

        assert gap.direction == GapDirection.BULLISH

    def test_at_most_one_direction_over_series(self):
        bars = make_bars(GAP_SERIES_PRICES)

        for threshold in (0.0, 1.0, 3.0, 7.0, 8.0):
            for i in range(len(bars)):
                gap = detect_gap(bars, i, threshold)
                assert gap is None or gap.direction in (GapDirection.BULLISH, GapDirection.BEARISH)


class TestWindowBounds:
    """Windows that do not fit return no gap instead of raising."""

    @pytest.mark.parametrize("central_index", [-1, 0, 12, 13, 100])
    def test_out_of_range(self, central_index):
        bars = make_bars(GAP_SERIES_PRICES)

        assert detect_gap(bars, central_index, 3.0) is None

    def test_empty_and_short_sequences(self):
        assert detect_gap([], 1, 0.0) is None
        assert detect_gap(make_bars([(1.0, 0.5), (1.0, 0.5)]), 1, 0.0) is None

    def test_last_valid_central_index(self):
        bars = make_bars([(101.0, 99.0), (101.0, 99.0), (120.0, 110.0)])

        assert detect_gap(bars, 1, 3.0) is not None


class TestPurity:
    """Detection does not modify its input."""

    def test_bars_unchanged(self):
        bars = make_bars(GAP_SERIES_PRICES)
        snapshot = list(bars)

        detect_gap(bars, 5, 3.0)
        detect_gap(bars, 9, 3.0)

        assert bars == snapshot

    def test_deterministic(self):
        bars = make_bars(GAP_SERIES_PRICES)

        assert detect_gap(bars, 5, 3.0) == detect_gap(bars, 5, 3.0)


class TestMalformedBars:
    """Non-finite neighbour prices are reported as data quality errors."""

    def test_nan_neighbour(self):
        bars = make_bars(GAP_SERIES_PRICES)
        bars[4] = Bar(index=4, open_time=bar_time(4), high=math.nan, low=99.0)

        with pytest.raises(MalformedDataError):
            detect_gap(bars, 5, 3.0)

    def test_central_bar_not_read(self):
        """The central bar takes no part in the comparison."""
        bars = make_bars(GAP_SERIES_PRICES)
        bars[5] = Bar(index=5, open_time=bar_time(5), high=math.inf, low=math.nan)

        assert detect_gap(bars, 5, 3.0) is not None

    def test_missing_neighbour(self):
        bars = make_bars(GAP_SERIES_PRICES)
        bars[6] = None

        with pytest.raises(MalformedDataError) as exc_info:
            detect_gap(bars, 5, 3.0)

        assert "Bar 6" in str(exc_info.value)

    def test_count_ahead_of_data(self):
        """A feed reporting more bars than it can return."""

        class ShortFeed(list):
            def __len__(self):
                return super().__len__() + 1

        bars = ShortFeed(make_bars(GAP_SERIES_PRICES[:4]))

        with pytest.raises(MalformedDataError) as exc_info:
            detect_gap(bars, 3, 3.0)

        assert exc_info.value.context["bar_index"] == 4
