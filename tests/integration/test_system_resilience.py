"""Collaborator faults skip a tick without stopping the highlighter."""

import math
from unittest.mock import Mock

import pytest

from fvg_app.data.models import Bar
from fvg_app.engine import FVGHighlighter
from fvg_app.rendering.memory import InMemoryChart

from tests.factories import GAP_SERIES_PRICES, bar_time, make_bars


class BrokenFeed:
    """Feed whose bar count is negative."""
    pip_size = 1.0

    def __len__(self):
        return -1

    def __getitem__(self, index):
        raise IndexError(index)


class FlakyChart(InMemoryChart):
    """Chart that refuses to draw the rectangle for one bar."""

    def __init__(self, broken_index: int):
        super().__init__()
        self.broken_index = broken_index

    def draw_rectangle(self, name, *args, **kwargs):
        if name == f"FVG_{self.broken_index}":
            raise RuntimeError("object limit reached")
        return super().draw_rectangle(name, *args, **kwargs)


class ClearFailingChart(InMemoryChart):

    def remove_object(self, name):
        raise RuntimeError("chart detached")


class ReadFailingFeed:
    """Feed with a valid count whose read of one bar fails."""
    pip_size = 1.0

    def __init__(self, bars, broken_index: int, error=None):
        self.bars = bars
        self.broken_index = broken_index
        self.error = error

    def __len__(self):
        return len(self.bars)

    def __getitem__(self, index):
        if index == self.broken_index:
            if self.error is None:
                return None
            raise self.error
        return self.bars[index]


class CountFailingFeed:
    pip_size = 1.0

    def __len__(self):
        raise RuntimeError("feed disconnected")


class SingleRemoveFailingChart(InMemoryChart):
    """Chart that cannot remove one object."""

    def __init__(self, stuck_name: str):
        super().__init__()
        self.stuck_name = stuck_name

    def remove_object(self, name):
        if name == self.stuck_name:
            raise RuntimeError("object locked")
        super().remove_object(name)


class TestMalformedBars:
    """Non-finite prices in a window."""

    def test_nan_neighbour_skips_index(self):
        bars = make_bars(GAP_SERIES_PRICES)
        bars[4] = Bar(index=4, open_time=bar_time(4), high=math.nan, low=99.0)
        highlighter = FVGHighlighter(bars, InMemoryChart(), pip_size=1.0)

        highlighter.backfill()

        stats = highlighter.get_runtime_stats()
        # Bar 4 is a neighbour of centrals 3 and 5
        assert stats["skipped_indices"] == [3, 5]
        assert stats["skipped_ticks"] == 2
        assert sorted(highlighter.annotations.annotations) == [9]

    def test_skip_is_logged_as_permanent_miss(self):
        bars = make_bars(GAP_SERIES_PRICES)
        bars[6] = Bar(index=6, open_time=bar_time(6), high=113.0, low=math.inf)
        highlighter = FVGHighlighter(bars, InMemoryChart(), pip_size=1.0)
        highlighter.logger = Mock()

        assert highlighter.evaluate_and_apply(5, trigger="calculate") is None

        highlighter.logger.warning.assert_called_once()
        args, kwargs = highlighter.logger.warning.call_args
        assert "will not be revisited" in args[0]
        assert kwargs["central_index"] == 5
        assert kwargs["trigger"] == "calculate"
        assert kwargs["error_type"] == "MalformedDataError"


class TestBrokenFeed:
    """Feed returning an invalid bar count."""

    def test_bar_opened_skipped(self):
        highlighter = FVGHighlighter(BrokenFeed(), InMemoryChart())

        assert highlighter.on_bar_opened() is None
        assert highlighter.skipped_ticks == 1
        assert highlighter.skipped_indices == []

    def test_evaluation_skipped(self):
        highlighter = FVGHighlighter(BrokenFeed(), InMemoryChart())

        assert highlighter.evaluate_and_apply(5) is None
        assert highlighter.skipped_indices == [5]

    def test_backfill_skipped(self):
        highlighter = FVGHighlighter(BrokenFeed(), InMemoryChart())

        assert highlighter.backfill() == 0
        assert highlighter.skipped_ticks == 1

    def test_clear_falls_back_to_tracked_bars(self):
        chart = InMemoryChart()
        chart.set_bar_fill_color(3, Mock())
        highlighter = FVGHighlighter(BrokenFeed(), chart)

        assert highlighter.clear_all() == 0
        assert chart.has_color_override(3)


class TestChartFailures:
    """Chart collaborator errors."""

    def test_rendering_failure_skips_one_index(self):
        chart = FlakyChart(broken_index=5)
        highlighter = FVGHighlighter(make_bars(GAP_SERIES_PRICES), chart, pip_size=1.0)
        highlighter.logger = Mock()

        highlighter.backfill()

        assert sorted(highlighter.annotations.annotations) == [9]
        assert highlighter.skipped_indices == [5]
        highlighter.logger.error.assert_called_once()
        assert highlighter.logger.error.call_args.kwargs["error_type"] == "RenderingError"

    def test_clear_failure_still_empties_tracking(self):
        chart = ClearFailingChart()
        highlighter = FVGHighlighter(make_bars(GAP_SERIES_PRICES), chart, pip_size=1.0)
        highlighter.backfill()

        assert highlighter.clear_all() == 2
        assert len(highlighter.annotations) == 0
        # Bar colors are still reset when no object can be removed
        assert chart.override_count() == 0

    def test_one_failed_remove_does_not_stop_clear(self):
        chart = SingleRemoveFailingChart("FVG_5")
        highlighter = FVGHighlighter(make_bars(GAP_SERIES_PRICES), chart, pip_size=1.0)
        highlighter.logger = Mock()
        highlighter.backfill()

        highlighter.set_enabled(False)

        assert len(highlighter.annotations) == 0
        assert list(chart.object_names()) == ["FVG_5"]
        assert chart.override_count() == 0
        highlighter.logger.error.assert_called_once()
        assert highlighter.logger.error.call_args.kwargs["failed_operations"] == 1


class TestFeedReadFailures:
    """Feed with a valid count whose bar reads fail."""

    @pytest.mark.parametrize("error", [
        RuntimeError("feed read failed"),
        IndexError("bar not loaded"),
        KeyError(6),
    ])
    def test_failed_read_skips_neighbouring_centrals(self, error):
        feed = ReadFailingFeed(make_bars(GAP_SERIES_PRICES), broken_index=6, error=error)
        highlighter = FVGHighlighter(feed, InMemoryChart())

        highlighter.backfill()

        # Bar 6 is a neighbour of centrals 5 and 7
        assert highlighter.skipped_indices == [5, 7]
        assert sorted(highlighter.annotations.annotations) == [9]

    def test_missing_bar_skips(self):
        feed = ReadFailingFeed(make_bars(GAP_SERIES_PRICES), broken_index=8)
        highlighter = FVGHighlighter(feed, InMemoryChart())

        highlighter.backfill()

        assert highlighter.skipped_indices == [7, 9]
        assert sorted(highlighter.annotations.annotations) == [5]

    def test_unexpected_error_logged_at_error(self):
        feed = ReadFailingFeed(make_bars(GAP_SERIES_PRICES), broken_index=6,
                               error=RuntimeError("feed read failed"))
        highlighter = FVGHighlighter(feed, InMemoryChart())
        highlighter.logger = Mock()

        assert highlighter.evaluate_and_apply(5, trigger="bar_opened") is None

        highlighter.logger.error.assert_called_once()
        kwargs = highlighter.logger.error.call_args.kwargs
        assert kwargs["central_index"] == 5
        assert kwargs["error_type"] == "RuntimeError"
        highlighter.logger.warning.assert_not_called()

    def test_failed_count_skips_bar_opened(self):
        highlighter = FVGHighlighter(CountFailingFeed(), InMemoryChart())

        assert highlighter.on_bar_opened() is None
        assert highlighter.skipped_ticks == 1
        assert highlighter.skipped_indices == []
