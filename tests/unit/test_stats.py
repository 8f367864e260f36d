"""Unit tests for WindowedStatsCalculator."""

import pytest

from roe_monitor.analytics.stats import WindowedStatsCalculator
from roe_monitor.core.constants import MS_PER_DAY, MS_PER_HOUR
from roe_monitor.core.models import ChartDataset, Sample, TimeWindow


class TestWindowedStatsCalculator:
    """Tests for WindowedStatsCalculator."""

    @pytest.fixture
    def calculator(self, clock):
        return WindowedStatsCalculator(clock=clock)

    def test_trailing_empty_is_zero(self, calculator):
        summary = calculator.trailing_7d([])

        assert summary.is_empty
        assert summary.mean("supply") == 0.0
        assert summary.mean("roe") == 0.0

    def test_trailing_excludes_rewards(self, calculator, point_factory, now_ms):
        """Reward channels are chart-only."""
        summary = calculator.trailing_7d([point_factory(now_ms)])
        assert set(summary.means) == {"supply", "borrow", "roe"}

    def test_trailing_7d_window(self, calculator, point_factory, now_ms):
        """Only points in [now - 7d, now] count."""
        points = [
            point_factory(now_ms - 8 * MS_PER_DAY, roe=100.0),
            point_factory(now_ms - 7 * MS_PER_DAY, roe=10.0),
            point_factory(now_ms - MS_PER_DAY, roe=20.0),
            point_factory(now_ms + MS_PER_HOUR, roe=500.0),
        ]
        summary = calculator.trailing_7d(points)

        assert summary.count == 2
        assert summary.mean("roe") == 15.0

    def test_trailing_30d_includes_older(self, calculator, point_factory, now_ms):
        points = [
            point_factory(now_ms - 20 * MS_PER_DAY, supply=2.0),
            point_factory(now_ms - MS_PER_DAY, supply=4.0),
        ]
        assert calculator.trailing_30d(points).mean("supply") == 3.0
        assert calculator.trailing_7d(points).mean("supply") == 4.0

    def test_trailing_explicit_now(self, calculator, point_factory, now_ms):
        points = [point_factory(now_ms - 10 * MS_PER_DAY, borrow=6.0)]
        summary = calculator.trailing_7d(points, now_ms=now_ms - 9 * MS_PER_DAY)
        assert summary.mean("borrow") == 6.0

    @pytest.fixture
    def datasets(self, now_ms):
        def dataset(key, values):
            return ChartDataset(
                channel=key,
                label=key,
                color="white",
                samples=[Sample(x=now_ms + i * MS_PER_HOUR, y=v) for i, v in enumerate(values)],
            )

        return {
            "supply": dataset("supply", [1.0, 2.0, 3.0, 4.0]),
            "borrow": dataset("borrow", [4.0, 4.0, 4.0, 4.0]),
            "roe": dataset("roe", [10.0, 20.0, 30.0, 40.0]),
        }

    def test_visible_unknown_window_uses_all(self, calculator, datasets):
        summary = calculator.visible(datasets, None)

        assert summary.mean("supply") == 2.5
        assert summary.mean("roe") == 25.0
        assert summary.count == 4

    def test_visible_window_filters(self, calculator, datasets, now_ms):
        window = TimeWindow(min_ms=now_ms + MS_PER_HOUR, max_ms=now_ms + 2 * MS_PER_HOUR)
        summary = calculator.visible(datasets, window)

        assert summary.mean("supply") == 2.5
        assert summary.mean("roe") == 25.0

    def test_visible_counts_overlapping_bucket(self, calculator, datasets, now_ms):
        """A bucket that starts before the window but overlaps it is in range."""
        window = TimeWindow(min_ms=now_ms + 30 * 60 * 1000, max_ms=now_ms + 45 * 60 * 1000)

        summary = calculator.visible(datasets, window, bucket_width_ms=MS_PER_HOUR)
        assert summary.mean("supply") == 1.0

        summary = calculator.visible(datasets, window)
        assert summary.is_empty

    def test_visible_empty_window_is_zero(self, calculator, datasets, now_ms):
        window = TimeWindow(min_ms=now_ms - 2 * MS_PER_DAY, max_ms=now_ms - MS_PER_DAY)
        summary = calculator.visible(datasets, window)

        assert summary.mean("roe") == 0.0
        assert summary.is_empty
