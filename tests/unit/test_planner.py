"""Unit tests for the bucket planner."""

import pytest

from roe_monitor.analytics.planner import plan_buckets
from roe_monitor.core.constants import MS_PER_DAY, MS_PER_HOUR
from roe_monitor.core.models import AggregationMode


class TestPlanBuckets:
    """Tier boundaries of plan_buckets."""

    @pytest.mark.parametrize(
        "duration_ms,hours,mode",
        [
            (0, 1, AggregationMode.LAST),
            (MS_PER_HOUR, 1, AggregationMode.LAST),
            (7 * MS_PER_DAY - 1, 1, AggregationMode.LAST),
            (7 * MS_PER_DAY, 2, AggregationMode.AVERAGE),
            (30 * MS_PER_DAY, 2, AggregationMode.AVERAGE),
            (30 * MS_PER_DAY + 1, 5, AggregationMode.AVERAGE),
            (50 * MS_PER_DAY, 5, AggregationMode.AVERAGE),
            (50 * MS_PER_DAY + 1, 24, AggregationMode.AVERAGE),
            (360 * MS_PER_DAY, 24, AggregationMode.AVERAGE),
        ],
    )
    def test_tiers(self, duration_ms, hours, mode):
        plan = plan_buckets(duration_ms)
        assert plan.bucket_hours == hours
        assert plan.mode == mode

    def test_pure(self):
        """Same input, same plan."""
        assert plan_buckets(10 * MS_PER_DAY) == plan_buckets(10 * MS_PER_DAY)
