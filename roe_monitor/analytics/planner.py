"""Bucket planning for adaptive resampling."""

from roe_monitor.core.constants import (
    COARSE_BUCKET_HOURS,
    COARSE_TIER_DAYS,
    DAILY_BUCKET_HOURS,
    FINE_BUCKET_HOURS,
    FINE_TIER_DAYS,
    MEDIUM_BUCKET_HOURS,
    MEDIUM_TIER_DAYS,
    MS_PER_DAY,
)
from roe_monitor.core.models import AggregationMode, BucketPlan


def plan_buckets(duration_ms: int) -> BucketPlan:
    """
    Choose bucket width and aggregation mode for a time span.

    Short spans keep the most recent reading per hour; longer spans average
    into progressively wider buckets.

        < 7 days   ->  1h, last
        <= 30 days ->  2h, average
        <= 50 days ->  5h, average
        otherwise  -> 24h, average
    """
    if duration_ms < FINE_TIER_DAYS * MS_PER_DAY:
        return BucketPlan(bucket_hours=FINE_BUCKET_HOURS, mode=AggregationMode.LAST)
    if duration_ms <= MEDIUM_TIER_DAYS * MS_PER_DAY:
        return BucketPlan(bucket_hours=MEDIUM_BUCKET_HOURS, mode=AggregationMode.AVERAGE)
    if duration_ms <= COARSE_TIER_DAYS * MS_PER_DAY:
        return BucketPlan(bucket_hours=COARSE_BUCKET_HOURS, mode=AggregationMode.AVERAGE)
    return BucketPlan(bucket_hours=DAILY_BUCKET_HOURS, mode=AggregationMode.AVERAGE)
