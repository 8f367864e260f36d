"""Unit tests for PointStore."""

import pytest

from roe_monitor.analytics.store import PointStore
from roe_monitor.core.constants import MS_PER_DAY, MS_PER_HOUR
from roe_monitor.core.exceptions import UnanchoredPointError


class TestPointStore:
    """Tests for PointStore."""

    @pytest.fixture
    def store(self, clock):
        return PointStore(clock=clock)

    def test_upsert_rejects_unanchored(self, store, point_factory):
        """Points without any timestamp never enter the store."""
        with pytest.raises(UnanchoredPointError):
            store.upsert(point_factory(None, note="missing snapshot"))
        assert len(store) == 0

    def test_borrow_timestamp_fallback(self, store, point_factory, now_ms):
        """Borrow timestamp anchors a point when collateral is missing."""
        store.upsert(point_factory(now_ms, use_borrow_ts=True))
        assert store.extent().min_ms == now_ms

    def test_upsert_replaces_same_timestamp(self, store, point_factory, now_ms):
        """Same effective timestamp replaces, never duplicates."""
        assert store.upsert(point_factory(now_ms, roe=1.0)) is False
        assert store.upsert(point_factory(now_ms, roe=2.0)) is True

        assert len(store) == 1
        assert store.all()[0].roe_pct == 2.0

    def test_replacement_keeps_order(self, store, point_factory, now_ms):
        """Replacing a middle point does not move any other entry."""
        for i in range(3):
            store.upsert(point_factory(now_ms + i * MS_PER_HOUR, roe=float(i)))
        store.upsert(point_factory(now_ms + MS_PER_HOUR, roe=99.0))

        assert [p.roe_pct for p in store.all()] == [0.0, 99.0, 2.0]

    def test_size_equals_distinct_timestamps(self, store, point_factory, now_ms):
        """n upserts with k distinct timestamps leave k points, in any order."""
        offsets = [3, 1, 3, 2, 1, 0, 2, 3]
        for i, offset in enumerate(offsets):
            store.upsert(point_factory(now_ms + offset * MS_PER_HOUR, roe=float(i)))

        assert len(store) == 4
        timestamps = [p.effective_ms for p in store.all()]
        assert timestamps == sorted(timestamps)

    def test_extent_over_points(self, store, point_factory, now_ms):
        """Extent bounds are actual point timestamps."""
        store.upsert(point_factory(now_ms))
        store.upsert(point_factory(now_ms - 5 * MS_PER_HOUR))
        store.upsert(point_factory(now_ms - 2 * MS_PER_HOUR))

        extent = store.extent()
        assert extent.min_ms == now_ms - 5 * MS_PER_HOUR
        assert extent.max_ms == now_ms
        assert extent.min_ms <= extent.max_ms

    def test_extent_empty_defaults_to_last_day(self, store, now_ms):
        """Empty store reports the 24h ending now."""
        extent = store.extent()
        assert extent.max_ms == now_ms
        assert extent.min_ms == now_ms - MS_PER_DAY

    def test_extent_tracks_mutation(self, store, point_factory, now_ms):
        """Extent is recomputed after every upsert."""
        store.upsert(point_factory(now_ms))
        assert store.extent().max_ms == now_ms

        store.upsert(point_factory(now_ms + MS_PER_HOUR))
        assert store.extent().max_ms == now_ms + MS_PER_HOUR

    def test_load_drops_unanchored(self, store, point_factory, now_ms):
        """Bulk load counts and skips unanchored points."""
        dropped = store.load([
            point_factory(now_ms),
            point_factory(None),
            point_factory(now_ms - MS_PER_HOUR),
        ])

        assert dropped == 1
        assert len(store) == 2

    def test_between_is_closed_interval(self, store, point_factory, now_ms):
        """Both window bounds are inclusive."""
        for i in range(5):
            store.upsert(point_factory(now_ms + i * MS_PER_HOUR))

        selected = store.between(now_ms + MS_PER_HOUR, now_ms + 3 * MS_PER_HOUR)
        assert len(selected) == 3

    def test_latest_and_clear(self, store, point_factory, now_ms):
        store.upsert(point_factory(now_ms - MS_PER_HOUR, roe=1.0))
        store.upsert(point_factory(now_ms, roe=2.0))
        assert store.latest().roe_pct == 2.0

        store.clear()
        assert len(store) == 0
        assert store.latest() is None
