"""Quick range presets for the bulk series request."""

from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

from roe_monitor.core.constants import RANGE_PRESETS


def to_iso(dt: datetime) -> str:
    """ISO-8601 with millisecond precision and a Z suffix."""
    dt = dt.astimezone(timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"


def compute_range(key: str, now: Optional[datetime] = None) -> Tuple[str, str]:
    """
    Resolve a preset key into (from_iso, to_iso).

    Raises:
        ValueError: If the key is not a known preset
    """
    if key not in RANGE_PRESETS:
        raise ValueError(f"Unknown range: {key}. Available: {list(RANGE_PRESETS)}")
    to = now or datetime.now(timezone.utc)
    start = to - timedelta(days=RANGE_PRESETS[key])
    return to_iso(start), to_iso(to)
