"""Constants for series resampling and windowed statistics."""

# Time constants
MS_PER_SECOND = 1000
MS_PER_HOUR = 3600 * MS_PER_SECOND
MS_PER_DAY = 24 * MS_PER_HOUR

# Default extent when no anchored point is stored
DEFAULT_EXTENT_MS = MS_PER_DAY

# Bucket planner tiers: (upper bound in days, inclusive upper bound, bucket hours)
# The first tier is half-open (<), all later tiers are closed (<=).
FINE_TIER_DAYS = 7
MEDIUM_TIER_DAYS = 30
COARSE_TIER_DAYS = 50

FINE_BUCKET_HOURS = 1
MEDIUM_BUCKET_HOURS = 2
COARSE_BUCKET_HOURS = 5
DAILY_BUCKET_HOURS = 24

# Trailing statistics periods
TRAILING_7D_MS = 7 * MS_PER_DAY
TRAILING_30D_MS = 30 * MS_PER_DAY

# Renderer decimation bounds
MIN_DECIMATION_SAMPLES = 80
MAX_DECIMATION_SAMPLES = 3000

# Quick range presets for the bulk series request (days back from now)
RANGE_PRESETS = {
    "1d": 1,
    "30d": 30,
    "360d": 360,
}
DEFAULT_RANGE_KEY = "1d"
