"""Centralized constants for the tide curve."""

HOUR = 3600.0
MINUTE = 60.0

# Mean interval between consecutive high/low extrema (semi-diurnal M2 / 2).
# Real half-cycles drift by 30-60 minutes over a lunar month.
HALF_CYCLE_HOURS = 6.2
HALF_CYCLE_SECONDS = HALF_CYCLE_HOURS * HOUR

# Curve sampling
SAMPLE_STEP_SECONDS = 3 * MINUTE

# Render window horizon either side of (virtual) now
PAST_HORIZON_SECONDS = 12 * HOUR
FUTURE_HORIZON_SECONDS = 12 * HOUR

# Vertical headroom around the curve
LEVEL_PADDING_FRACTION = 0.15
LEVEL_PADDING_FALLBACK = 0.5  # Metres, used when all samples share one level

# Static layer cache
CACHE_TTL_SECONDS = 30.0
THEME_BUCKET_SIZE = 0.1
CACHE_MINUTE_SECONDS = MINUTE
CACHE_DRIFT_MARGIN_SECONDS = 2 * MINUTE  # Extra curve rendered past each buffer edge

# Time scrubbing
MAX_SCRUB_OFFSET_SECONDS = 6 * HOUR
SNAPBACK_IDLE_DELAY = 2.0
SNAPBACK_DURATION = 1.2
WHEEL_FACTOR = 0.5

# Axis labels
LABEL_INTERVAL_HOURS = (1, 2, 3, 6, 12)
