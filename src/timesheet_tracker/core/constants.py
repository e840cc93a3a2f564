"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MINUTES_PER_DAY = 24 * 60

DEFAULT_ORG_TIMEZONE = "Europe/London"
DEFAULT_LATE_GRACE_MINUTES = 15
DEFAULT_LATE_APPROVAL_MINUTES = 60
DEFAULT_POLL_INTERVAL_SECONDS = 30
DEFAULT_PROGRESSIVE_TICK_SECONDS = 60

# Timeline display window [05:00, 23:00)
TIMELINE_START_MINUTE = 5 * 60
TIMELINE_END_MINUTE = 23 * 60
TIMELINE_GAP_PERCENT = 0.15

PLACEHOLDER = "--"
PRESENT_LABEL = "Present"
