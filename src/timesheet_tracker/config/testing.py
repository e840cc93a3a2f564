ORG_TIMEZONE = "Europe/London"

LATE_GRACE_MINUTES = 15
LATE_APPROVAL_MINUTES = 60

POLL_INTERVAL_SECONDS = 30
PROGRESSIVE_TICK_SECONDS = 60

LOG_LEVEL = "WARNING"

DEBUG = False
TESTING = True
