import os

ORG_TIMEZONE = os.getenv("ORG_TIMEZONE", "Europe/London")

LATE_GRACE_MINUTES = int(os.getenv("LATE_GRACE_MINUTES", "15"))
LATE_APPROVAL_MINUTES = int(os.getenv("LATE_APPROVAL_MINUTES", "60"))

# Host-side refresh cadence
POLL_INTERVAL_SECONDS = int(os.getenv("POLL_INTERVAL_SECONDS", "30"))
PROGRESSIVE_TICK_SECONDS = int(os.getenv("PROGRESSIVE_TICK_SECONDS", "60"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

DEBUG = True
