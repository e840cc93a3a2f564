from __future__ import annotations

from enum import Enum


class ClockEventKind(str, Enum):
    """Loại sự kiện chấm công thô."""

    CLOCK_IN = "clock_in"
    CLOCK_OUT = "clock_out"


class AttendanceStatus(str, Enum):
    """Arrival/departure classification of a day against its shift."""

    EARLY = "EARLY"
    ON_TIME = "ON_TIME"
    LATE = "LATE"
    EARLY_LEAVE = "EARLY_LEAVE"
    ABSENT = "ABSENT"
    UNKNOWN = "UNKNOWN"


class DayStatus(str, Enum):
    PRESENT = "present"
    IN_PROGRESS = "in_progress"
    ABSENT = "absent"
    FUTURE = "future"


class SegmentType(str, Enum):
    LATE = "late"
    WORKING = "working"
    BREAK = "break"
    OVERTIME = "overtime"


class RefreshReason(str, Enum):
    """Why a recompute was requested.

    POLL / CLOCK_ACTION / BROADCAST re-fetch entries; TICK only moves the
    current-time cursor.
    """

    POLL = "poll"
    CLOCK_ACTION = "clock_action"
    BROADCAST = "broadcast"
    TICK = "tick"
