from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..core.enums import ClockEventKind
from ..timing.normalizer import RawTime


@dataclass(frozen=True)
class ClockEvent:
    """Sự kiện chấm công thô (clock-in / clock-out), timestamp theo UTC."""

    employee_id: str
    timestamp: datetime
    kind: ClockEventKind


@dataclass(frozen=True)
class BreakInterval:
    """A break as stored: explicit duration, a start/end pair, or both."""

    start_time: Optional[RawTime] = None
    end_time: Optional[RawTime] = None
    duration_minutes: Optional[float] = None


@dataclass(frozen=True)
class ShiftSchedule:
    """Thực thể miền (domain): Ca làm việc dự kiến của một ngày."""

    start_time: RawTime
    end_time: RawTime
    break_duration_minutes: Optional[int] = None


@dataclass(frozen=True)
class TimeEntry:
    """Thực thể miền (domain): Một lần chấm công vào/ra.

    One employee may have several entries on the same date (split shifts).
    ``clock_in`` is ``None`` when the stored value could not be parsed.
    """

    id: Optional[str]
    employee_id: str
    work_date: date
    clock_in: Optional[RawTime]
    clock_out: Optional[RawTime] = None
    breaks: tuple[BreakInterval, ...] = field(default_factory=tuple)
    location: Optional[str] = None
    work_type: Optional[str] = None
    shift: Optional[ShiftSchedule] = None
