from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..core.constants import MINUTES_PER_DAY
from ..core.enums import AttendanceStatus, DayStatus
from ..timing.breaks import ResolvedBreak


@dataclass(frozen=True)
class Session:
    """One clock-in, an optional clock-out and its usable breaks (minute-of-day)."""

    clock_in_minute: int
    clock_out_minute: Optional[int] = None
    breaks: tuple[ResolvedBreak, ...] = field(default_factory=tuple)
    entry_id: Optional[str] = None
    location: Optional[str] = None
    work_type: Optional[str] = None

    @property
    def is_open(self) -> bool:
        return self.clock_out_minute is None


@dataclass(frozen=True)
class ShiftWindow:
    """A shift schedule resolved to minutes of the day."""

    start_minute: int
    end_minute: int
    break_minutes: int = 0

    @property
    def is_overnight(self) -> bool:
        return self.end_minute < self.start_minute

    @property
    def end_on_axis(self) -> int:
        """Shift end on a continuous axis starting at the shift's own day."""
        return self.end_minute + MINUTES_PER_DAY if self.is_overnight else self.end_minute

    def clock_in_on_axis(self, minute: int) -> int:
        """Clock-in on the shift axis: for an overnight shift, up to the shift end means next day."""
        if self.is_overnight and minute <= self.end_minute:
            return minute + MINUTES_PER_DAY
        return minute

    @property
    def scheduled_minutes(self) -> int:
        return max(self.end_on_axis - self.start_minute - self.break_minutes, 0)


@dataclass(frozen=True)
class DaySummary:
    """Read-model: everything computed for one employee-day.

    ``None`` means "not applicable" (no shift) or "in progress" (open
    session), never zero.
    """

    employee_id: str
    work_date: date
    sessions: tuple[Session, ...] = field(default_factory=tuple)
    shift: Optional[ShiftWindow] = None
    worked_minutes: Optional[int] = None
    break_minutes: int = 0
    live_worked_minutes: Optional[int] = None
    late_minutes: Optional[int] = None
    overtime_minutes: Optional[int] = None
    scheduled_minutes: Optional[int] = None
    status: Optional[AttendanceStatus] = None
    status_note: Optional[str] = None
    requires_approval: bool = False
    is_absent: bool = False
    is_future: bool = False
    is_today: bool = False

    @property
    def is_in_progress(self) -> bool:
        return any(s.is_open for s in self.sessions)

    @property
    def day_status(self) -> DayStatus:
        if self.is_future:
            return DayStatus.FUTURE
        if self.is_absent:
            return DayStatus.ABSENT
        if self.is_in_progress:
            return DayStatus.IN_PROGRESS
        return DayStatus.PRESENT
