from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from ..core.constants import DEFAULT_LATE_APPROVAL_MINUTES, DEFAULT_LATE_GRACE_MINUTES
from ..core.enums import AttendanceStatus
from ..core.exceptions import MissingScheduleError
from ..sessions.model import Session, ShiftWindow
from ..worktime.calculator.standard_calculator import span_minutes
from .factory import PunctualityStrategyFactory

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PunctualityResult:
    late_minutes: Optional[int] = None
    overtime_minutes: Optional[int] = None
    status: Optional[AttendanceStatus] = None
    note: Optional[str] = None
    requires_approval: bool = False


def _require_shift(shift: Optional[ShiftWindow]) -> ShiftWindow:
    if shift is None:
        raise MissingScheduleError("No shift attached to the day")
    return shift


class LatenessOvertimeCalculator:
    """Compares a day's sessions with its shift.

    Times are placed on a continuous axis starting at the shift's day: for an
    overnight shift, clock-ins up to the shift end belong to the next day, and
    session ends are clock-in plus the session's span.
    """

    def __init__(
        self,
        *,
        strategy_factory: PunctualityStrategyFactory | None = None,
        grace_minutes: int = DEFAULT_LATE_GRACE_MINUTES,
        approval_after_minutes: int = DEFAULT_LATE_APPROVAL_MINUTES,
    ):
        self._factory = strategy_factory or PunctualityStrategyFactory()
        self._grace_minutes = int(grace_minutes)
        self._approval_after_minutes = int(approval_after_minutes)

    def session_end_on_axis(self, session: Session, shift: ShiftWindow, *, now_minute: Optional[int]) -> Optional[int]:
        """Effective end of a session; ``now_minute`` stands in for a missing clock-out."""
        start = shift.clock_in_on_axis(session.clock_in_minute)
        if not session.is_open:
            return start + span_minutes(session.clock_in_minute, session.clock_out_minute)
        if now_minute is None:
            return None
        return start + max(now_minute - session.clock_in_minute, 0)

    def _ordered(self, sessions: Sequence[Session], shift: ShiftWindow) -> list[Session]:
        return sorted(sessions, key=lambda s: shift.clock_in_on_axis(s.clock_in_minute))

    def late_minutes(self, sessions: Sequence[Session], shift: Optional[ShiftWindow]) -> Optional[int]:
        shift = _require_shift(shift)
        if not sessions:
            return None
        first = self._ordered(sessions, shift)[0]
        return max(shift.clock_in_on_axis(first.clock_in_minute) - shift.start_minute, 0)

    def overtime_minutes(
        self,
        sessions: Sequence[Session],
        shift: Optional[ShiftWindow],
        *,
        is_today: bool,
        now_minute: Optional[int] = None,
    ) -> Optional[int]:
        """Overtime past shift end; an open session is only estimated live, on today."""
        shift = _require_shift(shift)
        if not sessions:
            return None
        last = self._ordered(sessions, shift)[-1]
        end = self.session_end_on_axis(last, shift, now_minute=now_minute if is_today else None)
        if end is None:
            return None
        return max(end - shift.end_on_axis, 0)

    def _status(self, sessions: Sequence[Session], shift: ShiftWindow) -> PunctualityResult:
        ordered = self._ordered(sessions, shift)
        arrival_offset = shift.clock_in_on_axis(ordered[0].clock_in_minute) - shift.start_minute
        strategy = self._factory.for_arrival(offset_minutes=arrival_offset, grace_minutes=self._grace_minutes)
        decision = strategy.decide_arrival(
            offset_minutes=arrival_offset,
            approval_after_minutes=self._approval_after_minutes,
        )

        status, note = decision.status, decision.note
        last = ordered[-1]
        if not last.is_open:
            departure_offset = self.session_end_on_axis(last, shift, now_minute=None) - shift.end_on_axis
            strategy = self._factory.for_departure(offset_minutes=departure_offset, current_status=status)
            departure = strategy.decide_departure(offset_minutes=departure_offset, current=status)
            status, note = departure.status, departure.note or note

        return PunctualityResult(status=status, note=note, requires_approval=decision.requires_approval)

    def calculate(
        self,
        sessions: Sequence[Session],
        shift: Optional[ShiftWindow],
        *,
        is_today: bool,
        now_minute: Optional[int] = None,
    ) -> PunctualityResult:
        """Late/overtime minutes plus status; all ``None`` when no shift applies."""
        try:
            late = self.late_minutes(sessions, shift)
            overtime = self.overtime_minutes(sessions, shift, is_today=is_today, now_minute=now_minute)
        except MissingScheduleError as e:
            logger.debug("Lateness/overtime not applicable: %s", e)
            return PunctualityResult()

        if not sessions:
            return PunctualityResult(late_minutes=late, overtime_minutes=overtime)

        status = self._status(sessions, shift)
        return PunctualityResult(
            late_minutes=late,
            overtime_minutes=overtime,
            status=status.status,
            note=status.note,
            requires_approval=status.requires_approval,
        )
