from __future__ import annotations

from ...core.enums import AttendanceStatus
from .base import PunctualityStrategy, StatusDecision


class EarlyArrivalStrategy(PunctualityStrategy):
    """Clock-in before the shift start, beyond the grace buffer."""

    def decide_arrival(self, *, offset_minutes: int, approval_after_minutes: int) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.EARLY, note=f"Clocked in {abs(offset_minutes)} minutes early")

    def decide_departure(self, *, offset_minutes: int, current: AttendanceStatus) -> StatusDecision:
        return StatusDecision(status=current)


class EarlyLeaveStrategy(PunctualityStrategy):
    """Early leave on checkout (only when check-in was ON_TIME)."""

    def decide_arrival(self, *, offset_minutes: int, approval_after_minutes: int) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.UNKNOWN)

    def decide_departure(self, *, offset_minutes: int, current: AttendanceStatus) -> StatusDecision:
        return StatusDecision(
            status=AttendanceStatus.EARLY_LEAVE,
            note=f"Clocked out {abs(offset_minutes)} minutes before shift end",
        )
