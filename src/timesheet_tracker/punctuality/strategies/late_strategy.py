from __future__ import annotations

from ...core.enums import AttendanceStatus
from .base import PunctualityStrategy, StatusDecision


class LateStrategy(PunctualityStrategy):
    """Late arrival; very late arrivals need a manager's approval."""

    def decide_arrival(self, *, offset_minutes: int, approval_after_minutes: int) -> StatusDecision:
        if offset_minutes > approval_after_minutes:
            return StatusDecision(
                status=AttendanceStatus.LATE,
                note=f"Clocked in {offset_minutes} minutes late - requires manager approval",
                requires_approval=True,
            )
        return StatusDecision(status=AttendanceStatus.LATE, note=f"Clocked in {offset_minutes} minutes late")

    def decide_departure(self, *, offset_minutes: int, current: AttendanceStatus) -> StatusDecision:
        return StatusDecision(status=current)
