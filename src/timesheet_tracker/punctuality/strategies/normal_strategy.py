from __future__ import annotations

from ...core.enums import AttendanceStatus
from .base import PunctualityStrategy, StatusDecision


class NormalStrategy(PunctualityStrategy):
    """On-time arrival (within grace), normal departure."""

    def decide_arrival(self, *, offset_minutes: int, approval_after_minutes: int) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.ON_TIME)

    def decide_departure(self, *, offset_minutes: int, current: AttendanceStatus) -> StatusDecision:
        return StatusDecision(status=current)
