from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import AttendanceStatus
from .strategies.base import PunctualityStrategy
from .strategies.early_strategy import EarlyArrivalStrategy, EarlyLeaveStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.normal_strategy import NormalStrategy


@dataclass
class PunctualityStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules."""

    def for_arrival(self, *, offset_minutes: int, grace_minutes: int) -> PunctualityStrategy:
        if offset_minutes < -grace_minutes:
            return EarlyArrivalStrategy()
        if offset_minutes <= grace_minutes:
            return NormalStrategy()
        return LateStrategy()

    def for_departure(self, *, offset_minutes: int, current_status: AttendanceStatus) -> PunctualityStrategy:
        if offset_minutes < 0 and current_status == AttendanceStatus.ON_TIME:
            return EarlyLeaveStrategy()
        return NormalStrategy()
