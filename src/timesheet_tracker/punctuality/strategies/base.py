from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from ...core.enums import AttendanceStatus


@dataclass(frozen=True)
class StatusDecision:
    status: AttendanceStatus
    note: Optional[str] = None
    requires_approval: bool = False


class PunctualityStrategy(ABC):
    """Strategy Pattern: encapsulate how we decide an attendance status.

    Offsets are signed minutes against the shift (positive = after the shift
    boundary).
    """

    @abstractmethod
    def decide_arrival(self, *, offset_minutes: int, approval_after_minutes: int) -> StatusDecision:
        raise NotImplementedError

    @abstractmethod
    def decide_departure(self, *, offset_minutes: int, current: AttendanceStatus) -> StatusDecision:
        raise NotImplementedError
