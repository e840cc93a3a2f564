from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Mapping, Optional, Sequence

from ..core.enums import AttendanceStatus, DayStatus
from ..sessions.model import DaySummary


@dataclass(frozen=True)
class WeekSummary:
    """Read-model: một tuần chấm công của một nhân viên (future days removed)."""

    days: tuple[DaySummary, ...]
    total_worked_minutes: int
    total_overtime_minutes: int
    negative_minutes: int = 0
    status_counts: dict[str, int] = field(default_factory=dict)
    week_start: Optional[date] = None


def _negative_minutes(statistics: Optional[Mapping[str, Any]]) -> int:
    """Backend override for hours short of target; reserved policy, 0 otherwise."""
    if not statistics:
        return 0
    value = statistics.get("totalNegativeHours")
    if value is None:
        return 0
    try:
        return max(int(round(float(value) * 60)), 0)
    except (TypeError, ValueError):
        return 0


class WeekSummaryAggregator:
    """Rolls the seven DaySummaries of a week into totals and counts."""

    @staticmethod
    def order_days(days: Sequence[DaySummary]) -> list[DaySummary]:
        """Drop future days; today first, then newest to oldest."""
        visible = [d for d in days if not d.is_future]
        return sorted(visible, key=lambda d: (not d.is_today, -d.work_date.toordinal()))

    @staticmethod
    def status_counts(days: Sequence[DaySummary]) -> dict[str, int]:
        counts = {
            DayStatus.PRESENT.value: 0,
            DayStatus.IN_PROGRESS.value: 0,
            DayStatus.ABSENT.value: 0,
            "late": 0,
        }
        for day in days:
            status = day.day_status
            if status == DayStatus.FUTURE:
                continue
            counts[status.value] += 1
            if day.status == AttendanceStatus.LATE:
                counts["late"] += 1
        return counts

    def summarize(
        self,
        days: Sequence[DaySummary],
        *,
        statistics: Optional[Mapping[str, Any]] = None,
        week_start: Optional[date] = None,
    ) -> WeekSummary:
        ordered = self.order_days(days)
        return WeekSummary(
            days=tuple(ordered),
            total_worked_minutes=sum(d.worked_minutes for d in ordered if d.worked_minutes is not None),
            total_overtime_minutes=sum(d.overtime_minutes for d in ordered if d.overtime_minutes is not None),
            negative_minutes=_negative_minutes(statistics),
            status_counts=self.status_counts(ordered),
            week_start=week_start,
        )
