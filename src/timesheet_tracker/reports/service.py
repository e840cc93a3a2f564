from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Sequence

from ..common.clock import Clock, SystemClock
from ..common.datetime_utils import format_minutes, format_minutes_human, minute_label, week_dates
from ..common.validators import require_identifier
from ..core.constants import PLACEHOLDER, PRESENT_LABEL
from ..core.enums import AttendanceStatus, DayStatus
from ..entries.mapper import TimeEntryMapper
from ..entries.model import TimeEntry
from ..entries.repository import StatisticsRepository, TimeEntryRepository
from ..punctuality.calculator import LatenessOvertimeCalculator
from ..sessions.aggregator import SessionAggregator
from ..sessions.model import DaySummary, Session
from ..timeline.segmenter import TimelineSegment, TimelineSegmenter
from ..timing.breaks import BreakResolver
from ..timing.normalizer import Timestamp, TimeNormalizer
from ..worktime.calculator.base import WorkedTimeCalculator
from ..worktime.calculator.standard_calculator import StandardWorkedTimeCalculator
from .week import WeekSummary, WeekSummaryAggregator

logger = logging.getLogger(__name__)

STATUS_LABELS = {
    AttendanceStatus.EARLY: "Early",
    AttendanceStatus.ON_TIME: "On time",
    AttendanceStatus.LATE: "Late",
    AttendanceStatus.EARLY_LEAVE: "Left early",
    AttendanceStatus.ABSENT: "Absent",
    AttendanceStatus.UNKNOWN: "Unknown",
}

STATUS_CSS = {
    AttendanceStatus.EARLY: "bg-info",
    AttendanceStatus.ON_TIME: "bg-success",
    AttendanceStatus.LATE: "bg-danger",
    AttendanceStatus.EARLY_LEAVE: "bg-warning text-dark",
    AttendanceStatus.ABSENT: "bg-secondary",
    AttendanceStatus.UNKNOWN: "bg-secondary",
}


def _session_label(session: Session) -> str:
    end = PRESENT_LABEL if session.is_open else minute_label(session.clock_out_minute)
    return f"{minute_label(session.clock_in_minute)} - {end}"


class TimesheetService:
    """Runs the time-accounting pipeline over one employee's entries.

    records -> TimeEntry -> sessions -> worked / late / overtime -> DaySummary
    -> WeekSummary and timeline segments. Every call works on a fresh
    snapshot, so it is safe to call again whenever the host wants a refresh.
    """

    def __init__(
        self,
        entries: TimeEntryRepository,
        *,
        normalizer: TimeNormalizer | None = None,
        calculator: WorkedTimeCalculator | None = None,
        punctuality: LatenessOvertimeCalculator | None = None,
        segmenter: TimelineSegmenter | None = None,
        week_aggregator: WeekSummaryAggregator | None = None,
        statistics: StatisticsRepository | None = None,
        clock: Clock | None = None,
    ):
        self._entries = entries
        self._normalizer = normalizer or TimeNormalizer()
        self._mapper = TimeEntryMapper(self._normalizer)
        self._aggregator = SessionAggregator(self._normalizer, BreakResolver(self._normalizer))
        self._calculator = calculator or StandardWorkedTimeCalculator()
        self._punctuality = punctuality or LatenessOvertimeCalculator()
        self._segmenter = segmenter or TimelineSegmenter()
        self._week = week_aggregator or WeekSummaryAggregator()
        self._statistics = statistics
        self._clock = clock or SystemClock()

    def _now(self, now: datetime | None) -> datetime:
        return now or self._clock.now()

    def fetch_entries(self, employee_id: str, *, start_date: date, end_date: date) -> list[TimeEntry]:
        records = self._entries.list_for_employee(employee_id, start_date=start_date, end_date=end_date)
        return self._mapper.from_records(records)

    def summarize_entries(
        self,
        employee_id: str,
        work_date: date,
        entries: Sequence[TimeEntry],
        *,
        now: datetime | None = None,
    ) -> DaySummary:
        """Pure part of the pipeline: one employee-day from already-fetched entries."""
        now = self._now(now)
        today = self._normalizer.local_date(now)
        now_minute = self._normalizer.minute_of_day(Timestamp(now))

        day = self._aggregator.aggregate(entries, work_date=work_date, today=today)
        if day.is_future:
            return DaySummary(employee_id=employee_id, work_date=work_date, shift=day.shift, is_future=True)

        sessions = day.sessions
        worked = self._calculator.day_minutes(sessions)
        live = None
        if day.is_today and worked is None:
            live = self._calculator.live_day_minutes(sessions, now_minute)

        result = self._punctuality.calculate(sessions, day.shift, is_today=day.is_today, now_minute=now_minute)
        status = AttendanceStatus.ABSENT if day.is_absent else result.status

        return DaySummary(
            employee_id=employee_id,
            work_date=work_date,
            sessions=sessions,
            shift=day.shift,
            worked_minutes=worked,
            break_minutes=self._calculator.break_minutes(sessions),
            live_worked_minutes=live,
            late_minutes=result.late_minutes,
            overtime_minutes=result.overtime_minutes,
            scheduled_minutes=day.shift.scheduled_minutes if day.shift else None,
            status=status,
            status_note=result.note,
            requires_approval=result.requires_approval,
            is_absent=day.is_absent,
            is_future=False,
            is_today=day.is_today,
        )

    def entries_for_day(self, employee_id: str, work_date: date) -> list[TimeEntry]:
        employee_id = str(require_identifier(employee_id, "employeeId"))
        entries = self.fetch_entries(employee_id, start_date=work_date, end_date=work_date)
        return self._aggregator.group_by_day(entries).get((employee_id, work_date), [])

    def summarize_day(self, employee_id: str, work_date: date, *, now: datetime | None = None) -> DaySummary:
        entries = self.entries_for_day(employee_id, work_date)
        return self.summarize_entries(str(employee_id), work_date, entries, now=now)

    def summarize_week_entries(
        self,
        employee_id: str,
        reference_date: date,
        entries: Sequence[TimeEntry],
        *,
        now: datetime | None = None,
        statistics=None,
    ) -> WeekSummary:
        now = self._now(now)
        dates = week_dates(reference_date)
        groups = self._aggregator.group_by_day(entries)
        days = [self.summarize_entries(employee_id, d, groups.get((employee_id, d), []), now=now) for d in dates]
        return self._week.summarize(days, statistics=statistics, week_start=dates[0])

    def summarize_week(self, employee_id: str, reference_date: date, *, now: datetime | None = None) -> WeekSummary:
        """Monday..Sunday around ``reference_date``: fetch, compute, aggregate."""
        employee_id = str(require_identifier(employee_id, "employeeId"))
        dates = week_dates(reference_date)
        entries = self.fetch_entries(employee_id, start_date=dates[0], end_date=dates[-1])

        statistics = None
        if self._statistics is not None:
            statistics = self._statistics.get_week_statistics(employee_id, start_date=dates[0], end_date=dates[-1])

        week = self.summarize_week_entries(employee_id, reference_date, entries, now=now, statistics=statistics)
        logger.info(
            "Week of %s for %s: %d entries, %d visible days, %d worked minutes",
            dates[0],
            employee_id,
            len(entries),
            len(week.days),
            week.total_worked_minutes,
        )
        return week

    def timeline_for_day(self, day: DaySummary, *, now: datetime | None = None) -> list[TimelineSegment]:
        if day.is_future or not day.sessions:
            return []
        now_minute = self._normalizer.minute_of_day(Timestamp(self._now(now)))
        return self._segmenter.segment_day(day.sessions, day.shift, is_today=day.is_today, now_minute=now_minute)

    def to_row(self, day: DaySummary) -> dict:
        """Display row; unavailable values show the placeholder."""
        status = day.status
        if len(day.sessions) > 1:
            clocked = " | ".join(f"{i}. {_session_label(s)}" for i, s in enumerate(day.sessions, start=1))
        elif day.sessions:
            clocked = _session_label(day.sessions[0])
        else:
            clocked = PLACEHOLDER

        return {
            "date": day.work_date.strftime("%Y-%m-%d"),
            "day_name": day.work_date.strftime("%a"),
            "clocked_hours": clocked,
            "total_hours": format_minutes(day.worked_minutes),
            "break_time": format_minutes_human(day.break_minutes),
            "late_arrival": format_minutes(day.late_minutes),
            "overtime": format_minutes(day.overtime_minutes),
            "status": STATUS_LABELS.get(status, PLACEHOLDER) if status else PLACEHOLDER,
            "css_class": STATUS_CSS.get(status, "bg-secondary"),
            "is_today": day.is_today,
            "in_progress": day.day_status == DayStatus.IN_PROGRESS,
        }

    def week_rows(self, week: WeekSummary) -> list[dict]:
        return [self.to_row(d) for d in week.days]
