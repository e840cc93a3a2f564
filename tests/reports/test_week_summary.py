from datetime import date

from timesheet_tracker.core.enums import AttendanceStatus
from timesheet_tracker.reports.week import WeekSummaryAggregator
from timesheet_tracker.sessions.model import DaySummary, Session

TODAY = date(2025, 1, 15)


def _day(day: int, **kwargs) -> DaySummary:
    work_date = date(2025, 1, day)
    return DaySummary(
        employee_id="e1",
        work_date=work_date,
        is_today=work_date == TODAY,
        is_future=work_date > TODAY,
        **kwargs,
    )


def _week():
    return [
        _day(
            13,
            sessions=(Session(555, 1050),),
            worked_minutes=465,
            late_minutes=15,
            overtime_minutes=30,
            status=AttendanceStatus.ON_TIME,
        ),
        _day(14, sessions=(Session(570),), worked_minutes=None, late_minutes=30, status=AttendanceStatus.LATE),
        _day(15, is_absent=True, worked_minutes=0),
        _day(16, worked_minutes=999, overtime_minutes=999),
        _day(17),
        _day(18),
        _day(19),
    ]


def test_future_days_are_dropped_and_today_comes_first():
    week = WeekSummaryAggregator().summarize(_week(), week_start=date(2025, 1, 13))

    assert [d.work_date.day for d in week.days] == [15, 14, 13]
    assert week.week_start == date(2025, 1, 13)


def test_totals_skip_in_progress_and_future_days():
    week = WeekSummaryAggregator().summarize(_week())

    assert week.total_worked_minutes == 465
    assert week.total_overtime_minutes == 30


def test_status_counts():
    week = WeekSummaryAggregator().summarize(_week())

    assert week.status_counts == {"present": 1, "in_progress": 1, "absent": 1, "late": 1}


def test_negative_minutes_default_to_zero():
    assert WeekSummaryAggregator().summarize(_week()).negative_minutes == 0


def test_negative_minutes_from_backend_statistics():
    aggregator = WeekSummaryAggregator()

    assert aggregator.summarize(_week(), statistics={"totalNegativeHours": 1.5}).negative_minutes == 90
    assert aggregator.summarize(_week(), statistics={"totalNegativeHours": "n/a"}).negative_minutes == 0


def test_late_count_follows_status_not_raw_minutes():
    days = [
        _day(13, sessions=(Session(550, 1020),), worked_minutes=470, late_minutes=10, status=AttendanceStatus.ON_TIME),
        _day(14, sessions=(Session(600, 1020),), worked_minutes=420, late_minutes=60, status=AttendanceStatus.LATE),
    ]

    assert WeekSummaryAggregator().status_counts(days)["late"] == 1
