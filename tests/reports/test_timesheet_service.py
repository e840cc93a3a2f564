from __future__ import annotations

from datetime import date
from typing import Optional

import pytest

from timesheet_tracker.core.enums import AttendanceStatus, DayStatus, SegmentType
from timesheet_tracker.core.exceptions import ValidationError
from timesheet_tracker.reports.service import TimesheetService


class InMemoryEntries:
    def __init__(self, records):
        self.records = list(records)
        self.calls = []

    def list_for_employee(self, employee_id: str, *, start_date: date, end_date: date):
        self.calls.append((employee_id, start_date, end_date))
        return [r for r in self.records if str(r.get("employeeId", r.get("employee_id"))) == employee_id]


class StaticStatistics:
    def __init__(self, stats: Optional[dict]):
        self.stats = stats

    def get_week_statistics(self, employee_id: str, *, start_date: date, end_date: date):
        return self.stats


NINE_TO_FIVE = {"startTime": "09:00", "endTime": "17:00"}


def _record(day: str, clock_in, clock_out=None, *, breaks=(), shift=None, employee_id="e1", entry_id=None):
    record = {
        "id": entry_id or f"{day}-{clock_in}",
        "employeeId": employee_id,
        "date": day,
        "clockIn": clock_in,
        "clockOut": clock_out,
        "breaks": list(breaks),
    }
    if shift is not None:
        record["shift"] = shift
    return record


def _service(records, clock, statistics=None) -> TimesheetService:
    return TimesheetService(InMemoryEntries(records), statistics=statistics, clock=clock)


def test_day_with_shift_late_and_overtime(clock):
    records = [
        _record(
            "2025-01-13",
            "09:15",
            "17:30",
            breaks=[{"startTime": "13:00", "endTime": "13:30"}],
            shift=NINE_TO_FIVE,
        )
    ]

    day = _service(records, clock).summarize_day("e1", date(2025, 1, 13))

    assert day.worked_minutes == 465
    assert day.break_minutes == 30
    assert day.late_minutes == 15
    assert day.overtime_minutes == 30
    assert day.scheduled_minutes == 480
    assert day.status == AttendanceStatus.ON_TIME
    assert day.day_status == DayStatus.PRESENT


def test_day_without_shift_is_not_applicable(clock):
    day = _service([_record("2025-01-13", "08:00", "16:00")], clock).summarize_day("e1", date(2025, 1, 13))

    assert day.worked_minutes == 480
    assert day.late_minutes is None
    assert day.overtime_minutes is None
    assert day.status is None


def test_overnight_entry(clock):
    records = [_record("2025-01-13", "22:10", "06:05", shift={"startTime": "22:00", "endTime": "06:00"})]

    day = _service(records, clock).summarize_day("e1", date(2025, 1, 13))

    assert day.worked_minutes == 475
    assert day.late_minutes == 10
    assert day.scheduled_minutes == 480


def test_today_open_session_is_in_progress(clock):
    records = [_record("2025-01-15", "09:00", shift=NINE_TO_FIVE)]

    service = _service(records, clock)
    day = service.summarize_day("e1", date(2025, 1, 15))

    assert day.is_today
    assert day.worked_minutes is None
    assert day.live_worked_minutes == 120
    assert day.overtime_minutes == 0
    assert day.day_status == DayStatus.IN_PROGRESS

    (segment,) = service.timeline_for_day(day)
    assert segment.type == SegmentType.WORKING
    assert segment.is_progressive


def test_clocking_out_gives_a_final_total(clock):
    records = [_record("2025-01-15", "09:00", shift=NINE_TO_FIVE)]
    service = _service(records, clock)
    assert service.summarize_day("e1", date(2025, 1, 15)).worked_minutes is None

    records[0]["clockOut"] = "10:45"

    assert service.summarize_day("e1", date(2025, 1, 15)).worked_minutes == 105
    assert service.summarize_day("e1", date(2025, 1, 15)).worked_minutes == 105


def test_absent_and_future_days(clock):
    service = _service([], clock)

    absent = service.summarize_day("e1", date(2025, 1, 14))
    future = service.summarize_day("e1", date(2025, 1, 16))

    assert absent.is_absent
    assert absent.status == AttendanceStatus.ABSENT
    assert future.is_future
    assert future.worked_minutes is None
    assert service.timeline_for_day(future) == []


def test_malformed_records_do_not_fail_the_day(clock):
    records = [
        {"date": "2025-01-13", "clockIn": "09:00", "clockOut": "17:00"},
        _record("2025-01-13", "not-a-time", "12:00", entry_id="broken"),
        _record("2025-01-13", "13:00", "17:00", entry_id="good"),
    ]

    day = _service(records, clock).summarize_day("e1", date(2025, 1, 13))

    assert [s.entry_id for s in day.sessions] == ["good"]
    assert day.worked_minutes == 240


def test_timestamps_and_aliases_in_records(clock):
    records = [
        {
            "_id": "x1",
            "employee_id": "e1",
            "work_date": "2025-01-13",
            "clock_in": "2025-01-13T09:00:00Z",
            "clock_out": "2025-01-13T17:00:00Z",
            "breaks": [{"breakStart": "12:00", "breakEnd": "12:30"}, {"duration": 15}],
        }
    ]

    day = _service(records, clock).summarize_day("e1", date(2025, 1, 13))

    assert day.worked_minutes == 480 - 45


def test_week_summary(clock):
    records = [
        _record("2025-01-13", "09:15", "17:30", shift=NINE_TO_FIVE),
        _record("2025-01-14", "09:00", "17:00", shift=NINE_TO_FIVE),
    ]
    service = _service(records, clock, statistics=StaticStatistics({"totalNegativeHours": 2}))

    week = service.summarize_week("e1", date(2025, 1, 15))

    assert [d.work_date for d in week.days] == [date(2025, 1, 15), date(2025, 1, 14), date(2025, 1, 13)]
    assert week.total_worked_minutes == 495 + 480
    assert week.total_overtime_minutes == 30
    assert week.negative_minutes == 120
    assert week.status_counts["absent"] == 1
    assert service._entries.calls == [("e1", date(2025, 1, 13), date(2025, 1, 19))]


def test_rows_use_placeholders(clock):
    records = [
        _record("2025-01-13", "09:15", "17:30", breaks=[{"duration": 30}], shift=NINE_TO_FIVE),
        _record("2025-01-14", "08:00", "16:00"),
        _record("2025-01-15", "09:00"),
    ]
    service = _service(records, clock)

    rows = {row["date"]: row for row in service.week_rows(service.summarize_week("e1", date(2025, 1, 15)))}

    monday = rows["2025-01-13"]
    assert monday["clocked_hours"] == "09:15 - 17:30"
    assert monday["total_hours"] == "07:45"
    assert monday["break_time"] == "0h 30m"
    assert monday["late_arrival"] == "00:15"
    assert monday["overtime"] == "00:30"
    assert monday["status"] == "On time"

    tuesday = rows["2025-01-14"]
    assert tuesday["late_arrival"] == "--"
    assert tuesday["overtime"] == "--"
    assert tuesday["status"] == "--"
    assert tuesday["break_time"] == "--"

    today = rows["2025-01-15"]
    assert today["clocked_hours"] == "09:00 - Present"
    assert today["total_hours"] == "--"
    assert today["in_progress"] is True
    assert today["is_today"] is True


def test_blank_employee_is_rejected(clock):
    with pytest.raises(ValidationError):
        _service([], clock).summarize_week("  ", date(2025, 1, 15))


def test_rows_tell_zero_minutes_from_not_applicable(clock):
    records = [
        _record("2025-01-13", "09:00", "17:00", shift=NINE_TO_FIVE),
        _record("2025-01-14", "09:00", "17:00"),
    ]
    service = _service(records, clock)

    with_shift = service.to_row(service.summarize_day("e1", date(2025, 1, 13)))
    without_shift = service.to_row(service.summarize_day("e1", date(2025, 1, 14)))

    assert (with_shift["late_arrival"], with_shift["overtime"]) == ("00:00", "00:00")
    assert (without_shift["late_arrival"], without_shift["overtime"]) == ("--", "--")
