import pytest

from timesheet_tracker.core.enums import AttendanceStatus
from timesheet_tracker.core.exceptions import MissingScheduleError
from timesheet_tracker.punctuality.calculator import LatenessOvertimeCalculator
from timesheet_tracker.sessions.model import Session, ShiftWindow
from timesheet_tracker.timing.breaks import ResolvedBreak

DAY_SHIFT = ShiftWindow(start_minute=540, end_minute=1020)
NIGHT_SHIFT = ShiftWindow(start_minute=1320, end_minute=360)


@pytest.fixture
def calculator() -> LatenessOvertimeCalculator:
    return LatenessOvertimeCalculator()


def test_late_arrival_and_overtime_on_same_day(calculator):
    sessions = [Session(555, 1050, breaks=(ResolvedBreak(30, 780, 810),))]

    result = calculator.calculate(sessions, DAY_SHIFT, is_today=False)

    assert result.late_minutes == 15
    assert result.overtime_minutes == 30
    # 15 minutes is still inside the grace buffer
    assert result.status == AttendanceStatus.ON_TIME


def test_no_shift_means_not_applicable(calculator):
    sessions = [Session(480, 960)]

    result = calculator.calculate(sessions, None, is_today=False)

    assert result.late_minutes is None
    assert result.overtime_minutes is None
    assert result.status is None


def test_rules_raise_missing_schedule_without_shift(calculator):
    with pytest.raises(MissingScheduleError):
        calculator.late_minutes([Session(480, 960)], None)
    with pytest.raises(MissingScheduleError):
        calculator.overtime_minutes([Session(480, 960)], None, is_today=False)


def test_split_sessions_use_first_in_and_last_out(calculator):
    sessions = [Session(780, 1020), Session(540, 720)]

    result = calculator.calculate(sessions, DAY_SHIFT, is_today=False)

    assert result.late_minutes == 0
    assert result.overtime_minutes == 0


def test_open_session_today_estimates_overtime_live(calculator):
    sessions = [Session(540)]

    before_end = calculator.overtime_minutes(sessions, DAY_SHIFT, is_today=True, now_minute=660)
    after_end = calculator.overtime_minutes(sessions, DAY_SHIFT, is_today=True, now_minute=1045)

    assert before_end == 0
    assert after_end == 25


def test_open_session_on_past_day_has_no_overtime(calculator):
    result = calculator.calculate([Session(540)], DAY_SHIFT, is_today=False, now_minute=1200)

    assert result.overtime_minutes is None
    assert result.late_minutes == 0


def test_overnight_shift(calculator):
    sessions = [Session(22 * 60 + 10, 6 * 60 + 5)]

    result = calculator.calculate(sessions, NIGHT_SHIFT, is_today=False)

    assert result.late_minutes == 10
    assert result.overtime_minutes == 5


def test_overnight_shift_clock_in_after_midnight_is_late(calculator):
    assert calculator.late_minutes([Session(30, 360)], NIGHT_SHIFT) == 150


def test_late_status_and_approval(calculator):
    late = calculator.calculate([Session(570, 1020)], DAY_SHIFT, is_today=False)
    very_late = calculator.calculate([Session(605, 1020)], DAY_SHIFT, is_today=False)

    assert late.status == AttendanceStatus.LATE
    assert late.note == "Clocked in 30 minutes late"
    assert not late.requires_approval
    assert very_late.requires_approval


def test_early_arrival(calculator):
    result = calculator.calculate([Session(510, 1020)], DAY_SHIFT, is_today=False)

    assert result.status == AttendanceStatus.EARLY
    assert result.late_minutes == 0


def test_early_leave_after_on_time_arrival(calculator):
    result = calculator.calculate([Session(540, 960)], DAY_SHIFT, is_today=False)

    assert result.status == AttendanceStatus.EARLY_LEAVE
    assert result.note == "Clocked out 60 minutes before shift end"


def test_late_arrival_stays_late_on_early_leave(calculator):
    result = calculator.calculate([Session(570, 960)], DAY_SHIFT, is_today=False)

    assert result.status == AttendanceStatus.LATE


def test_grace_is_configurable():
    strict = LatenessOvertimeCalculator(grace_minutes=5)

    assert strict.calculate([Session(550, 1020)], DAY_SHIFT, is_today=False).status == AttendanceStatus.LATE


def test_overnight_split_sessions_use_shift_order(calculator):
    sessions = [Session(180, 390), Session(1320, 120)]

    result = calculator.calculate(sessions, NIGHT_SHIFT, is_today=False)

    assert result.late_minutes == 0
    assert result.overtime_minutes == 30


def test_shift_places_clock_ins_on_its_own_axis():
    assert NIGHT_SHIFT.clock_in_on_axis(30) == 1470
    assert NIGHT_SHIFT.clock_in_on_axis(1330) == 1330
    assert DAY_SHIFT.clock_in_on_axis(30) == 30
