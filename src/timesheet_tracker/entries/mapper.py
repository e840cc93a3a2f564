from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Mapping, Optional

from ..common.datetime_utils import parse_iso_date
from ..common.validators import require_identifier
from ..core.exceptions import InvalidTimeError, ValidationError
from ..timing.normalizer import TimeNormalizer
from .model import BreakInterval, ShiftSchedule, TimeEntry

logger = logging.getLogger(__name__)

_BREAK_START_KEYS = ("startTime", "start_time", "breakStart", "start", "breakIn")
_BREAK_END_KEYS = ("endTime", "end_time", "breakEnd", "end", "breakOut", "resume")
_SHIFT_KEYS = ("shift", "shiftId", "assignedShift")


def _first(record: Mapping[str, Any], keys) -> Any:
    for key in keys:
        value = record.get(key)
        if value is not None and value != "":
            return value
    return None


class TimeEntryMapper:
    """Maps read-contract records (dicts) onto ``TimeEntry`` domain objects."""

    def __init__(self, normalizer: TimeNormalizer):
        self._normalizer = normalizer

    def _work_date(self, value: Any) -> date:
        value = require_identifier(value, "date")
        if isinstance(value, datetime):
            return self._normalizer.local_date(value)
        if isinstance(value, date):
            return value
        text = str(value)
        try:
            if len(text) == 10:
                return parse_iso_date(text)
            return self._normalizer.local_date(datetime.fromisoformat(text.replace("Z", "+00:00")))
        except ValueError:
            raise ValidationError(f"date không hợp lệ: {value!r}")

    def _break(self, item: Mapping[str, Any]) -> BreakInterval:
        duration = _first(item, ("duration", "durationMinutes", "duration_minutes"))
        return BreakInterval(
            start_time=self._normalizer.coerce_or_none(_first(item, _BREAK_START_KEYS)),
            end_time=self._normalizer.coerce_or_none(_first(item, _BREAK_END_KEYS)),
            duration_minutes=duration,
        )

    def _shift(self, record: Mapping[str, Any]) -> Optional[ShiftSchedule]:
        shift = _first(record, _SHIFT_KEYS)
        shift = shift if isinstance(shift, Mapping) else {}

        start = _first(shift, ("startTime", "start_time", "shiftStartTime")) or _first(record, ("shiftStartTime",))
        end = _first(shift, ("endTime", "end_time", "shiftEndTime")) or _first(record, ("shiftEndTime",))
        if start is None or end is None:
            return None

        try:
            start_raw = self._normalizer.coerce(start)
            end_raw = self._normalizer.coerce(end)
        except InvalidTimeError as e:
            logger.debug("Ignoring shift on record: %s", e)
            return None

        break_duration = _first(shift, ("breakDuration", "break_duration_minutes", "break"))
        if break_duration is None:
            break_duration = record.get("breakDuration")
        try:
            break_duration = int(break_duration) if break_duration is not None else None
        except (TypeError, ValueError):
            break_duration = None

        return ShiftSchedule(start_time=start_raw, end_time=end_raw, break_duration_minutes=break_duration)

    def from_record(self, record: Mapping[str, Any]) -> TimeEntry:
        """Build a ``TimeEntry``; raises ``ValidationError`` when employeeId/date are missing.

        Unparseable time values become ``None`` rather than failing the record.
        """
        employee_id = require_identifier(_first(record, ("employeeId", "employee_id", "employee")), "employeeId")
        work_date = self._work_date(_first(record, ("date", "work_date")))

        entry_id = _first(record, ("id", "_id", "entryId"))
        breaks = tuple(self._break(b) for b in (record.get("breaks") or []) if isinstance(b, Mapping))

        return TimeEntry(
            id=str(entry_id) if entry_id is not None else None,
            employee_id=str(employee_id),
            work_date=work_date,
            clock_in=self._normalizer.coerce_or_none(_first(record, ("clockIn", "clock_in"))),
            clock_out=self._normalizer.coerce_or_none(_first(record, ("clockOut", "clock_out"))),
            breaks=breaks,
            location=record.get("location"),
            work_type=_first(record, ("workType", "work_type")),
            shift=self._shift(record),
        )

    def from_records(self, records) -> list[TimeEntry]:
        """Map many records, excluding the ones with missing identifiers."""
        out: list[TimeEntry] = []
        for record in records or []:
            try:
                out.append(self.from_record(record))
            except ValidationError as e:
                logger.warning("Skipping time entry record: %s", e)
        return out
