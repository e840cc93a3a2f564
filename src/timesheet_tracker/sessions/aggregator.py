from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional, Sequence

from ..common.validators import require_identifier
from ..core.exceptions import InvalidTimeError, MissingScheduleError, ValidationError
from ..entries.model import TimeEntry
from ..timing.breaks import BreakResolver
from ..timing.normalizer import TimeNormalizer
from .model import Session, ShiftWindow

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AggregatedDay:
    work_date: date
    sessions: tuple[Session, ...]
    shift: Optional[ShiftWindow]
    is_today: bool
    is_future: bool
    is_absent: bool


class SessionAggregator:
    """Groups one employee-day's entries into ordered sessions."""

    def __init__(self, normalizer: TimeNormalizer, breaks: BreakResolver):
        self._normalizer = normalizer
        self._breaks = breaks

    def group_by_day(self, entries: Iterable[TimeEntry]) -> dict[tuple[str, date], list[TimeEntry]]:
        groups: dict[tuple[str, date], list[TimeEntry]] = defaultdict(list)
        for entry in entries:
            try:
                employee_id = require_identifier(entry.employee_id, "employeeId")
                work_date = require_identifier(entry.work_date, "date")
            except ValidationError as e:
                logger.warning("Excluding entry %s: %s", entry.id, e)
                continue
            groups[(employee_id, work_date)].append(entry)
        return dict(groups)

    def to_session(self, entry: TimeEntry) -> Optional[Session]:
        if entry.clock_in is None:
            logger.warning("Entry %s has no usable clock-in, treating as absent", entry.id)
            return None
        try:
            clock_in = self._normalizer.minute_of_day(entry.clock_in)
        except InvalidTimeError as e:
            logger.warning("Entry %s clock-in unusable (%s), treating as absent", entry.id, e)
            return None

        clock_out = None
        if entry.clock_out is not None:
            try:
                clock_out = self._normalizer.minute_of_day(entry.clock_out)
            except InvalidTimeError as e:
                logger.debug("Entry %s clock-out unusable (%s), session stays open", entry.id, e)

        resolved = (self._breaks.interval(b) for b in entry.breaks)
        return Session(
            clock_in_minute=clock_in,
            clock_out_minute=clock_out,
            breaks=tuple(b for b in resolved if b is not None),
            entry_id=entry.id,
            location=entry.location,
            work_type=entry.work_type,
        )

    def build_sessions(self, entries: Sequence[TimeEntry]) -> list[Session]:
        sessions = [s for s in (self.to_session(e) for e in entries) if s is not None]
        sessions.sort(key=lambda s: s.clock_in_minute)
        return sessions

    def _shift_window(self, entry: TimeEntry) -> ShiftWindow:
        if entry.shift is None:
            raise MissingScheduleError(f"Entry {entry.id} has no shift")
        try:
            start = self._normalizer.minute_of_day(entry.shift.start_time)
            end = self._normalizer.minute_of_day(entry.shift.end_time)
        except InvalidTimeError as e:
            raise MissingScheduleError(f"Entry {entry.id} shift unusable: {e}")
        return ShiftWindow(start_minute=start, end_minute=end, break_minutes=max(int(entry.shift.break_duration_minutes or 0), 0))

    def resolve_shift(self, entries: Sequence[TimeEntry]) -> Optional[ShiftWindow]:
        """Shift of the earliest entry that carries a usable one."""

        def order(entry: TimeEntry) -> int:
            minute = self._normalizer.try_minute_of_day(entry.clock_in)
            return minute if minute is not None else 10**6

        for entry in sorted(entries, key=order):
            try:
                return self._shift_window(entry)
            except MissingScheduleError as e:
                logger.debug("%s", e)
        return None

    @staticmethod
    def classify_day(work_date: date, today: date) -> tuple[bool, bool]:
        """(is_today, is_future)."""
        return work_date == today, work_date > today

    def aggregate(self, entries: Sequence[TimeEntry], *, work_date: date, today: date) -> AggregatedDay:
        is_today, is_future = self.classify_day(work_date, today)
        sessions = tuple(self.build_sessions(entries))
        return AggregatedDay(
            work_date=work_date,
            sessions=sessions,
            shift=self.resolve_shift(entries),
            is_today=is_today,
            is_future=is_future,
            is_absent=not sessions and not is_future,
        )
