from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime
from typing import Callable, Optional, Sequence

from ..common.clock import Clock, SystemClock
from ..core.enums import RefreshReason
from ..core.exceptions import ValidationError
from ..entries.model import TimeEntry
from ..reports.service import TimesheetService
from ..sessions.model import DaySummary
from ..timeline.segmenter import TimelineSegment
from ..timing.normalizer import Timestamp
from .trigger import RecomputeTrigger

logger = logging.getLogger(__name__)

OPTIMISTIC_ENTRY_ID = "optimistic"


class LiveTimesheetView:
    """Keeps one employee-day summary and its timeline current.

    Fetch-type refreshes (poll, clock action, broadcast) reload the entries;
    a tick recomputes from the cached entries against the new "now" only.
    Optimistic clock actions edit the cached entries until the next
    authoritative fetch replaces them.
    """

    def __init__(
        self,
        service: TimesheetService,
        employee_id: str,
        work_date: date,
        *,
        trigger: RecomputeTrigger | None = None,
        clock: Clock | None = None,
    ):
        self._service = service
        self.employee_id = str(employee_id)
        self.work_date = work_date
        self._clock = clock or SystemClock()
        self._entries: list[TimeEntry] = []
        self._optimistic = False
        self.summary: Optional[DaySummary] = None
        self.segments: list[TimelineSegment] = []
        self._unsubscribe: Optional[Callable[[], None]] = None
        if trigger is not None:
            self._unsubscribe = trigger.subscribe(self.on_refresh)

    @property
    def is_optimistic(self) -> bool:
        return self._optimistic

    @property
    def entries(self) -> tuple[TimeEntry, ...]:
        return tuple(self._entries)

    def on_refresh(self, reason: RefreshReason) -> None:
        if reason == RefreshReason.TICK:
            self.recompute()
        else:
            self.refresh()

    def refresh(self) -> DaySummary:
        """Authoritative fetch; drops any optimistic state."""
        return self.reconcile(self._service.entries_for_day(self.employee_id, self.work_date))

    def reconcile(self, entries: Sequence[TimeEntry]) -> DaySummary:
        self._entries = list(entries)
        self._optimistic = False
        return self.recompute()

    def recompute(self) -> DaySummary:
        now = self._clock.now()
        self.summary = self._service.summarize_entries(self.employee_id, self.work_date, self._entries, now=now)
        self.segments = self._service.timeline_for_day(self.summary, now=now)
        return self.summary

    def apply_optimistic_clock_in(self, at: datetime | None = None) -> DaySummary:
        """Show a new open session before the backend confirms it."""
        entry = TimeEntry(
            id=OPTIMISTIC_ENTRY_ID,
            employee_id=self.employee_id,
            work_date=self.work_date,
            clock_in=Timestamp(at or self._clock.now()),
        )
        self._entries.append(entry)
        self._optimistic = True
        logger.debug("Optimistic clock-in for %s on %s", self.employee_id, self.work_date)
        return self.recompute()

    def apply_optimistic_clock_out(self, at: datetime | None = None) -> DaySummary:
        """Close the latest open entry before the backend confirms it."""
        for index in range(len(self._entries) - 1, -1, -1):
            if self._entries[index].clock_out is None:
                break
        else:
            raise ValidationError("Không có phiên chấm công đang mở")

        self._entries[index] = replace(self._entries[index], clock_out=Timestamp(at or self._clock.now()))
        self._optimistic = True
        logger.debug("Optimistic clock-out for %s on %s", self.employee_id, self.work_date)
        return self.recompute()

    def close(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
