from __future__ import annotations

import logging
from itertools import groupby
from typing import Iterable

from ..core.enums import ClockEventKind
from ..timing.normalizer import Timestamp, TimeNormalizer
from .model import ClockEvent, TimeEntry

logger = logging.getLogger(__name__)


def _entry(normalizer: TimeNormalizer, clock_in: ClockEvent, clock_out: ClockEvent | None) -> TimeEntry:
    return TimeEntry(
        id=f"{clock_in.employee_id}:{clock_in.timestamp.isoformat()}",
        employee_id=clock_in.employee_id,
        work_date=normalizer.local_date(clock_in.timestamp),
        clock_in=Timestamp(clock_in.timestamp),
        clock_out=Timestamp(clock_out.timestamp) if clock_out else None,
    )


def pair_clock_events(events: Iterable[ClockEvent], normalizer: TimeNormalizer) -> list[TimeEntry]:
    """Pair raw clock events into time entries, one per clock-in.

    The entry belongs to the local date of its clock-in, so a clock-out after
    midnight still closes the previous day's entry. A clock-in that follows
    another clock-in leaves the earlier entry open; a clock-out with nothing
    open is dropped.
    """
    entries: list[TimeEntry] = []
    ordered = sorted(events, key=lambda e: (e.employee_id, e.timestamp))

    for _, employee_events in groupby(ordered, key=lambda e: e.employee_id):
        pending: ClockEvent | None = None
        for event in employee_events:
            if event.kind == ClockEventKind.CLOCK_IN:
                if pending is not None:
                    logger.warning("Clock-in at %s superseded by clock-in at %s", pending.timestamp, event.timestamp)
                    entries.append(_entry(normalizer, pending, None))
                pending = event
            elif pending is None:
                logger.warning("Dropping clock-out at %s with no open clock-in", event.timestamp)
            else:
                entries.append(_entry(normalizer, pending, event))
                pending = None

        if pending is not None:
            entries.append(_entry(normalizer, pending, None))

    return entries
