from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Sequence

from ..common.datetime_utils import minute_label
from ..core.constants import (
    MINUTES_PER_DAY,
    PRESENT_LABEL,
    TIMELINE_END_MINUTE,
    TIMELINE_GAP_PERCENT,
    TIMELINE_START_MINUTE,
)
from ..core.enums import SegmentType
from ..sessions.model import Session, ShiftWindow
from ..worktime.calculator.standard_calculator import span_minutes

SEGMENT_LABELS = {
    SegmentType.LATE: "Late",
    SegmentType.WORKING: "Working time",
    SegmentType.BREAK: "Break",
    SegmentType.OVERTIME: "Overtime",
}


@dataclass(frozen=True)
class TimelineSegment:
    """A labeled span on the day axis, with its position on the 0-100 % bar.

    ``start_minute``/``end_minute`` may exceed 1439 for spans past midnight.
    A progressive segment ends "now" and may grow up to ``full_width``.
    """

    type: SegmentType
    start_minute: int
    end_minute: int
    left: float
    width: float
    label: str
    is_progressive: bool = False
    full_width: float = 0.0
    gap: float = 0.0

    @property
    def start_label(self) -> str:
        return minute_label(self.start_minute)

    @property
    def end_label(self) -> str:
        return PRESENT_LABEL if self.is_progressive else minute_label(self.end_minute)


class TimelineSegmenter:
    """Lays a day's sessions out as late / working / break / overtime segments."""

    def __init__(
        self,
        *,
        window_start: int = TIMELINE_START_MINUTE,
        window_end: int = TIMELINE_END_MINUTE,
        gap_percent: float = TIMELINE_GAP_PERCENT,
    ):
        self._window_start = int(window_start)
        self._window_end = int(window_end)
        self._gap_percent = float(gap_percent)

    def position(self, minute: int) -> float:
        """Minute on the day axis -> percent of the display window, clamped to [0, 100]."""
        offset = (minute - self._window_start) / (self._window_end - self._window_start) * 100
        return max(0.0, min(100.0, offset))

    def _segment(
        self,
        kind: SegmentType,
        start: int,
        end: int,
        *,
        progressive: bool = False,
        cap: Optional[int] = None,
    ) -> Optional[TimelineSegment]:
        left = self.position(start)
        width = self.position(end) - left
        full_width = width
        if progressive:
            full_width = max(self.position(cap if cap is not None else self._window_end) - left, 0.0)
            width = max(min(width, full_width), 0.0)
        elif width <= 0:
            return None
        return TimelineSegment(
            type=kind,
            start_minute=start,
            end_minute=end,
            left=left,
            width=width,
            label=SEGMENT_LABELS[kind],
            is_progressive=progressive,
            full_width=full_width,
        )

    @staticmethod
    def _placed_breaks(session: Session, offset: int = 0) -> list[tuple[int, int]]:
        spans = []
        for brk in session.breaks:
            if not brk.is_placed:
                continue
            start, end = brk.start_minute, brk.end_minute
            if start < session.clock_in_minute:
                # break taken after midnight in an overnight session
                start += MINUTES_PER_DAY
                end += MINUTES_PER_DAY
            spans.append((start + offset, end + offset))
        spans.sort()
        return spans

    def segment_day(
        self,
        sessions: Sequence[Session],
        shift: Optional[ShiftWindow],
        *,
        is_today: bool,
        now_minute: Optional[int] = None,
    ) -> list[TimelineSegment]:
        """Ordered, non-overlapping segments for one day.

        Only today's open last session gets a terminal segment (progressive);
        any other open session has no known end and stops at its last break.
        """
        segments: list[TimelineSegment] = []

        def add(*args, **kwargs) -> None:
            seg = self._segment(*args, **kwargs)
            if seg is not None:
                segments.append(seg)

        def on_axis(session: Session) -> int:
            if shift is None:
                return session.clock_in_minute
            return shift.clock_in_on_axis(session.clock_in_minute)

        ordered = sorted(sessions, key=on_axis)
        floor: Optional[int] = None

        for index, session in enumerate(ordered):
            is_last = index == len(ordered) - 1
            start = on_axis(session)
            offset = start - session.clock_in_minute

            if index == 0 and shift is not None and start > shift.start_minute:
                add(SegmentType.LATE, shift.start_minute, start)

            cursor = start if floor is None else max(start, floor)

            for break_start, break_end in self._placed_breaks(session, offset):
                if break_end <= cursor:
                    continue
                break_start = max(break_start, cursor)
                if cursor < break_start:
                    add(SegmentType.WORKING, cursor, break_start)
                add(SegmentType.BREAK, break_start, break_end)
                cursor = break_end

            progressive = False
            end: Optional[int] = None
            if not session.is_open:
                end = start + span_minutes(session.clock_in_minute, session.clock_out_minute)
            elif is_last and is_today and now_minute is not None:
                end = max(start + max(now_minute - session.clock_in_minute, 0), cursor)
                progressive = True

            if end is not None and (cursor < end or progressive):
                shift_end = shift.end_on_axis if shift is not None else None
                if is_last and shift_end is not None and end > shift_end:
                    if cursor < shift_end:
                        add(SegmentType.WORKING, cursor, shift_end)
                    add(SegmentType.OVERTIME, max(cursor, shift_end), end, progressive=progressive)
                else:
                    cap = shift_end if (progressive and shift_end is not None and is_last) else None
                    add(SegmentType.WORKING, cursor, end, progressive=progressive, cap=cap)
                cursor = max(cursor, end)

            floor = cursor if floor is None else max(floor, cursor)

        return [
            replace(seg, gap=self._gap_percent if i < len(segments) - 1 else 0.0)
            for i, seg in enumerate(segments)
        ]

    def displayed_width(self, segment: TimelineSegment, now_minute: int) -> float:
        """Width to draw at ``now_minute``: min(full width, now - left) while progressive."""
        if not segment.is_progressive:
            return segment.width
        return max(min(segment.full_width, self.position(now_minute) - segment.left), 0.0)

    def rendered_width(self, segment: TimelineSegment, now_minute: int) -> float:
        return max(self.displayed_width(segment, now_minute) - segment.gap, 0.0)

