from __future__ import annotations

import logging
from typing import Optional, Sequence

from .base import WorkedTimeCalculator
from ...core.constants import MINUTES_PER_DAY
from ...sessions.model import Session

logger = logging.getLogger(__name__)


def span_minutes(start_minute: int, end_minute: int) -> int:
    """Minutes from start to end, wrapping once past midnight when end < start."""
    span = end_minute - start_minute
    if span < 0:
        span += MINUTES_PER_DAY
    return span


class StandardWorkedTimeCalculator(WorkedTimeCalculator):
    """Standard rule: (out - in) - resolved breaks, not below 0.

    An open session has no worked total; a day with any open session is
    "in progress" and has no worked total either.
    """

    def raw_span(self, session: Session) -> Optional[int]:
        if session.is_open:
            return None
        if session.clock_out_minute < session.clock_in_minute:
            logger.debug("Session %s ends before it starts, counting as overnight", session.entry_id)
        return span_minutes(session.clock_in_minute, session.clock_out_minute)

    def session_minutes(self, session: Session) -> Optional[int]:
        span = self.raw_span(session)
        if span is None:
            return None
        return max(span - self.session_break_minutes(session), 0)

    def day_minutes(self, sessions: Sequence[Session]) -> Optional[int]:
        total = 0
        for session in sessions:
            minutes = self.session_minutes(session)
            if minutes is None:
                return None
            total += minutes
        return total

    def live_session_minutes(self, session: Session, now_minute: int) -> int:
        """Elapsed worked minutes up to now for an open session (closed: its total).

        Only meaningful for today's sessions, so "now" never wraps past midnight.
        """
        if not session.is_open:
            return self.session_minutes(session)
        elapsed = max(now_minute - session.clock_in_minute, 0)
        return max(elapsed - self.session_break_minutes(session), 0)

    def live_day_minutes(self, sessions: Sequence[Session], now_minute: int) -> int:
        return sum(self.live_session_minutes(s, now_minute) for s in sessions)
