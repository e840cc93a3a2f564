from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional

from ..core.constants import MINUTES_PER_DAY
from ..core.exceptions import InvalidTimeError, UnresolvedBreakError
from ..entries.model import BreakInterval
from .normalizer import TimeNormalizer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedBreak:
    """A usable break: its minutes, and where it sits on the day when known."""

    minutes: int
    start_minute: Optional[int] = None
    end_minute: Optional[int] = None

    @property
    def is_placed(self) -> bool:
        return self.start_minute is not None and self.end_minute is not None


def _explicit_duration(value) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if not isinstance(value, (int, float)):
        return None
    if isinstance(value, float) and math.isnan(value):
        return None
    return value


class BreakResolver:
    """Break record -> non-negative duration in minutes."""

    def __init__(self, normalizer: TimeNormalizer):
        self._normalizer = normalizer

    def _span(self, brk: BreakInterval) -> tuple[int, int]:
        if brk.start_time is None or brk.end_time is None:
            raise UnresolvedBreakError("Break has no duration and no start/end pair")
        try:
            start = self._normalizer.minute_of_day(brk.start_time)
            end = self._normalizer.minute_of_day(brk.end_time)
        except InvalidTimeError as e:
            raise UnresolvedBreakError(str(e))
        if end < start:
            logger.debug("Overnight break %s -> %s, adding 24h", start, end)
            end += MINUTES_PER_DAY
        if end - start <= 0:
            raise UnresolvedBreakError(f"Empty break span {start} -> {end}")
        return start, end

    def resolve(self, brk: BreakInterval) -> int:
        """Duration in minutes; raises ``UnresolvedBreakError``.

        An explicit numeric duration wins and bypasses time parsing.
        """
        duration = _explicit_duration(brk.duration_minutes)
        if duration is not None:
            if duration < 0:
                raise UnresolvedBreakError(f"Negative break duration {duration}")
            return int(round(duration))
        start, end = self._span(brk)
        return end - start

    def resolve_or_none(self, brk: BreakInterval) -> Optional[int]:
        try:
            return self.resolve(brk)
        except UnresolvedBreakError as e:
            logger.debug("Ignoring break: %s", e)
            return None

    def interval(self, brk: BreakInterval) -> Optional[ResolvedBreak]:
        """Resolved break with its placement on the day, or ``None`` if void.

        Duration-only breaks resolve without a placement.
        """
        minutes = self.resolve_or_none(brk)
        if minutes is None:
            return None
        try:
            start, end = self._span(brk)
        except UnresolvedBreakError:
            return ResolvedBreak(minutes=minutes)
        return ResolvedBreak(minutes=minutes, start_minute=start, end_minute=end)
