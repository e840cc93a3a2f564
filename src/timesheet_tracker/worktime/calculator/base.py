from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from ...sessions.model import Session


class WorkedTimeCalculator(ABC):
    """Calculator interface (Strategy Pattern for worked time)."""

    @abstractmethod
    def session_minutes(self, session: Session) -> Optional[int]:
        raise NotImplementedError

    @abstractmethod
    def day_minutes(self, sessions: Sequence[Session]) -> Optional[int]:
        raise NotImplementedError

    @abstractmethod
    def live_day_minutes(self, sessions: Sequence[Session], now_minute: int) -> int:
        raise NotImplementedError

    @staticmethod
    def session_break_minutes(session: Session) -> int:
        return sum(b.minutes for b in session.breaks)

    def break_minutes(self, sessions: Sequence[Session]) -> int:
        return sum(self.session_break_minutes(s) for s in sessions)
