from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Protocol


class Clock(Protocol):
    """Source of "now" injected into every live computation."""

    def now(self) -> datetime:
        raise NotImplementedError


class SystemClock:
    """Current UTC time from the system clock."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


@dataclass
class FixedClock:
    """Clock pinned to a given instant.

    Note: Used by tests and by replays of a recorded snapshot; naive instants
    are taken as UTC.
    """

    instant: datetime

    def __post_init__(self) -> None:
        if self.instant.tzinfo is None:
            self.instant = self.instant.replace(tzinfo=timezone.utc)

    def now(self) -> datetime:
        return self.instant

    def advance(self, *, minutes: int = 0, seconds: int = 0) -> None:
        self.instant = self.instant + timedelta(minutes=minutes, seconds=seconds)
