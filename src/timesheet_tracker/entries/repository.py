from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Optional, Protocol, Sequence


class TimeEntryRepository(Protocol):
    def list_for_employee(self, employee_id: str, *, start_date: date, end_date: date) -> Sequence[Mapping[str, Any]]:
        """Raw time-entry records (read contract) for an employee and inclusive date range."""

        raise NotImplementedError


class StatisticsRepository(Protocol):
    def get_week_statistics(self, employee_id: str, *, start_date: date, end_date: date) -> Optional[Mapping[str, Any]]:
        """Backend-computed totals for the range, e.g. ``{"totalNegativeHours": 1.5}``.

        Returns None when the backend has no statistics.
        """

        raise NotImplementedError
