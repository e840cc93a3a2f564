from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Optional

from ..core.constants import PLACEHOLDER


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def monday_of(day: date) -> date:
    return day - timedelta(days=day.weekday())


def week_dates(reference: date) -> list[date]:
    """Monday..Sunday of the week containing ``reference``."""
    start = monday_of(reference)
    return [start + timedelta(days=i) for i in range(7)]


def minute_label(minute: int) -> str:
    """Minute on the day axis -> "HH:MM" (wraps past midnight)."""
    minute = int(minute) % (24 * 60)
    return f"{minute // 60:02d}:{minute % 60:02d}"


def format_minutes(minutes: Optional[int]) -> str:
    """Duration in minutes -> "HH:MM", or the placeholder when not available."""
    if minutes is None:
        return PLACEHOLDER
    minutes = max(int(minutes), 0)
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def format_minutes_human(minutes: Optional[int]) -> str:
    """Duration in minutes -> "7h 45m"; zero and missing values show the placeholder."""
    if minutes is None or minutes <= 0:
        return PLACEHOLDER
    return f"{minutes // 60}h {minutes % 60}m"
