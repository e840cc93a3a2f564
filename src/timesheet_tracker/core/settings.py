from __future__ import annotations

from dataclasses import dataclass
from types import ModuleType

import pytz

from .constants import (
    DEFAULT_LATE_APPROVAL_MINUTES,
    DEFAULT_LATE_GRACE_MINUTES,
    DEFAULT_ORG_TIMEZONE,
    DEFAULT_POLL_INTERVAL_SECONDS,
    DEFAULT_PROGRESSIVE_TICK_SECONDS,
)
from ..common.validators import require_non_negative, require_positive
from .exceptions import ValidationError


@dataclass(frozen=True)
class EngineSettings:
    """Tunables of the time-accounting engine, read once from a settings module."""

    org_timezone: str = DEFAULT_ORG_TIMEZONE
    late_grace_minutes: int = DEFAULT_LATE_GRACE_MINUTES
    late_approval_minutes: int = DEFAULT_LATE_APPROVAL_MINUTES
    poll_interval_seconds: int = DEFAULT_POLL_INTERVAL_SECONDS
    progressive_tick_seconds: int = DEFAULT_PROGRESSIVE_TICK_SECONDS
    log_level: str = "INFO"
    debug: bool = False

    def __post_init__(self) -> None:
        if self.org_timezone not in pytz.all_timezones_set:
            raise ValidationError(f"Múi giờ không hợp lệ: {self.org_timezone}")
        require_non_negative(self.late_grace_minutes, "LATE_GRACE_MINUTES")
        require_non_negative(self.late_approval_minutes, "LATE_APPROVAL_MINUTES")
        require_positive(self.poll_interval_seconds, "POLL_INTERVAL_SECONDS")
        require_positive(self.progressive_tick_seconds, "PROGRESSIVE_TICK_SECONDS")

    @classmethod
    def from_module(cls, settings: ModuleType) -> "EngineSettings":
        return cls(
            org_timezone=str(getattr(settings, "ORG_TIMEZONE", DEFAULT_ORG_TIMEZONE)),
            late_grace_minutes=int(getattr(settings, "LATE_GRACE_MINUTES", DEFAULT_LATE_GRACE_MINUTES)),
            late_approval_minutes=int(getattr(settings, "LATE_APPROVAL_MINUTES", DEFAULT_LATE_APPROVAL_MINUTES)),
            poll_interval_seconds=int(getattr(settings, "POLL_INTERVAL_SECONDS", DEFAULT_POLL_INTERVAL_SECONDS)),
            progressive_tick_seconds=int(
                getattr(settings, "PROGRESSIVE_TICK_SECONDS", DEFAULT_PROGRESSIVE_TICK_SECONDS)
            ),
            log_level=str(getattr(settings, "LOG_LEVEL", "INFO")).upper(),
            debug=bool(getattr(settings, "DEBUG", False)),
        )
