from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Any, Optional, Union

import pytz

from ..common.clock import Clock
from ..core.constants import DEFAULT_ORG_TIMEZONE
from ..core.exceptions import InvalidTimeError, ValidationError

logger = logging.getLogger(__name__)

_HH_MM = re.compile(r"^(\d{1,2}):(\d{2})$")


@dataclass(frozen=True)
class LocalClockTime:
    """A wall-clock "HH:mm" value already in the organization's local time."""

    text: str


@dataclass(frozen=True)
class Timestamp:
    """An absolute instant; naive values are UTC."""

    value: datetime


RawTime = Union[LocalClockTime, Timestamp]


class TimeNormalizer:
    """Turns raw time values into minute-of-day in the organization timezone.

    "HH:mm" strings are read literally (no conversion); absolute timestamps are
    projected onto the organization timezone first. Some records store local
    strings on purpose, so converting them again would shift them twice.
    """

    def __init__(self, timezone_name: str = DEFAULT_ORG_TIMEZONE):
        try:
            self._tz = pytz.timezone(timezone_name)
        except pytz.UnknownTimeZoneError:
            raise ValidationError(f"Múi giờ không hợp lệ: {timezone_name}")
        self.timezone_name = timezone_name

    def coerce(self, value: Any) -> RawTime:
        """Classify a raw record value into a ``RawTime`` variant."""
        if isinstance(value, (LocalClockTime, Timestamp)):
            return value
        if isinstance(value, datetime):
            return Timestamp(value)
        if isinstance(value, time):
            return LocalClockTime(f"{value.hour:02d}:{value.minute:02d}")
        if isinstance(value, str):
            text = value.strip()
            if _HH_MM.match(text):
                return LocalClockTime(text)
            try:
                return Timestamp(datetime.fromisoformat(text.replace("Z", "+00:00")))
            except ValueError:
                raise InvalidTimeError(f"Unparseable time value: {value!r}")
        raise InvalidTimeError(f"Unsupported time value: {value!r}")

    def coerce_or_none(self, value: Any) -> Optional[RawTime]:
        if value is None or value == "":
            return None
        try:
            return self.coerce(value)
        except InvalidTimeError as e:
            logger.debug("Treating time as absent: %s", e)
            return None

    def to_local(self, instant: datetime) -> datetime:
        if instant.tzinfo is None:
            instant = pytz.utc.localize(instant)
        return instant.astimezone(self._tz)

    def minute_of_day(self, raw: RawTime) -> int:
        """Minute-of-day in [0, 1439]; raises ``InvalidTimeError``."""
        if isinstance(raw, LocalClockTime):
            match = _HH_MM.match(raw.text.strip())
            if not match:
                raise InvalidTimeError(f"Not an HH:mm value: {raw.text!r}")
            hours, minutes = int(match.group(1)), int(match.group(2))
            if hours > 23 or minutes > 59:
                raise InvalidTimeError(f"Out of range HH:mm value: {raw.text!r}")
            return hours * 60 + minutes
        if isinstance(raw, Timestamp):
            local = self.to_local(raw.value)
            return local.hour * 60 + local.minute
        raise InvalidTimeError(f"Unsupported time value: {raw!r}")

    def try_minute_of_day(self, value: Any) -> Optional[int]:
        raw = self.coerce_or_none(value)
        if raw is None:
            return None
        try:
            return self.minute_of_day(raw)
        except InvalidTimeError as e:
            logger.debug("Treating time as absent: %s", e)
            return None

    def local_date(self, instant: datetime) -> date:
        return self.to_local(instant).date()

    def today(self, clock: Clock) -> date:
        return self.local_date(clock.now())

    def now_minute(self, clock: Clock) -> int:
        return self.minute_of_day(Timestamp(clock.now()))
