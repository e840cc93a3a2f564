class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidTimeError(DomainError):
    """Raised when a time value cannot be parsed into a minute-of-day."""


class UnresolvedBreakError(DomainError):
    """Raised when a break has neither a usable duration nor a usable start/end pair."""


class MissingScheduleError(DomainError):
    """Raised when a lateness/overtime rule needs a shift and none is attached."""
