"""Enumerations for reltime type-safe constants.

Uses StrEnum for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class BaseTimeKind(StrEnum):
    """Named instant a relative expression is anchored to.

    StrEnum provides automatic string conversion: str(BaseTimeKind.DAY) == "day"
    """

    NOW = "now"
    """The origin instant itself."""

    SECOND = "second"
    """Start of the current second."""

    MINUTE = "minute"
    """Start of the current minute."""

    HOUR = "hour"
    """Start of the current hour."""

    DAY = "day"
    """Midnight at the start of the current day."""

    WEEK = "week"
    """Midnight at the start of the locale's first day of the current week."""

    MONTH = "month"
    """Midnight on the first day of the current month."""

    YEAR = "year"
    """Midnight on 1 January of the current year."""


class TimeOffsetUnit(StrEnum):
    """Unit of time magnitude used in offsets and durations.

    StrEnum provides automatic string conversion: str(TimeOffsetUnit.HOURS) == "hours"
    """

    MILLISECONDS = "milliseconds"
    SECONDS = "seconds"
    MINUTES = "minutes"
    HOURS = "hours"
    DAYS = "days"
    WEEKS = "weeks"
    MONTHS = "months"
    """Calendar months. Whole numbers only, not a fixed-length duration."""

    YEARS = "years"
    """Calendar years. Whole numbers only, not a fixed-length duration."""

    @property
    def is_calendar(self) -> bool:
        """True for units with non-uniform length (months, years)."""
        return self in (TimeOffsetUnit.MONTHS, TimeOffsetUnit.YEARS)


# Duration-eligible units, largest first. Composite durations are written and
# matched in this order.
DURATION_UNITS: tuple[TimeOffsetUnit, ...] = (
    TimeOffsetUnit.WEEKS,
    TimeOffsetUnit.DAYS,
    TimeOffsetUnit.HOURS,
    TimeOffsetUnit.MINUTES,
    TimeOffsetUnit.SECONDS,
    TimeOffsetUnit.MILLISECONDS,
)

# Offset units, largest first. Relative-expression offsets are matched in
# this order.
OFFSET_UNITS: tuple[TimeOffsetUnit, ...] = (
    TimeOffsetUnit.YEARS,
    TimeOffsetUnit.MONTHS,
    *DURATION_UNITS,
)


__all__ = [
    "DURATION_UNITS",
    "OFFSET_UNITS",
    "BaseTimeKind",
    "TimeOffsetUnit",
]
