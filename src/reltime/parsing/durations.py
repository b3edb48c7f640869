"""Literal time-span parsing and exact unit arithmetic.

- parse_timespan_literal() returns tuple[timedelta | None, tuple[RelativityParseError, ...]]
- Never raises for malformed input; errors are returned in the tuple

Accepted literal forms (whitespace around the value is ignored):

    [-]d                      whole days, e.g. "3"
    [-][d.]hh:mm[:ss[Ffffffff]] e.g. "1.18:00", "-00:00:00.2345678"
    [-]d:hh:mm:ss[Ffffffff]   e.g. "2:03:04:05"

where F is "." or the locale decimal separator and the fraction holds up to
seven digits (100-nanosecond ticks). Hours must be below 24, minutes and
seconds below 60.

quantity_to_timedelta() converts a Decimal count of a fixed-length unit to a
timedelta exactly, rounding only at microsecond resolution.

Python 3.13+.
"""

from __future__ import annotations

from datetime import timedelta
from decimal import ROUND_HALF_EVEN, Decimal
from functools import cache

import regex

from reltime.diagnostics import ErrorTemplate, ParseType, RelativityParseError
from reltime.enums import TimeOffsetUnit
from reltime.locale_utils import get_decimal_separator

__all__ = [
    "UNIT_MICROSECONDS",
    "parse_timespan_literal",
    "quantity_to_timedelta",
    "timedelta_to_microseconds",
]

# Fixed length of each duration-eligible unit.
UNIT_MICROSECONDS: dict[TimeOffsetUnit, int] = {
    TimeOffsetUnit.MILLISECONDS: 1_000,
    TimeOffsetUnit.SECONDS: 1_000_000,
    TimeOffsetUnit.MINUTES: 60_000_000,
    TimeOffsetUnit.HOURS: 3_600_000_000,
    TimeOffsetUnit.DAYS: 86_400_000_000,
    TimeOffsetUnit.WEEKS: 604_800_000_000,
}

_TICKS_PER_MICROSECOND = 10
_FRACTION_DIGITS = 7


def quantity_to_timedelta(quantity: Decimal, unit: TimeOffsetUnit) -> timedelta:
    """Exact length of ``quantity`` units, rounded half-even to whole microseconds.

    Raises:
        KeyError: If unit is a calendar unit (months, years)

    Example:
        >>> quantity_to_timedelta(Decimal("1.5"), TimeOffsetUnit.HOURS)
        datetime.timedelta(seconds=5400)
    """
    micros = (quantity * UNIT_MICROSECONDS[unit]).to_integral_value(ROUND_HALF_EVEN)
    return timedelta(microseconds=int(micros))


def timedelta_to_microseconds(value: timedelta) -> int:
    """Total length of a timedelta in whole microseconds."""
    return (value.days * 86_400 + value.seconds) * 1_000_000 + value.microseconds


@cache
def _timespan_pattern(decimal_separator: str) -> regex.Pattern[str]:
    separators = {".", decimal_separator}
    fraction = "|".join(regex.escape(sep) for sep in sorted(separators))
    return regex.compile(
        r"\s*(?P<sign>-)?"
        r"(?:"
        r"(?P<whole_days>[0-9]+)"
        r"|"
        r"(?:(?P<days>[0-9]+)(?:\.|:(?=[0-9]{1,2}:[0-9]{1,2}:)))?"
        r"(?P<hours>[0-9]{1,2}):(?P<minutes>[0-9]{1,2})"
        rf"(?::(?P<seconds>[0-9]{{1,2}})(?:(?:{fraction})(?P<fraction>[0-9]{{1,7}}))?)?"
        r")\s*"
    )


def parse_timespan_literal(
    value: str,
    locale_code: str,
) -> tuple[timedelta | None, tuple[RelativityParseError, ...]]:
    """Parse a literal time span such as "01:30:00" or "1.18:00".

    Args:
        value: Time span text
        locale_code: Locale whose decimal separator may precede the fraction

    Returns:
        Tuple of (result, errors):
        - result: Parsed timedelta, or None if parsing failed
        - errors: Tuple of RelativityParseError (empty tuple on success)

    Examples:
        >>> parse_timespan_literal("1.18:00:00", "")
        (datetime.timedelta(days=1, seconds=64800), ())
        >>> parse_timespan_literal("-00:00:00.2345678", "")[0]
        datetime.timedelta(days=-1, seconds=86399, microseconds=765432)
    """
    match = _timespan_pattern(get_decimal_separator(locale_code)).fullmatch(value)
    if match is None:
        return (None, (_error(value, locale_code),))

    try:
        result = _build_timespan(match)
    except (OverflowError, ValueError):
        # Day counts past timedelta.max, or too many digits for int()
        result = None
    if result is None:
        return (None, (_error(value, locale_code),))

    if match.group("sign"):
        result = -result
    return (result, ())


def _build_timespan(match: regex.Match[str]) -> timedelta | None:
    if match.group("whole_days") is not None:
        return timedelta(days=int(match.group("whole_days")))

    hours = int(match.group("hours"))
    minutes = int(match.group("minutes"))
    seconds = int(match.group("seconds") or 0)
    if hours >= 24 or minutes >= 60 or seconds >= 60:
        return None
    fraction = (match.group("fraction") or "").ljust(_FRACTION_DIGITS, "0")
    micros = (Decimal(int(fraction)) / _TICKS_PER_MICROSECOND).to_integral_value(
        ROUND_HALF_EVEN
    )
    return timedelta(
        days=int(match.group("days") or 0),
        hours=hours,
        minutes=minutes,
        seconds=seconds,
        microseconds=int(micros),
    )


def _error(value: str, locale_code: str) -> RelativityParseError:
    return RelativityParseError(
        ErrorTemplate.parse_duration_failed(value, locale_code),
        input_value=value,
        locale_code=locale_code,
        parse_type=ParseType.DURATION,
    )
