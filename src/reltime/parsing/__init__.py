"""Locale-aware parsing primitives.

Each parser returns ``(result, errors)`` and never raises for malformed input:

    parse_datetime - Absolute timestamps (ISO 8601, then CLDR patterns)
    parse_number - Locale-formatted decimal numbers
    parse_timespan_literal - Literal time spans ("1.18:00:00")

Python 3.13+.
"""

from .dates import parse_datetime
from .durations import parse_timespan_literal
from .numbers import parse_number

__all__ = [
    "parse_datetime",
    "parse_number",
    "parse_timespan_literal",
]
