"""Locale-aware number parsing.

- parse_number() returns tuple[Decimal | None, tuple[RelativityParseError, ...]]
- Never raises for malformed input; errors are returned in the tuple
- Uses Babel's CLDR number symbols; the invariant locale reads "." decimals

Grouping separators are only accepted where the locale would place them
(Babel strict mode), so "1,5" is rejected under en rather than read as 15.

Thread-safe. Uses Babel for CLDR data.

Python 3.13+.
"""

from __future__ import annotations

from decimal import Decimal

from babel.numbers import NumberFormatError, parse_decimal

from reltime.diagnostics import (
    Diagnostic,
    ErrorTemplate,
    ParseType,
    RelativityConfigurationError,
    RelativityParseError,
)
from reltime.locale_utils import get_babel_locale

__all__ = ["parse_number"]


def parse_number(
    value: str,
    locale_code: str,
) -> tuple[Decimal | None, tuple[RelativityParseError, ...]]:
    """Parse a locale-formatted number to a finite Decimal.

    Args:
        value: Number text (e.g., "1.5" for en, "1,5" for de)
        locale_code: Locale whose symbols apply; "" is the invariant locale

    Returns:
        Tuple of (result, errors):
        - result: Parsed Decimal, or None if parsing failed
        - errors: Tuple of RelativityParseError (empty tuple on success)

    Examples:
        >>> parse_number("1,5", "de_DE")
        (Decimal('1.5'), ())
        >>> result, errors = parse_number("1,5", "en_US")
        >>> result is None
        True
    """
    try:
        locale = get_babel_locale(locale_code)
    except RelativityConfigurationError:
        diagnostic = ErrorTemplate.parse_locale_unknown(locale_code)
        return (None, (_error(diagnostic, value, locale_code),))

    try:
        result = parse_decimal(value.strip(), locale=locale, strict=True)
    except NumberFormatError as e:
        diagnostic = ErrorTemplate.parse_number_failed(value, locale_code, str(e))
        return (None, (_error(diagnostic, value, locale_code),))

    if not result.is_finite():
        diagnostic = ErrorTemplate.parse_number_failed(value, locale_code, "Not a finite number")
        return (None, (_error(diagnostic, value, locale_code),))

    return (result, ())


def _error(diagnostic: Diagnostic, value: str, locale_code: str) -> RelativityParseError:
    return RelativityParseError(
        diagnostic,
        input_value=value,
        locale_code=locale_code,
        parse_type=ParseType.NUMBER,
    )
