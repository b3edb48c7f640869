"""Absolute timestamp parsing with locale awareness.

- parse_datetime() returns tuple[datetime | None, tuple[RelativityParseError, ...]]
- Never raises for malformed input; errors are returned in the tuple
- ISO 8601 extended format is tried first, then the locale's CLDR date and
  datetime patterns
- Pattern generation is cached per locale

The result keeps whatever offset the text carried. Text without an offset
yields a naive datetime, which the engine treats as wall-clock time in its
own zone.

Timezone Handling:
    UTC offset tokens (Z, x, X series) map to strptime %z. Patterns holding
    timezone NAME tokens (z, v, V, O series) or era tokens (G series) are
    skipped, since strptime cannot read them.

Thread-safe. Uses Python 3.13 stdlib + Babel CLDR patterns.

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from functools import cache
from typing import TYPE_CHECKING

import regex

from reltime.diagnostics import (
    Diagnostic,
    ErrorTemplate,
    ParseType,
    RelativityConfigurationError,
    RelativityParseError,
)
from reltime.locale_utils import get_babel_locale

if TYPE_CHECKING:
    from babel import Locale

__all__ = ["parse_datetime"]

# CLDR format styles tried for parsing, most compact first.
_PARSE_STYLES: tuple[str, ...] = ("short", "medium", "long")

# Separator between date and time when the locale's dateTimeFormat cannot be read.
_DATETIME_SEPARATOR_FALLBACK: str = " "

# Time layouts appended to every date pattern.
_TIME_SUFFIXES: tuple[str, ...] = ("%H:%M:%S", "%H:%M", "%I:%M:%S %p", "%I:%M %p")

# ISO 8601 extended date prefix. Basic-format dates ("20240101") are left to
# the epoch-millisecond reading of digit strings.
_ISO_EXTENDED_DATE = regex.compile(r"[0-9]{4}-")


def parse_datetime(
    value: str,
    locale_code: str,
) -> tuple[datetime | None, tuple[RelativityParseError, ...]]:
    """Parse an absolute timestamp string.

    Args:
        value: Timestamp text (e.g., "2025-01-28T14:30:00Z", "1/28/25 2:30 PM")
        locale_code: Locale whose CLDR patterns apply; "" is the invariant locale

    Returns:
        Tuple of (result, errors):
        - result: Parsed datetime (aware if the text carried an offset), or None
        - errors: Tuple of RelativityParseError (empty tuple on success)

    Examples:
        >>> result, errors = parse_datetime("2025-01-28 14:30", "en_US")
        >>> result
        datetime.datetime(2025, 1, 28, 14, 30)

        >>> result, errors = parse_datetime("DAY-1W", "en_US")
        >>> result is None
        True
    """
    stripped = value.strip()

    # ISO 8601 extended format first (fastest path)
    if _ISO_EXTENDED_DATE.match(stripped):
        try:
            return (datetime.fromisoformat(stripped), ())
        except ValueError:
            pass

    try:
        patterns = _get_datetime_patterns(locale_code)
    except RelativityConfigurationError:
        diagnostic = ErrorTemplate.parse_locale_unknown(locale_code)
        return (None, (_error(diagnostic, value, locale_code),))

    for pattern in patterns:
        try:
            return (datetime.strptime(stripped, pattern), ())
        except ValueError:
            continue

    diagnostic = ErrorTemplate.parse_datetime_failed(
        value, locale_code, "No matching datetime pattern found"
    )
    return (None, (_error(diagnostic, value, locale_code),))


def _error(diagnostic: Diagnostic, value: str, locale_code: str) -> RelativityParseError:
    return RelativityParseError(
        diagnostic,
        input_value=value,
        locale_code=locale_code,
        parse_type=ParseType.DATETIME,
    )


@cache
def _get_datetime_patterns(locale_code: str) -> tuple[str, ...]:
    """strptime patterns for a locale: each CLDR date format with and without a time.

    Raises:
        RelativityConfigurationError: If the locale is not recognized
    """
    locale = get_babel_locale(locale_code)
    separator = _extract_datetime_separator(locale)
    patterns: list[str] = []

    for style in _PARSE_STYLES:
        try:
            date_pattern = _cldr_to_strptime(locale.date_formats[style].pattern)
        except (AttributeError, KeyError):
            continue
        if date_pattern is None:
            continue
        patterns.extend(f"{date_pattern}{separator}{suffix}" for suffix in _TIME_SUFFIXES)
        patterns.append(date_pattern)

    # Preserve order, drop duplicates
    return tuple(dict.fromkeys(patterns))


def _extract_datetime_separator(locale: Locale) -> str:
    """Text between the {1} (date) and {0} (time) placeholders of dateTimeFormat.

    Examples: en_US "{1}, {0}" -> ", "; ja_JP "{1} {0}" -> " ".
    """
    try:
        pattern = str(locale.datetime_formats["medium"])
    except (AttributeError, KeyError):
        return _DATETIME_SEPARATOR_FALLBACK

    date_idx = pattern.find("{1}")
    time_idx = pattern.find("{0}")
    if date_idx == -1 or time_idx == -1 or date_idx > time_idx:
        return _DATETIME_SEPARATOR_FALLBACK
    separator = pattern[date_idx + 3 : time_idx]
    return separator or _DATETIME_SEPARATOR_FALLBACK


# ==============================================================================
# CLDR-TO-STRPTIME CONVERSION
# ==============================================================================
#
# CLDR patterns repeat a field letter to select width ("d", "dd", "MMM").
# Quoted text is literal ('at'), and '' is a literal quote. Each field run is
# mapped to the closest strptime directive; unsupported fields (eras, zone
# names) make the whole pattern unusable for parsing.

_TOKEN_RE = regex.compile(r"''|'(?:[^']|'')*'|([A-Za-z])\1*|.", regex.DOTALL)


def _month(width: int) -> str:
    if width <= 2:
        return "%m"
    return "%b" if width == 3 else "%B"


def _weekday(width: int) -> str:
    return "%A" if width >= 4 else "%a"


_FIELD_DIRECTIVES: dict[str, Callable[[int], str]] = {
    "y": lambda width: "%y" if width == 2 else "%Y",
    "M": _month,
    "L": _month,
    "d": lambda _width: "%d",
    "E": _weekday,
    "c": _weekday,
    "H": lambda _width: "%H",
    "k": lambda _width: "%H",
    "h": lambda _width: "%I",
    "K": lambda _width: "%I",
    "m": lambda _width: "%M",
    "s": lambda _width: "%S",
    "S": lambda _width: "%f",
    "a": lambda _width: "%p",
    "Z": lambda _width: "%z",
    "x": lambda _width: "%z",
    "X": lambda _width: "%z",
}


def _cldr_to_strptime(cldr_pattern: str | None) -> str | None:
    """Convert a CLDR pattern to strptime, or None if a field is unsupported.

    Examples:
        "d.MM.yyyy" -> "%d.%m.%Y"
        "h:mm a" -> "%I:%M %p"
        "h 'o''clock' a" -> "%I o'clock %p"
    """
    if not cldr_pattern:
        return None
    parts: list[str] = []
    for token in _TOKEN_RE.finditer(cldr_pattern):
        text = token.group(0)
        letter = token.group(1)
        if letter is not None:
            directive = _FIELD_DIRECTIVES.get(letter)
            if directive is None:
                return None
            parts.append(directive(len(text)))
        elif text == "''":
            parts.append("'")
        elif len(text) >= 2 and text.startswith("'"):
            parts.append(text[1:-1].replace("''", "'").replace("%", "%%"))
        else:
            parts.append("%%" if text == "%" else text)
    return "".join(parts)
