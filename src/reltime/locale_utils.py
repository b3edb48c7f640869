"""Locale utilities for BCP-47 to POSIX conversion and CLDR calendar facts.

Centralizes locale format normalization used throughout the codebase.
Provides canonical locale handling to ensure consistent cache keys and lookups,
and exposes the two CLDR facts the conversion engine depends on: the decimal
separator and the first day of the week.

The invariant locale (empty string) draws its CLDR data from
INVARIANT_DATA_LOCALE.

Python 3.13+.
"""

from __future__ import annotations

import functools

from babel import Locale, UnknownLocaleError
from babel.core import get_global
from babel.numbers import get_decimal_symbol

from reltime.constants import INVARIANT_DATA_LOCALE, INVARIANT_LOCALE
from reltime.diagnostics import ErrorTemplate, RelativityConfigurationError

__all__ = [
    "canonical_locale",
    "get_babel_locale",
    "get_decimal_separator",
    "get_first_week_day",
    "get_parent_chain",
    "is_invariant",
    "locale_key",
    "normalize_locale",
]


def normalize_locale(locale_code: str) -> str:
    """Convert BCP-47 locale code to POSIX format for Babel.

    BCP-47 uses hyphens (en-US), while Babel/POSIX uses underscores (en_US).
    Surrounding whitespace is dropped.

    Args:
        locale_code: BCP-47 locale code (e.g., "en-US", "pt-BR")

    Returns:
        POSIX-formatted locale code (e.g., "en_US", "pt_BR")

    Example:
        >>> normalize_locale("en-US")
        'en_US'
        >>> normalize_locale("en")  # Already normalized
        'en'
    """
    return locale_code.strip().replace("-", "_")


def is_invariant(locale_code: str | None) -> bool:
    """Return True when the code names the invariant locale."""
    return locale_code is None or normalize_locale(locale_code) == INVARIANT_LOCALE


def locale_key(locale_code: str) -> str:
    """Case-insensitive table key for a locale code.

    Example:
        >>> locale_key("en-GB")
        'en_gb'
    """
    return normalize_locale(locale_code).lower()


@functools.lru_cache(maxsize=128)
def get_babel_locale(locale_code: str) -> Locale:
    """Get a Babel Locale object with caching.

    Parses the locale code once and caches the result. The invariant locale
    resolves to INVARIANT_DATA_LOCALE.

    Thread-safe via lru_cache internal locking.

    Args:
        locale_code: Locale code (BCP-47 or POSIX format accepted)

    Returns:
        Babel Locale object

    Raises:
        RelativityConfigurationError: If locale is not recognized

    Example:
        >>> locale = get_babel_locale("en-GB")
        >>> locale.territory
        'GB'
    """
    normalized = normalize_locale(locale_code) or INVARIANT_DATA_LOCALE
    try:
        return Locale.parse(normalized)
    except (UnknownLocaleError, ValueError, TypeError) as error:
        raise RelativityConfigurationError(ErrorTemplate.locale_unknown(locale_code)) from error


def canonical_locale(locale_code: str | None) -> str:
    """Return Babel's canonical spelling of a locale code.

    The invariant locale stays the empty string.

    Raises:
        RelativityConfigurationError: If locale is not recognized

    Example:
        >>> canonical_locale("EN-gb")
        'en_GB'
    """
    if is_invariant(locale_code):
        return INVARIANT_LOCALE
    assert locale_code is not None
    return str(get_babel_locale(locale_code))


@functools.cache
def _parent_exceptions() -> dict[str, str]:
    return dict(get_global("parent_exceptions"))


def get_parent_chain(locale_code: str) -> tuple[str, ...]:
    """Walk a locale up its CLDR parent chain.

    The chain starts with the canonical locale itself and stops before the
    CLDR root. CLDR parent exceptions are honoured (en_GB's parent is
    en_001, whose parent is en).

    Args:
        locale_code: Locale code (BCP-47 or POSIX format accepted)

    Returns:
        Tuple of canonical locale codes, most specific first. Empty for the
        invariant locale.

    Example:
        >>> get_parent_chain("de-AT")
        ('de_AT', 'de')
    """
    current = canonical_locale(locale_code)
    exceptions = _parent_exceptions()
    chain: list[str] = []
    while current and current != "root" and current not in chain:
        chain.append(current)
        parent = exceptions.get(current)
        if parent is None:
            parent = current.rpartition("_")[0]
        current = parent
    return tuple(chain)


@functools.lru_cache(maxsize=128)
def get_decimal_separator(locale_code: str) -> str:
    """Decimal symbol used by the locale's numbers ("." or "," in most cases).

    Raises:
        RelativityConfigurationError: If locale is not recognized
    """
    return get_decimal_symbol(get_babel_locale(locale_code))


@functools.lru_cache(maxsize=128)
def get_first_week_day(locale_code: str) -> int:
    """First day of the week for the locale's territory.

    Returns:
        Weekday number compatible with datetime.weekday() (0=Monday, 6=Sunday)

    Raises:
        RelativityConfigurationError: If locale is not recognized

    Example:
        >>> get_first_week_day("en_US")
        6
        >>> get_first_week_day("en_GB")
        0
    """
    return get_babel_locale(locale_code).first_week_day
