"""Shared constants for reltime.

This module provides centralized configuration constants used across
the settings, grammar and runtime packages. Placing constants here avoids
circular imports and provides a single source of truth.

Constants are grouped by domain:
- Keyword limits: Bounds on user-configured keyword text
- Matching limits: Execution ceiling for grammar matching
- Locale identity: Invariant locale naming and its CLDR data source

Python 3.13+.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Keyword limits
    "MAX_KEYWORD_LENGTH",
    "NOW_ALIAS",
    # Matching limits
    "MATCH_TIMEOUT_SECONDS",
    # Locale identity
    "INVARIANT_LOCALE",
    "INVARIANT_DATA_LOCALE",
]

# ============================================================================
# KEYWORD LIMITS
# ============================================================================

# Maximum length of a single base-time or time-offset keyword after trimming.
MAX_KEYWORD_LENGTH: int = 30

# Fixed alias for the "now" base-time keyword. Always available, even when the
# configured "now" keyword is absent.
NOW_ALIAS: str = "*"

# ============================================================================
# MATCHING LIMITS
# ============================================================================

# Hard ceiling on a single grammar match attempt. A match exceeding this
# ceiling is reported as a failed match.
MATCH_TIMEOUT_SECONDS: float = 1.0

# ============================================================================
# LOCALE IDENTITY
# ============================================================================

# Name of the invariant locale. The invariant configuration cannot be
# registered or replaced.
INVARIANT_LOCALE: str = ""

# CLDR locale used for the invariant locale's calendar and number facts:
# "." decimal separator, Sunday as first day of week, ISO-like patterns.
INVARIANT_DATA_LOCALE: str = "en_US_POSIX"
