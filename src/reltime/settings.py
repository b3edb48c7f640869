"""Keyword settings and parser configuration.

Immutable value types describing the vocabulary a parser understands:

- BaseTimeKeywords: named instants ("NOW", "DAY", ...) plus the fixed "*" alias
- TimeOffsetKeywords: unit symbols ("MS", "H", "MO", ...)
- ParserConfiguration: a locale bound to one of each

Blank keywords are normalized to None, which disables the keyword. Each
keyword set has a canonical serialization used to key the grammar cache.

Python 3.13+.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field, fields, replace

from reltime.constants import MAX_KEYWORD_LENGTH, NOW_ALIAS
from reltime.diagnostics import ErrorTemplate, RelativityConfigurationError
from reltime.enums import DURATION_UNITS, OFFSET_UNITS, BaseTimeKind, TimeOffsetUnit
from reltime.locale_utils import canonical_locale

__all__ = [
    "BaseTimeKeywords",
    "ParserConfiguration",
    "TimeOffsetKeywords",
]


def _normalize_keyword(slot: str, value: object) -> str | None:
    """Trim a keyword, map blank to None and enforce the length limit."""
    if value is None:
        return None
    if not isinstance(value, str):
        raise RelativityConfigurationError(ErrorTemplate.keyword_invalid_type(slot, value))
    trimmed = value.strip()
    if not trimmed:
        return None
    if len(trimmed) > MAX_KEYWORD_LENGTH:
        raise RelativityConfigurationError(
            ErrorTemplate.keyword_too_long(slot, trimmed, MAX_KEYWORD_LENGTH)
        )
    return trimmed


def _canonical_json(values: dict[str, str | None]) -> str:
    # Stable slot order, absent slots emitted as null.
    return json.dumps(values, ensure_ascii=False, separators=(",", ":"))


# Slot name on BaseTimeKeywords for each base-time kind.
_BASE_SLOTS: dict[BaseTimeKind, str] = {
    BaseTimeKind.NOW: "now",
    BaseTimeKind.SECOND: "current_second",
    BaseTimeKind.MINUTE: "current_minute",
    BaseTimeKind.HOUR: "current_hour",
    BaseTimeKind.DAY: "current_day",
    BaseTimeKind.WEEK: "current_week",
    BaseTimeKind.MONTH: "current_month",
    BaseTimeKind.YEAR: "current_year",
}


@dataclass(frozen=True, slots=True)
class BaseTimeKeywords:
    """Keywords naming the instants a relative expression can start from.

    A None slot disables that keyword. The "*" alias for now is always
    available regardless of the ``now`` slot.

    Example:
        >>> keywords = BaseTimeKeywords(now="JETZT", current_day="TAG")
        >>> keywords.get_keyword(BaseTimeKind.DAY)
        'TAG'
    """

    now: str | None = "NOW"
    current_second: str | None = "SECOND"
    current_minute: str | None = "MINUTE"
    current_hour: str | None = "HOUR"
    current_day: str | None = "DAY"
    current_week: str | None = "WEEK"
    current_month: str | None = "MONTH"
    current_year: str | None = "YEAR"

    def __post_init__(self) -> None:
        for slot in fields(self):
            value = _normalize_keyword(slot.name, getattr(self, slot.name))
            object.__setattr__(self, slot.name, value)

    @property
    def now_alias(self) -> str:
        """Fixed alias for the current instant."""
        return NOW_ALIAS

    def get_keyword(self, kind: BaseTimeKind) -> str | None:
        """Configured keyword for a base-time kind, or None when disabled."""
        return getattr(self, _BASE_SLOTS[kind])

    def keywords(self) -> tuple[str, ...]:
        """Every populated keyword plus the "*" alias."""
        populated = (self.get_keyword(kind) for kind in BaseTimeKind)
        return (*(keyword for keyword in populated if keyword is not None), NOW_ALIAS)

    def keyword_map(self) -> dict[str, BaseTimeKind]:
        """Map of case-folded keyword to kind, including the "*" alias.

        When two slots share a keyword, the earlier slot wins.
        """
        mapping: dict[str, BaseTimeKind] = {}
        for kind in BaseTimeKind:
            keyword = self.get_keyword(kind)
            if keyword is not None:
                mapping.setdefault(keyword.casefold(), kind)
        mapping.setdefault(NOW_ALIAS, BaseTimeKind.NOW)
        return mapping

    def canonical_key(self) -> str:
        """Deterministic serialization distinguishing absent from any value."""
        return _canonical_json({kind.value: self.get_keyword(kind) for kind in BaseTimeKind})


@dataclass(frozen=True, slots=True)
class TimeOffsetKeywords:
    """Unit symbols for offsets and durations.

    At least one fixed-length unit (milliseconds through weeks) must be
    enabled; months and years alone cannot express a duration.

    Raises:
        RelativityConfigurationError: If no fixed-length unit has a keyword

    Example:
        >>> TimeOffsetKeywords(seconds="SEK").enabled_units()
        (<TimeOffsetUnit.SECONDS: 'seconds'>,)
    """

    milliseconds: str | None = "MS"
    seconds: str | None = "S"
    minutes: str | None = "M"
    hours: str | None = "H"
    days: str | None = "D"
    weeks: str | None = "W"
    months: str | None = "MO"
    years: str | None = "Y"

    def __post_init__(self) -> None:
        for slot in fields(self):
            value = _normalize_keyword(slot.name, getattr(self, slot.name))
            object.__setattr__(self, slot.name, value)
        if not self.duration_units():
            raise RelativityConfigurationError(ErrorTemplate.no_duration_unit())

    def get_symbol(self, unit: TimeOffsetUnit) -> str | None:
        """Configured symbol for a unit, or None when the unit is disabled."""
        return getattr(self, unit.value)

    def enabled_units(self) -> tuple[TimeOffsetUnit, ...]:
        """Enabled offset units, largest first."""
        return tuple(unit for unit in OFFSET_UNITS if self.get_symbol(unit) is not None)

    def duration_units(self) -> tuple[TimeOffsetUnit, ...]:
        """Enabled fixed-length units, largest first."""
        return tuple(unit for unit in DURATION_UNITS if self.get_symbol(unit) is not None)

    def canonical_key(self) -> str:
        """Deterministic serialization distinguishing absent from any value."""
        return _canonical_json({unit.value: self.get_symbol(unit) for unit in OFFSET_UNITS})


@dataclass(frozen=True, slots=True)
class ParserConfiguration:
    """Keyword vocabulary bound to a locale.

    The locale is stored in Babel's canonical spelling; the empty string is
    the invariant locale.

    Raises:
        RelativityConfigurationError: If the locale cannot be resolved
    """

    locale: str = ""
    base_time: BaseTimeKeywords = field(default_factory=BaseTimeKeywords)
    time_offset: TimeOffsetKeywords = field(default_factory=TimeOffsetKeywords)

    def __post_init__(self) -> None:
        object.__setattr__(self, "locale", canonical_locale(self.locale))

    def with_locale(self, locale: str) -> ParserConfiguration:
        """Copy of this configuration under another locale."""
        return replace(self, locale=locale)
