"""Grammar compiler for relative timestamps and composite durations.

Turns a keyword configuration plus a locale decimal separator into two
compiled patterns:

- Duration grammar: one optional named component per fixed-length unit, in
  the order weeks, days, hours, minutes, seconds, milliseconds
  ("1W 2D 3H", "500ms"). At least one component must be present.
- Relative grammar: a base keyword, optionally followed by an operator and a
  component sequence that also admits years and months ("DAY-1W",
  "MONTH+1Y 2MO 3D"). Years and months take whole numbers only.

Each component's number is captured in a group named after its unit
(``TimeOffsetUnit.value``). The relative grammar adds ``base`` and
``operator`` groups.

Matching is case-insensitive and bounded by MATCH_TIMEOUT_SECONDS using the
third-party ``regex`` module; a timed-out match is reported as no match.

Compiled grammars are cached process-wide by the canonical serialization of
both keyword sets and the decimal separator. Concurrent first use may compile
the same grammar twice; only one result is published.

Python 3.13+.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum

import regex

from reltime.constants import MATCH_TIMEOUT_SECONDS
from reltime.enums import DURATION_UNITS, OFFSET_UNITS, TimeOffsetUnit
from reltime.settings import BaseTimeKeywords, TimeOffsetKeywords

__all__ = [
    "CompiledGrammar",
    "GrammarKind",
    "GrammarPair",
    "clear_grammar_cache",
    "compile_grammars",
    "grammar_cache_size",
]

logger = logging.getLogger(__name__)

_FLAGS = regex.IGNORECASE


class GrammarKind(StrEnum):
    """Which expression family a grammar matches."""

    RELATIVE = "relative"
    DURATION = "duration"


@dataclass(frozen=True, slots=True)
class CompiledGrammar:
    """A compiled, bounded-time matcher.

    Attributes:
        kind: Expression family
        compiled: Compiled ``regex`` pattern
        units: Units that have a named component group, largest first
    """

    kind: GrammarKind
    compiled: regex.Pattern[str]
    units: tuple[TimeOffsetUnit, ...]

    @property
    def pattern(self) -> str:
        """Pattern source text."""
        return self.compiled.pattern

    def match(self, text: str) -> regex.Match[str] | None:
        """Match the whole text, or return None.

        A match attempt that exceeds MATCH_TIMEOUT_SECONDS is logged and
        reported as None.
        """
        try:
            return self.compiled.fullmatch(text, timeout=MATCH_TIMEOUT_SECONDS)
        except TimeoutError:
            logger.warning(
                "%s grammar match timed out after %.1fs (input length %d)",
                self.kind,
                MATCH_TIMEOUT_SECONDS,
                len(text),
            )
            return None

    def components(self, match: regex.Match[str]) -> dict[TimeOffsetUnit, str]:
        """Captured number text per unit, for components present in the match."""
        present: dict[TimeOffsetUnit, str] = {}
        for unit in self.units:
            value = match.group(unit.value)
            if value is not None:
                present[unit] = value
        return present


@dataclass(frozen=True, slots=True)
class GrammarPair:
    """Relative and duration grammars compiled from one configuration."""

    relative: CompiledGrammar
    duration: CompiledGrammar


type _CacheKey = tuple[str, str, str]

_GRAMMAR_CACHE: dict[_CacheKey, GrammarPair] = {}


def _number(decimal_separator: str, *, fractional: bool) -> str:
    if not fractional:
        return "[0-9]+"
    return f"[0-9]+(?:{regex.escape(decimal_separator)}[0-9]+)?"


def _component_sequence(
    time_offset: TimeOffsetKeywords,
    units: tuple[TimeOffsetUnit, ...],
    decimal_separator: str,
) -> tuple[str, tuple[TimeOffsetUnit, ...]]:
    """Optional named components for every enabled unit, in the given order."""
    parts: list[str] = []
    enabled: list[TimeOffsetUnit] = []
    for unit in units:
        symbol = time_offset.get_symbol(unit)
        if symbol is None:
            continue
        number = _number(decimal_separator, fractional=not unit.is_calendar)
        parts.append(rf"(?:(?P<{unit.value}>{number})\s*{regex.escape(symbol)}\s*)?")
        enabled.append(unit)
    return "".join(parts), tuple(enabled)


def _base_alternation(base_time: BaseTimeKeywords) -> str:
    keywords = sorted(set(base_time.keywords()), key=lambda keyword: (-len(keyword), keyword))
    return "|".join(regex.escape(keyword) for keyword in keywords)


def _compile_duration(time_offset: TimeOffsetKeywords, decimal_separator: str) -> CompiledGrammar:
    components, units = _component_sequence(time_offset, DURATION_UNITS, decimal_separator)
    source = rf"\s*(?=[0-9]){components}"
    return CompiledGrammar(GrammarKind.DURATION, regex.compile(source, _FLAGS), units)


def _compile_relative(
    base_time: BaseTimeKeywords,
    time_offset: TimeOffsetKeywords,
    decimal_separator: str,
) -> CompiledGrammar:
    components, units = _component_sequence(time_offset, OFFSET_UNITS, decimal_separator)
    source = (
        rf"\s*(?P<base>{_base_alternation(base_time)})\s*"
        rf"(?:(?P<operator>[+-])\s*(?=[0-9]){components})?\s*"
    )
    return CompiledGrammar(GrammarKind.RELATIVE, regex.compile(source, _FLAGS), units)


def compile_grammars(
    base_time: BaseTimeKeywords,
    time_offset: TimeOffsetKeywords,
    decimal_separator: str,
) -> GrammarPair:
    """Get or compile the grammars for a configuration.

    Args:
        base_time: Base-time keywords
        time_offset: Unit symbols
        decimal_separator: Locale decimal symbol used inside numbers

    Returns:
        GrammarPair, shared with every caller using an identical signature

    Example:
        >>> pair = compile_grammars(BaseTimeKeywords(), TimeOffsetKeywords(), ".")
        >>> pair.duration.match("1W 2D") is not None
        True
    """
    key = (base_time.canonical_key(), time_offset.canonical_key(), decimal_separator)
    cached = _GRAMMAR_CACHE.get(key)
    if cached is not None:
        return cached

    logger.debug("Compiling grammars for decimal separator %r", decimal_separator)
    pair = GrammarPair(
        relative=_compile_relative(base_time, time_offset, decimal_separator),
        duration=_compile_duration(time_offset, decimal_separator),
    )
    return _GRAMMAR_CACHE.setdefault(key, pair)


def clear_grammar_cache() -> None:
    """Drop every cached grammar."""
    _GRAMMAR_CACHE.clear()


def grammar_cache_size() -> int:
    """Number of cached grammar pairs."""
    return len(_GRAMMAR_CACHE)
