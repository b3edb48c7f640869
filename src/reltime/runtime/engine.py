"""Conversion engine: timestamp and duration parsing and duration formatting.

Architecture:
    - RelativityParser: Protocol describing what a parser can do
    - ConversionEngine: The single concrete implementation, bundling a
      ParserConfiguration, a time zone and the compiled grammars

Timestamp conversion tries, in order:
    1. Absolute parse with the engine locale (ISO 8601, then CLDR patterns)
    2. Relative expression: base keyword, optional signed offset
    3. Number of milliseconds since the Unix epoch (locale number format)

Duration conversion tries a literal time span ("1.18:00:00") and then the
composite unit grammar ("1W 2D 3H").

All timestamps are returned as aware UTC datetimes. Durations are timedelta
values with microsecond resolution.

Thread Safety:
    ConversionEngine is immutable. Compiled grammars are shared through the
    grammar cache by every engine with the same keyword and decimal
    separator signature.

Python 3.13+.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime, timedelta, tzinfo
from decimal import ROUND_HALF_EVEN, ROUND_UP, Decimal, localcontext
from typing import Protocol

from babel.numbers import format_decimal
from dateutil.relativedelta import relativedelta

from reltime.diagnostics import (
    ErrorTemplate,
    ParseType,
    RelativityInternalError,
    RelativityParseError,
    UnitNotEnabledError,
)
from reltime.enums import BaseTimeKind, TimeOffsetUnit
from reltime.grammar import GrammarPair, compile_grammars
from reltime.locale_utils import get_babel_locale, get_decimal_separator, get_first_week_day
from reltime.parsing import parse_datetime, parse_number, parse_timespan_literal
from reltime.parsing.durations import (
    UNIT_MICROSECONDS,
    quantity_to_timedelta,
    timedelta_to_microseconds,
)
from reltime.runtime.zones import (
    now_wall_clock,
    resolve_time_zone,
    same_zone,
    to_utc,
    to_wall_clock,
    zone_name,
)
from reltime.settings import BaseTimeKeywords, ParserConfiguration, TimeOffsetKeywords

__all__ = ["ConversionEngine", "RelativityParser"]

logger = logging.getLogger(__name__)

_UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)

# Decimal places that keep every unit exact to well under a microsecond when
# a formatted composite is parsed back.
_DEFAULT_PLACES: dict[TimeOffsetUnit, int] = {
    TimeOffsetUnit.MILLISECONDS: 3,
    TimeOffsetUnit.SECONDS: 6,
    TimeOffsetUnit.MINUTES: 10,
    TimeOffsetUnit.HOURS: 12,
    TimeOffsetUnit.DAYS: 13,
    TimeOffsetUnit.WEEKS: 14,
}


class RelativityParser(Protocol):
    """Protocol for timestamp and duration parsers.

    ConversionEngine is the implementation; the protocol lets callers accept
    any object with the same surface.
    """

    @property
    def locale(self) -> str: ...  # pragma: no cover

    @property
    def time_zone(self) -> tzinfo: ...  # pragma: no cover

    def try_convert_to_timestamp(
        self, text: str, origin: datetime | None = None
    ) -> tuple[bool, datetime | None]: ...  # pragma: no cover

    def convert_to_timestamp(
        self, text: str, origin: datetime | None = None
    ) -> datetime: ...  # pragma: no cover

    def try_convert_to_duration(self, text: str) -> tuple[bool, timedelta | None]: ...  # pragma: no cover

    def convert_to_duration(self, text: str) -> timedelta: ...  # pragma: no cover

    def format_duration(
        self,
        value: timedelta,
        unit: TimeOffsetUnit | None = None,
        decimal_places: int = -1,
    ) -> str: ...  # pragma: no cover

    def format_quantity(self, quantity: Decimal | int, unit: TimeOffsetUnit) -> str: ...  # pragma: no cover

    def create_empty_duration_string(self) -> str: ...  # pragma: no cover

    def get_symbol(self, unit: TimeOffsetUnit) -> str | None: ...  # pragma: no cover


def _require_text(text: object) -> str:
    if text is None:
        msg = "text must not be None"
        raise TypeError(msg)
    if not isinstance(text, str):
        msg = f"text must be str, got {type(text).__name__}"
        raise TypeError(msg)
    return text


def _require_duration(value: object) -> timedelta:
    if not isinstance(value, timedelta):
        msg = f"value must be timedelta, got {type(value).__name__}"
        raise TypeError(msg)
    return value


@dataclass(frozen=True, slots=True)
class ConversionEngine:
    """Parser bound to a keyword configuration, a locale and a time zone.

    Engines are normally obtained from ParserRegistry.get_engine() or
    get_current_engine(), but can be built directly.

    Args:
        configuration: Keywords and locale
        time_zone: tzinfo, IANA name, "UTC", or None for the local zone

    Example:
        >>> engine = ConversionEngine(ParserConfiguration(), "UTC")
        >>> engine.convert_to_timestamp(
        ...     "MONTH-3MO", origin=datetime(2024, 1, 31, tzinfo=UTC)
        ... )
        datetime.datetime(2023, 10, 1, 0, 0, tzinfo=datetime.timezone.utc)
        >>> engine.convert_to_duration("500ms")
        datetime.timedelta(microseconds=500000)
    """

    configuration: ParserConfiguration = field(default_factory=ParserConfiguration)
    time_zone: tzinfo = field(default=None)  # type: ignore[assignment]
    grammars: GrammarPair = field(init=False, repr=False, compare=False)
    _keyword_map: dict[str, BaseTimeKind] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "time_zone", resolve_time_zone(self.time_zone))
        grammars = compile_grammars(
            self.configuration.base_time,
            self.configuration.time_offset,
            get_decimal_separator(self.configuration.locale),
        )
        object.__setattr__(self, "grammars", grammars)
        object.__setattr__(self, "_keyword_map", self.configuration.base_time.keyword_map())

    def __repr__(self) -> str:
        return (
            f"ConversionEngine(locale={self.locale!r}, "
            f"time_zone={zone_name(self.time_zone)!r})"
        )

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def locale(self) -> str:
        """Canonical locale name; "" is the invariant locale."""
        return self.configuration.locale

    @property
    def base_time(self) -> BaseTimeKeywords:
        return self.configuration.base_time

    @property
    def time_offset(self) -> TimeOffsetKeywords:
        return self.configuration.time_offset

    @property
    def decimal_separator(self) -> str:
        return get_decimal_separator(self.locale)

    @property
    def first_week_day(self) -> int:
        """First day of week for the locale (0=Monday, 6=Sunday)."""
        return get_first_week_day(self.locale)

    # ------------------------------------------------------------------
    # Derivation
    # ------------------------------------------------------------------

    def with_time_zone(self, time_zone: tzinfo | str | None) -> ConversionEngine:
        """This engine, or a copy of it, in another time zone."""
        zone = resolve_time_zone(time_zone)
        if same_zone(zone, self.time_zone):
            return self
        return replace(self, time_zone=zone)

    def with_locale(self, locale: str) -> ConversionEngine:
        """Copy of this engine under another locale.

        Grammars are fetched for the new locale's decimal separator.
        """
        return replace(self, configuration=self.configuration.with_locale(locale))

    # ------------------------------------------------------------------
    # Timestamps
    # ------------------------------------------------------------------

    def try_convert_to_timestamp(
        self, text: str, origin: datetime | None = None
    ) -> tuple[bool, datetime | None]:
        """Convert text to a UTC timestamp without raising on bad format.

        Args:
            text: Absolute timestamp, relative expression or epoch milliseconds
            origin: Instant relative expressions are resolved against
                (default: now in the engine's zone)

        Returns:
            (True, aware UTC datetime) on success, (False, None) otherwise

        Raises:
            TypeError: If text is None
            RelativityInternalError: If the grammar and resolver disagree
        """
        result = self._parse_timestamp(_require_text(text), origin)
        return (result is not None, result)

    def convert_to_timestamp(self, text: str, origin: datetime | None = None) -> datetime:
        """Convert text to a UTC timestamp.

        Raises:
            TypeError: If text is None
            RelativityParseError: If text is not a recognized timestamp
        """
        result = self._parse_timestamp(_require_text(text), origin)
        if result is None:
            raise RelativityParseError(
                ErrorTemplate.parse_timestamp_failed(text, self.locale),
                input_value=text,
                locale_code=self.locale,
                parse_type=ParseType.TIMESTAMP,
            )
        return result

    def is_relative_timestamp(self, text: str) -> bool:
        """True when text matches this engine's relative-expression grammar."""
        return self._match_relative(_require_text(text)) is not None

    def _parse_timestamp(self, text: str, origin: datetime | None) -> datetime | None:
        if not text.strip():
            return None

        parsed, _errors = parse_datetime(text, self.locale)
        if parsed is not None:
            try:
                return to_utc(parsed, self.time_zone)
            except (OverflowError, ValueError) as e:
                logger.debug("Absolute timestamp %r is out of range: %s", text, e)

        relative = self._parse_relative(text, origin)
        if relative is not None:
            return relative

        millis, _errors = parse_number(text, self.locale)
        if millis is None:
            return None
        try:
            return _UNIX_EPOCH + quantity_to_timedelta(millis, TimeOffsetUnit.MILLISECONDS)
        except OverflowError:
            return None

    def _match_relative(self, text: str) -> tuple[str, str | None, dict[TimeOffsetUnit, str]] | None:
        grammar = self.grammars.relative
        match = grammar.match(text)
        if match is None:
            return None
        operator = match.group("operator")
        components = grammar.components(match)
        if operator is not None and not components:
            return None
        return (match.group("base"), operator, components)

    def _parse_relative(self, text: str, origin: datetime | None) -> datetime | None:
        matched = self._match_relative(text)
        if matched is None:
            return None
        keyword, operator, components = matched

        try:
            if origin is None:
                start = now_wall_clock(self.time_zone)
            else:
                start = to_wall_clock(origin, self.time_zone)
            result = self._resolve_base(keyword, start)
            if operator is not None:
                offsets = self._parse_components(components)
                if offsets is None:
                    return None
                result = _apply_offset(result, offsets, negate=operator == "-")
            return to_utc(result, self.time_zone)
        except (OverflowError, ValueError) as e:
            logger.debug("Relative expression %r is out of range: %s", text, e)
            return None

    def _resolve_base(self, keyword: str, origin: datetime) -> datetime:
        kind = self._keyword_map.get(keyword.casefold())
        match kind:
            case BaseTimeKind.NOW:
                return origin
            case BaseTimeKind.SECOND:
                return origin.replace(microsecond=0)
            case BaseTimeKind.MINUTE:
                return origin.replace(second=0, microsecond=0)
            case BaseTimeKind.HOUR:
                return origin.replace(minute=0, second=0, microsecond=0)
            case BaseTimeKind.DAY:
                return _midnight(origin)
            case BaseTimeKind.WEEK:
                days_back = (7 + origin.weekday() - self.first_week_day) % 7
                return _midnight(origin) - timedelta(days=days_back)
            case BaseTimeKind.MONTH:
                return _midnight(origin).replace(day=1)
            case BaseTimeKind.YEAR:
                return _midnight(origin).replace(month=1, day=1)
            case _:
                raise RelativityInternalError(
                    ErrorTemplate.unknown_base_keyword(keyword),
                    input_value=keyword,
                    locale_code=self.locale,
                    parse_type=ParseType.TIMESTAMP,
                )

    def _parse_components(
        self, components: dict[TimeOffsetUnit, str]
    ) -> dict[TimeOffsetUnit, Decimal] | None:
        quantities: dict[TimeOffsetUnit, Decimal] = {}
        for unit, number in components.items():
            quantity, _errors = parse_number(number, self.locale)
            if quantity is None:
                return None
            quantities[unit] = quantity
        return quantities

    # ------------------------------------------------------------------
    # Durations
    # ------------------------------------------------------------------

    def try_convert_to_duration(self, text: str) -> tuple[bool, timedelta | None]:
        """Convert text to a duration without raising on bad format.

        Returns:
            (True, timedelta) on success, (False, None) otherwise

        Raises:
            TypeError: If text is None
        """
        result = self._parse_duration(_require_text(text))
        return (result is not None, result)

    def convert_to_duration(self, text: str) -> timedelta:
        """Convert text to a duration.

        Raises:
            TypeError: If text is None
            RelativityParseError: If text is not a recognized duration
        """
        result = self._parse_duration(_require_text(text))
        if result is None:
            raise RelativityParseError(
                ErrorTemplate.parse_duration_failed(text, self.locale),
                input_value=text,
                locale_code=self.locale,
                parse_type=ParseType.DURATION,
            )
        return result

    def _parse_duration(self, text: str) -> timedelta | None:
        if not text.strip():
            return None

        literal, _errors = parse_timespan_literal(text, self.locale)
        if literal is not None:
            return literal

        grammar = self.grammars.duration
        match = grammar.match(text)
        if match is None:
            return None
        quantities = self._parse_components(grammar.components(match))
        if not quantities:
            return None
        try:
            return sum(
                (quantity_to_timedelta(quantity, unit) for unit, quantity in quantities.items()),
                timedelta(),
            )
        except OverflowError:
            return None

    # ------------------------------------------------------------------
    # Formatting
    # ------------------------------------------------------------------

    def get_symbol(self, unit: TimeOffsetUnit) -> str | None:
        """Configured symbol for a unit, or None when the unit is disabled."""
        return self.time_offset.get_symbol(unit)

    def create_empty_duration_string(self) -> str:
        """Zero duration in the smallest enabled unit, e.g. "0MS"."""
        smallest = self.time_offset.duration_units()[-1]
        return f"0{self.get_symbol(smallest)}"

    def format_duration(
        self,
        value: timedelta,
        unit: TimeOffsetUnit | None = None,
        decimal_places: int = -1,
    ) -> str:
        """Render a duration using this engine's unit symbols.

        Args:
            value: Duration to render
            unit: Render in this single unit; None renders a composite
                breakdown from the largest enabled unit down ("1D 2H 30M")
            decimal_places: With a single unit, round away from zero to this
                many places; negative means no rounding

        Returns:
            Formatted duration using the locale decimal separator

        Raises:
            TypeError: If value is not a timedelta
            UnitNotEnabledError: If unit has no symbol
            ValueError: If unit is a calendar unit (months, years)

        Example:
            >>> engine.format_duration(timedelta(hours=1, minutes=30), TimeOffsetUnit.HOURS)
            '1.5H'
            >>> engine.format_duration(timedelta(days=1, hours=2))
            '1D 2H'
        """
        value = _require_duration(value)
        if unit is None:
            return self._format_composite(value)

        symbol = self.get_symbol(unit)
        if symbol is None:
            raise UnitNotEnabledError(ErrorTemplate.unit_not_enabled(unit))
        if unit.is_calendar:
            raise ValueError(str(ErrorTemplate.calendar_unit_duration(unit)))

        quantity = Decimal(timedelta_to_microseconds(value)) / UNIT_MICROSECONDS[unit]
        if decimal_places >= 0:
            with localcontext() as ctx:
                # quantize needs every integer digit plus the requested places
                ctx.prec = max(ctx.prec, quantity.adjusted() + decimal_places + 2)
                quantity = quantity.quantize(Decimal(1).scaleb(-decimal_places), rounding=ROUND_UP)
        else:
            quantity = _round_places(quantity, _DEFAULT_PLACES[unit])
        return self._format_quantity(quantity, symbol)

    def format_duration_largest_unit(self, value: timedelta, round_up: bool = False) -> str:
        """Render a duration in the largest enabled unit it fills at least once.

        Candidates run from days down to milliseconds; weeks are only used
        when no other unit is enabled.

        Args:
            value: Duration to render
            round_up: Round away from zero to a whole number

        Example:
            >>> engine.format_duration_largest_unit(timedelta(days=1, hours=18))
            '1.75D'
            >>> engine.format_duration_largest_unit(timedelta(days=1, hours=18), round_up=True)
            '2D'
        """
        micros = abs(timedelta_to_microseconds(_require_duration(value)))
        units = self.time_offset.duration_units()
        units = tuple(unit for unit in units if unit is not TimeOffsetUnit.WEEKS) or units
        chosen = next((unit for unit in units if micros >= UNIT_MICROSECONDS[unit]), units[-1])
        return self.format_duration(value, chosen, 0 if round_up else -1)

    def _format_composite(self, value: timedelta) -> str:
        micros = timedelta_to_microseconds(value)
        remaining = abs(micros)
        units = self.time_offset.duration_units()
        parts: list[str] = []

        for unit in units[:-1]:
            count, remaining = divmod(remaining, UNIT_MICROSECONDS[unit])
            if count:
                parts.append(self._format_quantity(Decimal(count), self.get_symbol(unit)))

        smallest = units[-1]
        quantity = _round_places(
            Decimal(remaining) / UNIT_MICROSECONDS[smallest], _DEFAULT_PLACES[smallest]
        )
        if quantity:
            parts.append(self._format_quantity(quantity, self.get_symbol(smallest)))

        if not parts:
            return self.create_empty_duration_string()
        if micros < 0:
            parts = [f"-{part}" for part in parts]
        return " ".join(parts)

    def format_quantity(self, quantity: Decimal | int, unit: TimeOffsetUnit) -> str:
        """Render a number followed by the unit's symbol ("1,5H" under de).

        Raises:
            UnitNotEnabledError: If unit has no symbol
        """
        symbol = self.get_symbol(unit)
        if symbol is None:
            raise UnitNotEnabledError(ErrorTemplate.unit_not_enabled(unit))
        return self._format_quantity(Decimal(quantity), symbol)

    def _format_quantity(self, quantity: Decimal, symbol: str | None) -> str:
        # Locale minus signs (e.g. U+2212) would not parse back; sign is added here.
        sign = "-" if quantity < 0 else ""
        number = format_decimal(
            abs(quantity),
            format="0.###",
            locale=get_babel_locale(self.locale),
            decimal_quantization=False,
        )
        return f"{sign}{number}{symbol}"


def _midnight(value: datetime) -> datetime:
    return value.replace(hour=0, minute=0, second=0, microsecond=0)


def _round_places(quantity: Decimal, places: int) -> Decimal:
    """Round half-even to ``places`` and drop trailing zeros."""
    rounded = quantity.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_EVEN)
    if rounded == rounded.to_integral_value():
        return rounded.quantize(Decimal(1))
    return rounded.normalize()


def _apply_offset(
    start: datetime, offsets: dict[TimeOffsetUnit, Decimal], *, negate: bool
) -> datetime:
    """Add every offset component to ``start``; ``negate`` flips the whole offset.

    Years, then months, are added as calendar units (day clamped to the end
    of the month). The remaining units are summed as one fixed-length delta.
    """
    sign = -1 if negate else 1
    result = start
    for unit in (TimeOffsetUnit.YEARS, TimeOffsetUnit.MONTHS):
        quantity = offsets.get(unit)
        if quantity:
            result += relativedelta(**{unit.value: sign * int(quantity)})

    delta = timedelta()
    for unit, quantity in offsets.items():
        if not unit.is_calendar and quantity:
            delta += quantity_to_timedelta(sign * quantity, unit)
    return result + delta
