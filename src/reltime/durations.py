"""Fluent construction of composite duration strings.

DurationBuilder collects a value per fixed-length unit and renders them with
an engine's unit symbols, largest unit first:

    >>> DurationBuilder(engine).weeks(1).days(2).milliseconds(6).build()
    '1W 2D 6MS'

Unlike ConversionEngine.format_duration(), values are kept as given rather
than normalized (90 minutes stays "90M").

Python 3.13+.
"""

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal

from reltime.diagnostics import ErrorTemplate, UnitNotEnabledError
from reltime.enums import DURATION_UNITS, TimeOffsetUnit
from reltime.parsing.durations import quantity_to_timedelta
from reltime.runtime.context import get_current_engine
from reltime.runtime.engine import RelativityParser

__all__ = ["DurationBuilder"]

type Quantity = int | float | Decimal


def _to_decimal(unit: TimeOffsetUnit, value: Quantity) -> Decimal:
    if isinstance(value, bool) or not isinstance(value, int | float | Decimal):
        msg = f"{unit} must be int, float or Decimal, got {type(value).__name__}"
        raise TypeError(msg)
    quantity = Decimal(str(value)) if isinstance(value, float) else Decimal(value)
    if not quantity.is_finite():
        raise ValueError(str(ErrorTemplate.non_finite_component(unit, value)))
    if quantity < 0:
        raise ValueError(str(ErrorTemplate.negative_component(unit, value)))
    return quantity


class DurationBuilder:
    """Builds a composite duration string one unit at a time.

    Args:
        engine: Parser whose unit symbols and locale are used
            (default: get_current_engine())

    Setters return the builder. Setting a unit again replaces its value.

    Raises (from setters):
        TypeError: If the value is not a number
        ValueError: If the value is negative or not finite
        UnitNotEnabledError: If the unit has no symbol in the engine
    """

    __slots__ = ("_engine", "_values")

    def __init__(self, engine: RelativityParser | None = None) -> None:
        self._engine = engine if engine is not None else get_current_engine()
        self._values: dict[TimeOffsetUnit, Decimal] = {}

    def _set(self, unit: TimeOffsetUnit, value: Quantity) -> DurationBuilder:
        quantity = _to_decimal(unit, value)
        if self._engine.get_symbol(unit) is None:
            raise UnitNotEnabledError(ErrorTemplate.unit_not_enabled(unit))
        self._values[unit] = quantity
        return self

    def weeks(self, value: Quantity) -> DurationBuilder:
        return self._set(TimeOffsetUnit.WEEKS, value)

    def days(self, value: Quantity) -> DurationBuilder:
        return self._set(TimeOffsetUnit.DAYS, value)

    def hours(self, value: Quantity) -> DurationBuilder:
        return self._set(TimeOffsetUnit.HOURS, value)

    def minutes(self, value: Quantity) -> DurationBuilder:
        return self._set(TimeOffsetUnit.MINUTES, value)

    def seconds(self, value: Quantity) -> DurationBuilder:
        return self._set(TimeOffsetUnit.SECONDS, value)

    def milliseconds(self, value: Quantity) -> DurationBuilder:
        return self._set(TimeOffsetUnit.MILLISECONDS, value)

    def build(self) -> str:
        """Render the non-zero components, or the engine's empty duration string."""
        parts = [
            self._engine.format_quantity(self._values[unit], unit)
            for unit in DURATION_UNITS
            if self._values.get(unit)
        ]
        if not parts:
            return self._engine.create_empty_duration_string()
        return " ".join(parts)

    def to_timedelta(self) -> timedelta:
        """Total length of every component."""
        return sum(
            (quantity_to_timedelta(value, unit) for unit, value in self._values.items()),
            timedelta(),
        )

    def __str__(self) -> str:
        return self.build()
