"""Module-level conversion shortcuts.

Each function runs against an explicit engine when one is given, otherwise
against get_current_engine(). Useful where the engine has already been
published for the current flow (e.g. by a request handler).

Python 3.13+.
"""

from __future__ import annotations

from datetime import datetime, timedelta, tzinfo

from reltime.enums import TimeOffsetUnit
from reltime.runtime.context import get_current_engine
from reltime.runtime.engine import RelativityParser
from reltime.runtime.zones import current_time

__all__ = [
    "convert_to_duration",
    "convert_to_timestamp",
    "format_duration",
    "get_current_time",
    "is_valid_duration",
    "is_valid_timestamp",
    "try_convert_to_duration",
    "try_convert_to_timestamp",
]


def _engine(engine: RelativityParser | None) -> RelativityParser:
    return get_current_engine() if engine is None else engine


def convert_to_timestamp(
    text: str,
    origin: datetime | None = None,
    engine: RelativityParser | None = None,
) -> datetime:
    """Convert text to a UTC timestamp. See ConversionEngine.convert_to_timestamp()."""
    return _engine(engine).convert_to_timestamp(text, origin)


def try_convert_to_timestamp(
    text: str,
    origin: datetime | None = None,
    engine: RelativityParser | None = None,
) -> tuple[bool, datetime | None]:
    return _engine(engine).try_convert_to_timestamp(text, origin)


def convert_to_duration(text: str, engine: RelativityParser | None = None) -> timedelta:
    """Convert text to a duration. See ConversionEngine.convert_to_duration()."""
    return _engine(engine).convert_to_duration(text)


def try_convert_to_duration(
    text: str, engine: RelativityParser | None = None
) -> tuple[bool, timedelta | None]:
    return _engine(engine).try_convert_to_duration(text)


def is_valid_timestamp(text: str | None, engine: RelativityParser | None = None) -> bool:
    """True when text converts to a timestamp. None is simply invalid."""
    if text is None:
        return False
    ok, _ = _engine(engine).try_convert_to_timestamp(text)
    return ok


def is_valid_duration(text: str | None, engine: RelativityParser | None = None) -> bool:
    """True when text converts to a duration. None is simply invalid."""
    if text is None:
        return False
    ok, _ = _engine(engine).try_convert_to_duration(text)
    return ok


def format_duration(
    value: timedelta,
    unit: TimeOffsetUnit | None = None,
    decimal_places: int = -1,
    engine: RelativityParser | None = None,
) -> str:
    return _engine(engine).format_duration(value, unit, decimal_places)


def get_current_time(time_zone: tzinfo | str | None = None) -> datetime:
    """Current time in a zone (default: the current engine's zone)."""
    if time_zone is None:
        time_zone = get_current_engine().time_zone
    return current_time(time_zone)
