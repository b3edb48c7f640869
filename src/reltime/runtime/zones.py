"""Time zone resolution and kind-aware instant conversion.

Every instant carries one of three dispositions:

- already-UTC: aware datetime whose tzinfo is UTC
- local to some zone: aware datetime in any other zone
- unspecified: naive datetime

Already-UTC values pass through, zoned values are converted with standard
zone math, and unspecified values are assumed to be wall-clock time in the
engine's zone. Relative arithmetic runs on naive wall-clock values in the
engine's zone.

Uses python-dateutil for the local system zone, IANA lookups and DST-gap
resolution.

Python 3.13+.
"""

from __future__ import annotations

from datetime import UTC, datetime, timezone, tzinfo

from dateutil import tz

from reltime.diagnostics import ErrorTemplate, RelativityConfigurationError

__all__ = [
    "LOCAL",
    "current_time",
    "is_local",
    "is_utc",
    "now_wall_clock",
    "resolve_time_zone",
    "same_zone",
    "to_utc",
    "to_wall_clock",
    "zone_name",
]

LOCAL: tzinfo = tz.tzlocal()

_UTC_NAMES = frozenset({"utc", "z", "etc/utc", "gmt", "etc/gmt"})


def resolve_time_zone(value: tzinfo | str | None) -> tzinfo:
    """Resolve a zone argument to a tzinfo.

    Args:
        value: A tzinfo, an IANA zone name, "UTC", "local", or None for the
            local system zone

    Returns:
        tzinfo instance; UTC names resolve to ``datetime.UTC``

    Raises:
        RelativityConfigurationError: If a zone name cannot be resolved
    """
    if value is None:
        return LOCAL
    if isinstance(value, tzinfo):
        return UTC if is_utc(value) else value

    name = value.strip()
    if name.lower() in _UTC_NAMES:
        return UTC
    if name.lower() == "local":
        return LOCAL
    zone = tz.gettz(name) if name else None
    if zone is None:
        raise RelativityConfigurationError(ErrorTemplate.time_zone_unknown(value))
    return UTC if is_utc(zone) else zone


def is_utc(zone: tzinfo | None) -> bool:
    """True when the zone is UTC itself (not merely zero offset today)."""
    if zone is None:
        return False
    return zone is UTC or zone == timezone.utc or isinstance(zone, tz.tzutc)


def same_zone(left: tzinfo, right: tzinfo) -> bool:
    """Zone equality treating every UTC spelling as one zone."""
    if is_utc(left) or is_utc(right):
        return is_utc(left) and is_utc(right)
    return left is right or left == right


def zone_name(zone: tzinfo) -> str:
    """Readable zone name for logs and reprs."""
    if is_utc(zone):
        return "UTC"
    if isinstance(zone, tz.tzlocal):
        return "local"
    return getattr(zone, "key", None) or str(zone)


def to_utc(value: datetime, zone: tzinfo) -> datetime:
    """Normalize an instant to an aware UTC datetime.

    Args:
        value: Instant of any disposition
        zone: Zone assumed for naive values

    Returns:
        Aware datetime with tzinfo ``datetime.UTC``
    """
    if value.tzinfo is None or value.utcoffset() is None:
        localized = tz.resolve_imaginary(value.replace(tzinfo=zone))
        return localized.astimezone(UTC)
    if is_utc(value.tzinfo):
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def to_wall_clock(value: datetime, zone: tzinfo) -> datetime:
    """Naive wall-clock time of an instant in ``zone``.

    Naive values are taken to be in ``zone`` already and returned unchanged.
    """
    if value.tzinfo is None or value.utcoffset() is None:
        return value.replace(tzinfo=None)
    return value.astimezone(zone).replace(tzinfo=None)


def now_wall_clock(zone: tzinfo) -> datetime:
    """Current naive wall-clock time in ``zone``."""
    return datetime.now(zone).replace(tzinfo=None)


def current_time(zone: tzinfo | str | None = None) -> datetime:
    """Current time as an aware datetime in the resolved zone.

    Raises:
        RelativityConfigurationError: If a zone name cannot be resolved
    """
    return datetime.now(resolve_time_zone(zone))


def is_local(zone: tzinfo) -> bool:
    """True when the zone is the local system zone."""
    return isinstance(zone, tz.tzlocal)
