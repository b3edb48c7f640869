"""Locale-keyed registry resolving (locale, time zone) requests to engines.

Architecture:
    - A table maps case-insensitive locale keys to registry entries
      (configuration plus an engine built in the local zone)
    - get_engine() walks the requested locale's CLDR parent chain and
      overlays the requested time zone
    - The invariant locale is served by two process-wide singletons and can
      never be registered

Resolution for a named locale:
    exact match  -> cached engine, re-zoned if the zone differs
    parent match -> parent's keywords with the requested locale and zone, so
                    calendar facts (first day of week, decimal separator)
                    follow the requested locale
    no match     -> invariant keywords with the requested locale and zone

Thread Safety:
    Reads are plain dict lookups of immutable entries. Writes build the
    entry first, then publish it under a small lock so conditional
    replacement is atomic.

Python 3.13+.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import UTC, tzinfo
from typing import ClassVar

from reltime.diagnostics import ErrorTemplate, RelativityConfigurationError
from reltime.locale_utils import canonical_locale, get_parent_chain, is_invariant, locale_key
from reltime.runtime.engine import ConversionEngine
from reltime.runtime.zones import LOCAL, is_local, is_utc, resolve_time_zone, zone_name
from reltime.settings import ParserConfiguration
from reltime.well_known import get_default_configurations

__all__ = [
    "INVARIANT",
    "INVARIANT_CONFIGURATION",
    "INVARIANT_UTC",
    "ParserRegistry",
]

logger = logging.getLogger(__name__)

INVARIANT_CONFIGURATION = ParserConfiguration()

# Invariant locale in the local system zone.
INVARIANT = ConversionEngine(INVARIANT_CONFIGURATION, LOCAL)

# Invariant locale in UTC. Default for get_current_engine().
INVARIANT_UTC = ConversionEngine(INVARIANT_CONFIGURATION, UTC)


@dataclass(frozen=True, slots=True)
class _RegistryEntry:
    configuration: ParserConfiguration
    engine: ConversionEngine


class ParserRegistry:
    """Resolves locales and time zones to configured ConversionEngine instances.

    Seeded with the built-in configurations, then with any caller-supplied
    configurations (which replace built-ins for the same locale).

    Args:
        configurations: Extra configurations; None entries are skipped

    Raises:
        TypeError: If an entry is not a ParserConfiguration
        RelativityConfigurationError: If an entry targets the invariant locale

    Example:
        >>> registry = ParserRegistry()
        >>> registry.get_engine("en-GB", "UTC")
        ConversionEngine(locale='en_GB', time_zone='UTC')
    """

    __slots__ = ("_entries", "_write_lock")

    _default: ClassVar[ParserRegistry | None] = None
    _default_lock: ClassVar[threading.Lock] = threading.Lock()

    def __init__(self, configurations: Iterable[ParserConfiguration | None] | None = None) -> None:
        self._entries: dict[str, _RegistryEntry] = {}
        self._write_lock = threading.Lock()
        for configuration in get_default_configurations():
            self.try_register(configuration, replace_existing=True)
        for configuration in configurations or ():
            if configuration is not None:
                self.try_register(configuration, replace_existing=True)

    @classmethod
    def default(cls) -> ParserRegistry:
        """Process-wide registry holding only the built-in configurations."""
        if cls._default is None:
            with cls._default_lock:
                if cls._default is None:
                    cls._default = cls()
        return cls._default

    def available_locales(self) -> tuple[str, ...]:
        """Registered locale names, sorted."""
        return tuple(sorted(entry.configuration.locale for entry in self._entries.values()))

    def get_configuration(self, locale: str) -> ParserConfiguration | None:
        """Configuration registered under exactly this locale, if any."""
        entry = self._entries.get(locale_key(locale))
        return None if entry is None else entry.configuration

    def get_engine(
        self,
        locale: str | None = None,
        time_zone: tzinfo | str | None = None,
    ) -> ConversionEngine:
        """Resolve a locale and time zone to an engine.

        Args:
            locale: Locale name (BCP 47 or POSIX); None or "" for invariant
            time_zone: tzinfo, IANA name, "UTC", or None for the local zone

        Returns:
            ConversionEngine for the request

        Raises:
            RelativityConfigurationError: If the locale or zone is unknown
        """
        zone = resolve_time_zone(time_zone)

        if is_invariant(locale):
            if is_local(zone):
                return INVARIANT
            if is_utc(zone):
                return INVARIANT_UTC
            return INVARIANT_UTC.with_time_zone(zone)

        requested = canonical_locale(locale)
        for candidate in get_parent_chain(requested):
            entry = self._entries.get(locale_key(candidate))
            if entry is None:
                continue
            if candidate == requested:
                logger.debug("Engine for %s (%s): exact match", requested, zone_name(zone))
                return entry.engine.with_time_zone(zone)
            logger.debug(
                "Engine for %s (%s): using keywords of parent %s",
                requested,
                zone_name(zone),
                candidate,
            )
            return ConversionEngine(entry.configuration.with_locale(requested), zone)

        logger.debug("Engine for %s (%s): invariant keywords", requested, zone_name(zone))
        return ConversionEngine(INVARIANT_CONFIGURATION.with_locale(requested), zone)

    def try_register(
        self,
        configuration: ParserConfiguration,
        replace_existing: bool = False,
    ) -> bool:
        """Register a configuration for its locale.

        Args:
            configuration: Configuration to add
            replace_existing: Replace a configuration already registered for
                the same locale

        Returns:
            True if the configuration was stored, False if the locale was
            already registered and replace_existing is False

        Raises:
            TypeError: If configuration is not a ParserConfiguration
            RelativityConfigurationError: If configuration targets the invariant locale
        """
        if not isinstance(configuration, ParserConfiguration):
            msg = f"configuration must be ParserConfiguration, got {type(configuration).__name__}"
            raise TypeError(msg)
        if is_invariant(configuration.locale):
            raise RelativityConfigurationError(ErrorTemplate.invariant_locale_immutable())

        key = locale_key(configuration.locale)
        if not replace_existing and key in self._entries:
            return False

        entry = _RegistryEntry(configuration, ConversionEngine(configuration, LOCAL))
        with self._write_lock:
            if not replace_existing and key in self._entries:
                return False
            self._entries = {**self._entries, key: entry}
        logger.debug("Registered parser configuration for %s", configuration.locale)
        return True
