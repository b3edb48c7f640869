"""reltime - Locale-aware relative timestamp and duration parsing.

Converts human-entered absolute or relative timestamps ("DAY-1W",
"2024-01-31T00:00:00Z", "MONTH+1Y 2MO") and durations ("1.5H", "1W 2D 3H",
"01:30:00") into UTC datetimes and timedeltas, using a per-locale keyword
vocabulary and the locale's calendar conventions.

Public API:
    ParserRegistry - Resolves (locale, time zone) to a ConversionEngine
    ConversionEngine - Timestamp/duration conversion and duration formatting
    ParserConfiguration - Keyword vocabulary bound to a locale
    BaseTimeKeywords / TimeOffsetKeywords - Keyword sets
    DurationBuilder - Fluent composite duration strings
    get_current_engine / set_current_engine / use_engine - Flow-local engine

Exceptions:
    RelativityError - Base exception class
    RelativityParseError - Text matched no accepted grammar
    RelativityConfigurationError - Invalid keywords, locale or zone
    UnitNotEnabledError - Formatting demanded a disabled unit

Submodules:
    reltime.helpers - Module-level shortcuts against the current engine
    reltime.grammar - Grammar compiler and cache
    reltime.parsing - Absolute datetime, number and literal time-span parsers
    reltime.diagnostics - Error types and diagnostic codes
"""

from .diagnostics import (
    RelativityConfigurationError,
    RelativityError,
    RelativityInternalError,
    RelativityParseError,
    UnitNotEnabledError,
)
from .durations import DurationBuilder
from .enums import BaseTimeKind, TimeOffsetUnit
from .runtime import (
    INVARIANT,
    INVARIANT_UTC,
    ConversionEngine,
    ParserRegistry,
    RelativityParser,
    get_current_engine,
    reset_current_engine,
    set_current_engine,
    use_engine,
)
from .settings import BaseTimeKeywords, ParserConfiguration, TimeOffsetKeywords

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("reltime")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "INVARIANT",
    "INVARIANT_UTC",
    "BaseTimeKeywords",
    "BaseTimeKind",
    "ConversionEngine",
    "DurationBuilder",
    "ParserConfiguration",
    "ParserRegistry",
    "RelativityConfigurationError",
    "RelativityError",
    "RelativityInternalError",
    "RelativityParseError",
    "RelativityParser",
    "TimeOffsetKeywords",
    "TimeOffsetUnit",
    "UnitNotEnabledError",
    "__version__",
    "get_current_engine",
    "reset_current_engine",
    "set_current_engine",
    "use_engine",
]
