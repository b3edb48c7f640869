"""Diagnostic codes and data structures.

Defines error codes and diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum, StrEnum

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "ErrorCategory",
    "ParseType",
]


class ErrorCategory(StrEnum):
    """Error categorization for reltime errors.

    Categories:
        PARSE: Input text matched none of the accepted grammars
        CONFIGURATION: Invalid keyword settings, locale or time zone
        USAGE: Caller asked for something the configuration cannot provide
        INTERNAL: Grammar and resolver disagree (a bug, never user error)
    """

    PARSE = "parse"
    CONFIGURATION = "configuration"
    USAGE = "usage"
    INTERNAL = "internal"


class ParseType(StrEnum):
    """What a failed parse was attempting to produce."""

    TIMESTAMP = "timestamp"
    DURATION = "duration"
    DATETIME = "datetime"
    NUMBER = "number"


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        4000-4999: Parsing errors (timestamps, durations, numbers)
        6000-6999: Configuration errors (keywords, locales, time zones)
        7000-7999: Usage errors (disabled units, invalid arguments)
        9000-9999: Internal consistency errors
    """

    # Parsing errors (4000-4999)
    PARSE_TIMESTAMP_FAILED = 4001
    PARSE_DURATION_FAILED = 4002
    PARSE_DATETIME_FAILED = 4003
    PARSE_NUMBER_FAILED = 4004
    PARSE_LOCALE_UNKNOWN = 4005

    # Configuration errors (6000-6999)
    KEYWORD_TOO_LONG = 6001
    KEYWORD_INVALID_TYPE = 6002
    NO_DURATION_UNIT = 6003
    LOCALE_UNKNOWN = 6004
    TIME_ZONE_UNKNOWN = 6005
    INVARIANT_LOCALE_IMMUTABLE = 6006

    # Usage errors (7000-7999)
    UNIT_NOT_ENABLED = 7001
    NEGATIVE_COMPONENT = 7002
    NON_FINITE_COMPONENT = 7003
    CALENDAR_UNIT_DURATION = 7004

    # Internal errors (9000-9999)
    UNKNOWN_BASE_KEYWORD = 9001

    @property
    def category(self) -> ErrorCategory:
        """Category derived from the numeric code range."""
        if self.value < 6000:
            return ErrorCategory.PARSE
        if self.value < 7000:
            return ErrorCategory.CONFIGURATION
        if self.value < 9000:
            return ErrorCategory.USAGE
        return ErrorCategory.INTERNAL


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Inspired by Rust compiler diagnostics.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        hint: Suggestion for fixing the error
    """

    code: DiagnosticCode
    message: str
    hint: str | None = None

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like Rust compiler.

        Control characters in the message are escaped so that user input
        echoed back in an error cannot inject extra log lines.

        Example output:
            error[PARSE_DURATION_FAILED]: Failed to parse duration '1X'
              = help: Use the configured unit keywords, e.g. '1D 2H'

        Returns:
            Formatted error message
        """
        message = _escape_control(self.message)
        lines = [f"error[{self.code.name}]: {message}"]
        if self.hint:
            lines.append(f"  = help: {_escape_control(self.hint)}")
        return "\n".join(lines)


def _escape_control(text: str) -> str:
    return "".join(
        char if char.isprintable() else char.encode("unicode_escape").decode("ascii")
        for char in text
    )
