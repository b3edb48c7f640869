"""reltime exception hierarchy with structured diagnostics.

All exceptions accept either a plain message or a Diagnostic object.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic

__all__ = [
    "RelativityConfigurationError",
    "RelativityError",
    "RelativityInternalError",
    "RelativityParseError",
    "UnitNotEnabledError",
]


class RelativityError(Exception):
    """Base exception for all reltime errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize RelativityError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class RelativityParseError(RelativityError):
    """Input text matched none of the accepted grammars.

    This is the only error the ``try_*`` conversion variants swallow.

    Attributes:
        input_value: The string that failed to parse
        locale_code: The locale used for parsing
        parse_type: Type of parsing attempted ('timestamp', 'duration', ...)

    Example:
        >>> try:
        ...     engine.convert_to_duration("soon")
        ... except RelativityParseError as error:
        ...     print(error.input_value, error.parse_type)
        soon duration
    """

    def __init__(
        self,
        message: str | Diagnostic,
        *,
        input_value: str = "",
        locale_code: str = "",
        parse_type: str = "",
    ) -> None:
        """Initialize RelativityParseError.

        Args:
            message: Error message string OR Diagnostic object
            input_value: The string that failed to parse
            locale_code: The locale used for parsing
            parse_type: Type of parsing ('timestamp', 'duration', 'datetime', 'number')
        """
        super().__init__(message)
        self.input_value = input_value
        self.locale_code = locale_code
        self.parse_type = parse_type


class RelativityInternalError(RelativityParseError):
    """Grammar matched a base keyword the resolver does not recognize.

    Indicates grammar/resolver misalignment. Always propagates, even from
    ``try_*`` variants.
    """


class RelativityConfigurationError(RelativityError, ValueError):
    """Invalid keyword settings, locale or time zone.

    Raised at configuration-build time, never at parse time.
    """


class UnitNotEnabledError(RelativityError, ValueError):
    """Formatting demanded a unit that has no configured symbol."""
