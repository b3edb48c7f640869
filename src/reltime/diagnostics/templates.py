"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode


class ErrorTemplate:
    """Centralized error message templates.

    Every reltime exception message, and every ValueError message for an
    invalid argument value, is created here. NO f-strings in exception
    constructors! This keeps messages testable and documents every error case
    in one place. Built-in TypeError checks for a wrong argument type keep a
    one-line inline message naming the received type.
    """

    # ------------------------------------------------------------------
    # Parsing
    # ------------------------------------------------------------------

    @staticmethod
    def parse_timestamp_failed(value: str, locale_code: str) -> Diagnostic:
        """Text is not an absolute, relative or epoch timestamp.

        Args:
            value: The text that failed to parse
            locale_code: Locale of the engine that attempted the parse

        Returns:
            Diagnostic for PARSE_TIMESTAMP_FAILED
        """
        msg = f"Failed to parse timestamp '{value}' for locale '{locale_code}'"
        return Diagnostic(
            code=DiagnosticCode.PARSE_TIMESTAMP_FAILED,
            message=msg,
            hint=(
                "Use an absolute timestamp, milliseconds since the epoch, or a "
                "base keyword with an optional offset such as 'DAY-1W'"
            ),
        )

    @staticmethod
    def parse_duration_failed(value: str, locale_code: str) -> Diagnostic:
        """Text is not a literal or composite duration.

        Args:
            value: The text that failed to parse
            locale_code: Locale of the engine that attempted the parse

        Returns:
            Diagnostic for PARSE_DURATION_FAILED
        """
        msg = f"Failed to parse duration '{value}' for locale '{locale_code}'"
        return Diagnostic(
            code=DiagnosticCode.PARSE_DURATION_FAILED,
            message=msg,
            hint="Use 'hh:mm:ss' or unit components such as '1D 2H 30M'",
        )

    @staticmethod
    def parse_datetime_failed(value: str, locale_code: str, reason: str) -> Diagnostic:
        """Absolute datetime parsing failed.

        Args:
            value: The datetime string that failed to parse
            locale_code: The locale used for parsing
            reason: Specific reason for failure

        Returns:
            Diagnostic for PARSE_DATETIME_FAILED
        """
        msg = f"Failed to parse datetime '{value}' for locale '{locale_code}': {reason}"
        return Diagnostic(
            code=DiagnosticCode.PARSE_DATETIME_FAILED,
            message=msg,
            hint="Use ISO 8601 or the locale's CLDR date/time format",
        )

    @staticmethod
    def parse_number_failed(value: str, locale_code: str, reason: str) -> Diagnostic:
        """Locale-aware number parsing failed.

        Args:
            value: The number string that failed to parse
            locale_code: The locale used for parsing
            reason: Specific reason for failure

        Returns:
            Diagnostic for PARSE_NUMBER_FAILED
        """
        msg = f"Failed to parse number '{value}' for locale '{locale_code}': {reason}"
        return Diagnostic(
            code=DiagnosticCode.PARSE_NUMBER_FAILED,
            message=msg,
            hint="Check the decimal separator used by the locale",
        )

    @staticmethod
    def parse_locale_unknown(locale_code: str) -> Diagnostic:
        """Locale has no CLDR data to parse with.

        Args:
            locale_code: The unrecognized locale code

        Returns:
            Diagnostic for PARSE_LOCALE_UNKNOWN
        """
        msg = f"Unknown locale '{locale_code}'"
        return Diagnostic(
            code=DiagnosticCode.PARSE_LOCALE_UNKNOWN,
            message=msg,
            hint="Use a valid BCP 47 or POSIX locale code (e.g., 'en_US', 'de-DE')",
        )

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    @staticmethod
    def keyword_too_long(slot: str, value: str, limit: int) -> Diagnostic:
        """Configured keyword exceeds the length limit.

        Args:
            slot: Name of the keyword slot
            value: The offending keyword
            limit: Maximum allowed length

        Returns:
            Diagnostic for KEYWORD_TOO_LONG
        """
        msg = f"Keyword '{value}' for '{slot}' is {len(value)} characters; limit is {limit}"
        return Diagnostic(
            code=DiagnosticCode.KEYWORD_TOO_LONG,
            message=msg,
            hint="Use a shorter keyword",
        )

    @staticmethod
    def keyword_invalid_type(slot: str, value: object) -> Diagnostic:
        """Configured keyword is not a string.

        Args:
            slot: Name of the keyword slot
            value: The offending value

        Returns:
            Diagnostic for KEYWORD_INVALID_TYPE
        """
        msg = f"Keyword for '{slot}' must be str or None, got {type(value).__name__}"
        return Diagnostic(code=DiagnosticCode.KEYWORD_INVALID_TYPE, message=msg)

    @staticmethod
    def no_duration_unit() -> Diagnostic:
        """Time offset keywords define no fixed-length unit.

        Returns:
            Diagnostic for NO_DURATION_UNIT
        """
        return Diagnostic(
            code=DiagnosticCode.NO_DURATION_UNIT,
            message=(
                "At least one of milliseconds, seconds, minutes, hours, days "
                "or weeks must have a keyword"
            ),
            hint="Months and years alone cannot represent a fixed-length duration",
        )

    @staticmethod
    def locale_unknown(locale_code: str) -> Diagnostic:
        """Locale name cannot be resolved.

        Args:
            locale_code: The unrecognized locale code

        Returns:
            Diagnostic for LOCALE_UNKNOWN
        """
        msg = f"Unknown locale '{locale_code}'"
        return Diagnostic(
            code=DiagnosticCode.LOCALE_UNKNOWN,
            message=msg,
            hint="Use a valid BCP 47 or POSIX locale code (e.g., 'en_US', 'de-DE')",
        )

    @staticmethod
    def time_zone_unknown(name: str) -> Diagnostic:
        """Time zone name cannot be resolved.

        Args:
            name: The unrecognized zone name

        Returns:
            Diagnostic for TIME_ZONE_UNKNOWN
        """
        msg = f"Unknown time zone '{name}'"
        return Diagnostic(
            code=DiagnosticCode.TIME_ZONE_UNKNOWN,
            message=msg,
            hint="Use an IANA zone name such as 'Europe/London' or pass a tzinfo",
        )

    @staticmethod
    def invariant_locale_immutable() -> Diagnostic:
        """Attempt to register a configuration for the invariant locale.

        Returns:
            Diagnostic for INVARIANT_LOCALE_IMMUTABLE
        """
        return Diagnostic(
            code=DiagnosticCode.INVARIANT_LOCALE_IMMUTABLE,
            message="The invariant locale configuration cannot be registered or replaced",
            hint="Register the configuration under a named locale such as 'en'",
        )

    # ------------------------------------------------------------------
    # Usage
    # ------------------------------------------------------------------

    @staticmethod
    def unit_not_enabled(unit: str) -> Diagnostic:
        """Formatting demanded a unit with no configured keyword.

        Args:
            unit: The disabled unit

        Returns:
            Diagnostic for UNIT_NOT_ENABLED
        """
        msg = f"Unit '{unit}' has no keyword in this configuration"
        return Diagnostic(
            code=DiagnosticCode.UNIT_NOT_ENABLED,
            message=msg,
            hint="Choose a unit whose symbol is not None",
        )

    @staticmethod
    def negative_component(unit: str, value: object) -> Diagnostic:
        """Duration component is negative.

        Args:
            unit: The component's unit
            value: The offending value

        Returns:
            Diagnostic for NEGATIVE_COMPONENT
        """
        msg = f"Duration component '{unit}' must not be negative, got {value}"
        return Diagnostic(code=DiagnosticCode.NEGATIVE_COMPONENT, message=msg)

    @staticmethod
    def non_finite_component(unit: str, value: object) -> Diagnostic:
        """Duration component is NaN or infinite.

        Args:
            unit: The component's unit
            value: The offending value

        Returns:
            Diagnostic for NON_FINITE_COMPONENT
        """
        msg = f"Duration component '{unit}' must be finite, got {value}"
        return Diagnostic(code=DiagnosticCode.NON_FINITE_COMPONENT, message=msg)

    @staticmethod
    def calendar_unit_duration(unit: str) -> Diagnostic:
        """Fixed-length duration requested in a calendar unit.

        Args:
            unit: The calendar unit (months or years)

        Returns:
            Diagnostic for CALENDAR_UNIT_DURATION
        """
        msg = f"Cannot express a duration in calendar unit '{unit}'"
        return Diagnostic(
            code=DiagnosticCode.CALENDAR_UNIT_DURATION,
            message=msg,
            hint="Use weeks, days, hours, minutes, seconds or milliseconds",
        )

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    @staticmethod
    def unknown_base_keyword(keyword: str) -> Diagnostic:
        """Grammar matched a base keyword the resolver does not know.

        Args:
            keyword: The matched keyword text

        Returns:
            Diagnostic for UNKNOWN_BASE_KEYWORD
        """
        msg = f"Matched base keyword '{keyword}' has no resolution rule"
        return Diagnostic(
            code=DiagnosticCode.UNKNOWN_BASE_KEYWORD,
            message=msg,
            hint="This is a bug: the grammar and the base-time resolver disagree",
        )
