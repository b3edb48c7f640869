"""Tests for keyword settings and parser configuration."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from reltime import (
    BaseTimeKeywords,
    BaseTimeKind,
    ParserConfiguration,
    RelativityConfigurationError,
    TimeOffsetKeywords,
    TimeOffsetUnit,
)
from reltime.constants import MAX_KEYWORD_LENGTH, NOW_ALIAS


class TestBaseTimeKeywords:
    """Test BaseTimeKeywords construction and lookups."""

    def test_defaults(self) -> None:
        """Default keywords cover every base-time kind."""
        keywords = BaseTimeKeywords()
        assert keywords.get_keyword(BaseTimeKind.NOW) == "NOW"
        assert keywords.get_keyword(BaseTimeKind.WEEK) == "WEEK"
        assert keywords.get_keyword(BaseTimeKind.YEAR) == "YEAR"

    def test_blank_values_become_absent(self) -> None:
        """Empty and whitespace-only keywords disable the slot."""
        keywords = BaseTimeKeywords(now="", current_day="   ")
        assert keywords.now is None
        assert keywords.current_day is None

    def test_values_are_trimmed(self) -> None:
        """Surrounding whitespace is removed."""
        assert BaseTimeKeywords(current_day="  TAG ").current_day == "TAG"

    def test_alias_always_present(self) -> None:
        """The "*" alias maps to now even when now is disabled."""
        keywords = BaseTimeKeywords(now=None)
        assert keywords.now_alias == NOW_ALIAS
        assert keywords.keyword_map()[NOW_ALIAS] is BaseTimeKind.NOW
        assert NOW_ALIAS in keywords.keywords()

    def test_keyword_map_is_case_folded(self) -> None:
        """Lookup keys are case-folded."""
        mapping = BaseTimeKeywords(current_month="Monat").keyword_map()
        assert mapping["monat"] is BaseTimeKind.MONTH

    def test_too_long_keyword_rejected(self) -> None:
        """Keywords longer than the limit fail construction."""
        with pytest.raises(RelativityConfigurationError):
            BaseTimeKeywords(now="X" * (MAX_KEYWORD_LENGTH + 1))

    def test_keyword_at_limit_accepted(self) -> None:
        """A keyword exactly at the limit is accepted."""
        keyword = "X" * MAX_KEYWORD_LENGTH
        assert BaseTimeKeywords(now=keyword).now == keyword

    def test_non_string_rejected(self) -> None:
        """Non-string keywords are a configuration error."""
        with pytest.raises(RelativityConfigurationError):
            BaseTimeKeywords(now=42)  # type: ignore[arg-type]

    def test_immutable(self) -> None:
        """Keyword sets cannot be mutated."""
        keywords = BaseTimeKeywords()
        with pytest.raises(AttributeError):
            keywords.now = "LATER"  # type: ignore[misc]


class TestTimeOffsetKeywords:
    """Test TimeOffsetKeywords construction and the duration-unit invariant."""

    def test_defaults(self) -> None:
        """Default symbols for every unit."""
        keywords = TimeOffsetKeywords()
        assert keywords.get_symbol(TimeOffsetUnit.MILLISECONDS) == "MS"
        assert keywords.get_symbol(TimeOffsetUnit.MONTHS) == "MO"
        assert keywords.enabled_units()[0] is TimeOffsetUnit.YEARS

    def test_all_duration_units_empty_fails(self) -> None:
        """Months and years alone cannot form a configuration."""
        with pytest.raises(RelativityConfigurationError):
            TimeOffsetKeywords(
                milliseconds=None,
                seconds=None,
                minutes=" ",
                hours="",
                days=None,
                weeks=None,
            )

    def test_single_duration_unit_succeeds(self) -> None:
        """One duration-eligible unit is enough."""
        keywords = TimeOffsetKeywords(
            milliseconds=None,
            seconds="S",
            minutes=None,
            hours=None,
            days=None,
            weeks=None,
            months=None,
            years=None,
        )
        assert keywords.duration_units() == (TimeOffsetUnit.SECONDS,)
        assert keywords.get_symbol(TimeOffsetUnit.HOURS) is None

    def test_duration_units_are_largest_first(self) -> None:
        """duration_units() follows weeks..milliseconds order."""
        assert TimeOffsetKeywords().duration_units() == (
            TimeOffsetUnit.WEEKS,
            TimeOffsetUnit.DAYS,
            TimeOffsetUnit.HOURS,
            TimeOffsetUnit.MINUTES,
            TimeOffsetUnit.SECONDS,
            TimeOffsetUnit.MILLISECONDS,
        )


class TestCanonicalKey:
    """Test the canonical serialization used as a cache key."""

    def test_equal_settings_equal_keys(self) -> None:
        """Equivalent settings serialize identically."""
        assert BaseTimeKeywords(now=" NOW ").canonical_key() == BaseTimeKeywords().canonical_key()

    def test_absent_differs_from_any_value(self) -> None:
        """An absent slot never serializes like a present one."""
        absent = TimeOffsetKeywords(years=None).canonical_key()
        for candidate in ("null", "None", "", "Y"):
            if candidate.strip():
                assert TimeOffsetKeywords(years=candidate).canonical_key() != absent

    def test_key_lists_every_slot(self) -> None:
        """Absent slots are still emitted."""
        key = BaseTimeKeywords(current_week=None).canonical_key()
        assert '"week":null' in key

    @given(
        st.text(min_size=1, max_size=MAX_KEYWORD_LENGTH).filter(lambda s: s.strip()),
        st.text(min_size=1, max_size=MAX_KEYWORD_LENGTH).filter(lambda s: s.strip()),
    )
    def test_key_distinguishes_values(self, first: str, second: str) -> None:
        """Different trimmed keywords give different keys."""
        left = TimeOffsetKeywords(hours=first)
        right = TimeOffsetKeywords(hours=second)
        assert (left.canonical_key() == right.canonical_key()) == (
            first.strip() == second.strip()
        )


class TestParserConfiguration:
    """Test ParserConfiguration."""

    def test_locale_is_canonicalized(self) -> None:
        """BCP 47 spelling is converted to Babel's canonical form."""
        assert ParserConfiguration(locale="en-gb").locale == "en_GB"

    def test_invariant_locale(self) -> None:
        """Empty locale is the invariant locale."""
        assert ParserConfiguration().locale == ""

    def test_unknown_locale_rejected(self) -> None:
        """Unresolvable locale names fail at configuration time."""
        with pytest.raises(RelativityConfigurationError):
            ParserConfiguration(locale="xx_NOT_A_LOCALE")

    def test_with_locale_keeps_keywords(self) -> None:
        """with_locale() substitutes only the locale."""
        original = ParserConfiguration(locale="en", base_time=BaseTimeKeywords(now="JETZT"))
        clone = original.with_locale("de-AT")
        assert clone.locale == "de_AT"
        assert clone.base_time is original.base_time
        assert original.locale == "en"
