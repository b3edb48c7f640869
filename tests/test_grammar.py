"""Tests for the grammar compiler and its cache."""

import logging

import pytest

from reltime import BaseTimeKeywords, TimeOffsetKeywords, TimeOffsetUnit
from reltime.grammar import (
    CompiledGrammar,
    GrammarKind,
    clear_grammar_cache,
    compile_grammars,
    grammar_cache_size,
)


@pytest.fixture
def grammars():
    return compile_grammars(BaseTimeKeywords(), TimeOffsetKeywords(), ".")


class TestDurationGrammar:
    """Test composite duration matching."""

    def test_single_component(self, grammars) -> None:
        """A single unit matches and captures its number."""
        match = grammars.duration.match("500ms")
        assert match is not None
        assert grammars.duration.components(match) == {TimeOffsetUnit.MILLISECONDS: "500"}

    def test_composite(self, grammars) -> None:
        """Several units in canonical order match together."""
        match = grammars.duration.match("1W 2D 3H 4M 5S 6MS")
        assert match is not None
        components = grammars.duration.components(match)
        assert components[TimeOffsetUnit.WEEKS] == "1"
        assert components[TimeOffsetUnit.MILLISECONDS] == "6"
        assert len(components) == 6

    def test_whitespace_optional(self, grammars) -> None:
        """Components may be adjacent or padded."""
        assert grammars.duration.match("1D2H") is not None
        assert grammars.duration.match("  1 D   2 H  ") is not None

    def test_fraction_uses_separator(self, grammars) -> None:
        """Fractions use the compiled decimal separator."""
        assert grammars.duration.match("1.5H") is not None
        assert grammars.duration.match("1,5H") is None

    def test_case_insensitive(self, grammars) -> None:
        """Unit symbols match in any case."""
        assert grammars.duration.match("1w 2d") is not None

    def test_empty_and_bare_number_fail(self, grammars) -> None:
        """At least one unit component is required."""
        assert grammars.duration.match("") is None
        assert grammars.duration.match("5") is None

    def test_out_of_order_fails(self, grammars) -> None:
        """Components must follow weeks..milliseconds order."""
        assert grammars.duration.match("2H 1D") is None

    def test_calendar_units_excluded(self, grammars) -> None:
        """Months and years are not duration components."""
        assert grammars.duration.match("1MO") is None
        assert grammars.duration.match("1Y") is None

    def test_kind(self, grammars) -> None:
        assert grammars.duration.kind is GrammarKind.DURATION
        assert grammars.relative.kind is GrammarKind.RELATIVE


class TestRelativeGrammar:
    """Test relative timestamp matching."""

    def test_base_only(self, grammars) -> None:
        """A bare base keyword matches without an operator."""
        match = grammars.relative.match("DAY")
        assert match is not None
        assert match.group("base") == "DAY"
        assert match.group("operator") is None

    def test_alias(self, grammars) -> None:
        """The "*" alias is always accepted."""
        match = grammars.relative.match("*-1H")
        assert match is not None
        assert match.group("base") == "*"

    def test_offset_with_calendar_units(self, grammars) -> None:
        """Years and months combine with fixed-length units."""
        match = grammars.relative.match("MONTH+1Y 2MO 3D")
        assert match is not None
        assert grammars.relative.components(match) == {
            TimeOffsetUnit.YEARS: "1",
            TimeOffsetUnit.MONTHS: "2",
            TimeOffsetUnit.DAYS: "3",
        }

    def test_months_whole_numbers_only(self, grammars) -> None:
        """Fractional months and years do not match."""
        assert grammars.relative.match("NOW+1.5MO") is None
        assert grammars.relative.match("NOW+1.5Y") is None

    def test_fractional_fixed_units(self, grammars) -> None:
        """Fixed-length units accept fractions."""
        assert grammars.relative.match("NOW-1.5H") is not None

    def test_operator_requires_component(self, grammars) -> None:
        """An operator with nothing after it fails."""
        assert grammars.relative.match("DAY-") is None
        assert grammars.relative.match("DAY-5") is None

    def test_operator_mandatory(self, grammars) -> None:
        """An offset without an operator fails."""
        assert grammars.relative.match("DAY 1W") is None

    def test_minutes_and_months_disambiguated(self, grammars) -> None:
        """"M" and "MO" and "MS" resolve to the right units."""
        minutes = grammars.relative.match("NOW-1M")
        months = grammars.relative.match("NOW-1MO")
        millis = grammars.relative.match("NOW-1MS")
        assert grammars.relative.components(minutes) == {TimeOffsetUnit.MINUTES: "1"}
        assert grammars.relative.components(months) == {TimeOffsetUnit.MONTHS: "1"}
        assert grammars.relative.components(millis) == {TimeOffsetUnit.MILLISECONDS: "1"}

    def test_unknown_keyword_fails(self, grammars) -> None:
        assert grammars.relative.match("YESTERDAY") is None


class TestKeywordHandling:
    """Test disabled units and escaping of configured keywords."""

    def test_disabled_unit_never_matches(self) -> None:
        """A unit with no symbol is excluded from both grammars."""
        pair = compile_grammars(BaseTimeKeywords(), TimeOffsetKeywords(hours=None), ".")
        assert pair.duration.match("1H") is None
        assert pair.relative.match("NOW+1H") is None
        assert TimeOffsetUnit.HOURS not in pair.duration.units

    def test_disabled_base_keyword_never_matches(self) -> None:
        pair = compile_grammars(BaseTimeKeywords(current_week=None), TimeOffsetKeywords(), ".")
        assert pair.relative.match("WEEK") is None
        assert pair.relative.match("DAY") is not None

    def test_special_characters_escaped(self) -> None:
        """Keywords holding pattern metacharacters match literally."""
        pair = compile_grammars(
            BaseTimeKeywords(current_day="D.A(Y)"),
            TimeOffsetKeywords(hours="h+"),
            ".",
        )
        assert pair.relative.match("D.A(Y)-2h+") is not None
        assert pair.relative.match("DxAY-2h+") is None
        assert pair.duration.match("2h+") is not None

    def test_longest_keyword_wins(self) -> None:
        """Keywords sharing a prefix are tried longest first."""
        pair = compile_grammars(
            BaseTimeKeywords(current_month="MON", current_week="MONTAG"),
            TimeOffsetKeywords(),
            ".",
        )
        match = pair.relative.match("MONTAG")
        assert match is not None
        assert match.group("base") == "MONTAG"


class TestGrammarCache:
    """Test grammar caching."""

    def test_identical_configuration_shares_grammars(self) -> None:
        first = compile_grammars(BaseTimeKeywords(), TimeOffsetKeywords(), ".")
        second = compile_grammars(BaseTimeKeywords(), TimeOffsetKeywords(), ".")
        assert first is second

    def test_separator_is_part_of_key(self) -> None:
        dot = compile_grammars(BaseTimeKeywords(), TimeOffsetKeywords(), ".")
        comma = compile_grammars(BaseTimeKeywords(), TimeOffsetKeywords(), ",")
        assert dot is not comma
        assert comma.duration.match("1,5H") is not None

    def test_clear(self, caplog: pytest.LogCaptureFixture) -> None:
        """Clearing forces recompilation, which is logged at debug level."""
        compile_grammars(BaseTimeKeywords(), TimeOffsetKeywords(), ".")
        clear_grammar_cache()
        assert grammar_cache_size() == 0
        with caplog.at_level(logging.DEBUG, logger="reltime.grammar"):
            compile_grammars(BaseTimeKeywords(), TimeOffsetKeywords(), ".")
        assert grammar_cache_size() == 1
        assert "Compiling grammars" in caplog.text


class _TimingOutPattern:
    pattern = "(?:slow)"

    def fullmatch(self, text: str, timeout: float | None = None) -> None:
        raise TimeoutError("regex timed out")


class TestMatchTimeout:
    """Test the bounded-time matching path."""

    def test_timeout_reported_as_no_match(self, caplog: pytest.LogCaptureFixture) -> None:
        """A TimeoutError from the regex engine becomes None and a warning."""
        grammar = CompiledGrammar(GrammarKind.DURATION, _TimingOutPattern(), ())  # type: ignore[arg-type]
        with caplog.at_level(logging.WARNING, logger="reltime.grammar"):
            assert grammar.match("1D") is None
        assert "timed out" in caplog.text
