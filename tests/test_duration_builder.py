"""Tests for DurationBuilder."""

from datetime import UTC, timedelta
from decimal import Decimal

import pytest

from reltime import (
    ConversionEngine,
    DurationBuilder,
    ParserConfiguration,
    TimeOffsetKeywords,
    UnitNotEnabledError,
    use_engine,
)


class TestBuild:
    """Rendering collected components."""

    def test_components_in_unit_order(self, invariant_utc: ConversionEngine) -> None:
        builder = DurationBuilder(invariant_utc).milliseconds(6).days(2).weeks(1)
        assert builder.build() == "1W 2D 6MS"

    def test_every_unit(self, invariant_utc: ConversionEngine) -> None:
        text = (
            DurationBuilder(invariant_utc)
            .weeks(1)
            .days(2)
            .hours(3)
            .minutes(4)
            .seconds(5)
            .milliseconds(6)
            .build()
        )
        assert text == "1W 2D 3H 4M 5S 6MS"
        assert invariant_utc.convert_to_duration(text) == timedelta(
            weeks=1, days=2, hours=3, minutes=4, seconds=5, milliseconds=6
        )

    def test_values_not_normalized(self, invariant_utc: ConversionEngine) -> None:
        assert DurationBuilder(invariant_utc).minutes(90).build() == "90M"

    def test_fractional_values(self, invariant_utc: ConversionEngine) -> None:
        assert DurationBuilder(invariant_utc).hours(1.5).build() == "1.5H"
        assert DurationBuilder(invariant_utc).seconds(Decimal("0.25")).build() == "0.25S"

    def test_empty_and_zero(self, invariant_utc: ConversionEngine) -> None:
        assert DurationBuilder(invariant_utc).build() == "0MS"
        assert DurationBuilder(invariant_utc).days(0).build() == "0MS"

    def test_setting_again_replaces(self, invariant_utc: ConversionEngine) -> None:
        assert DurationBuilder(invariant_utc).hours(1).hours(2).build() == "2H"

    def test_str(self, invariant_utc: ConversionEngine) -> None:
        assert str(DurationBuilder(invariant_utc).days(3)) == "3D"

    def test_to_timedelta(self, invariant_utc: ConversionEngine) -> None:
        builder = DurationBuilder(invariant_utc).days(1).hours(1.5)
        assert builder.to_timedelta() == timedelta(days=1, minutes=90)

    def test_locale_separator(self, german_engine: ConversionEngine) -> None:
        assert DurationBuilder(german_engine).hours(1.5).build() == "1,5H"

    def test_current_engine_used_by_default(self, german_engine: ConversionEngine) -> None:
        assert DurationBuilder().hours(1.5).build() == "1.5H"
        with use_engine(german_engine):
            assert DurationBuilder().hours(1.5).build() == "1,5H"


class TestValidation:
    """Setter argument checks."""

    def test_negative_rejected(self, invariant_utc: ConversionEngine) -> None:
        with pytest.raises(ValueError, match="hours"):
            DurationBuilder(invariant_utc).hours(-1)

    @pytest.mark.parametrize("value", [float("nan"), float("inf")])
    def test_non_finite_rejected(self, invariant_utc: ConversionEngine, value: float) -> None:
        with pytest.raises(ValueError, match="finite"):
            DurationBuilder(invariant_utc).seconds(value)

    @pytest.mark.parametrize("value", [True, "1", None])
    def test_non_number_rejected(self, invariant_utc: ConversionEngine, value: object) -> None:
        with pytest.raises(TypeError):
            DurationBuilder(invariant_utc).days(value)  # type: ignore[arg-type]

    def test_disabled_unit(self) -> None:
        engine = ConversionEngine(
            ParserConfiguration(time_offset=TimeOffsetKeywords(weeks=None)), UTC
        )
        with pytest.raises(UnitNotEnabledError):
            DurationBuilder(engine).weeks(1)
        assert DurationBuilder(engine).days(8).build() == "8D"
