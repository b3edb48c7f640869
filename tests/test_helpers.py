"""Tests for the module-level conversion shortcuts."""

from datetime import UTC, datetime, timedelta

import pytest

from reltime import ConversionEngine, RelativityParseError, TimeOffsetUnit, use_engine
from reltime.helpers import (
    convert_to_duration,
    convert_to_timestamp,
    format_duration,
    get_current_time,
    is_valid_duration,
    is_valid_timestamp,
    try_convert_to_duration,
    try_convert_to_timestamp,
)

ORIGIN = datetime(2024, 1, 31, 10, tzinfo=UTC)


class TestCurrentEngineShortcuts:
    """Shortcuts run against the current engine by default."""

    def test_timestamps(self) -> None:
        assert convert_to_timestamp("DAY", ORIGIN) == datetime(2024, 1, 31, tzinfo=UTC)
        assert try_convert_to_timestamp("soon", ORIGIN) == (False, None)
        with pytest.raises(RelativityParseError):
            convert_to_timestamp("soon")

    def test_durations(self) -> None:
        assert convert_to_duration("1.5H") == timedelta(minutes=90)
        assert try_convert_to_duration("1,5H") == (False, None)

    def test_follows_published_engine(self, german_engine: ConversionEngine) -> None:
        with use_engine(german_engine):
            assert convert_to_duration("1,5H") == timedelta(minutes=90)
            assert format_duration(timedelta(minutes=90), TimeOffsetUnit.HOURS) == "1,5H"

    def test_explicit_engine(self, german_engine: ConversionEngine) -> None:
        assert try_convert_to_duration("1,5H", engine=german_engine) == (
            True,
            timedelta(minutes=90),
        )
        assert format_duration(timedelta(hours=26), engine=german_engine) == "1D 2H"


class TestValidation:
    """is_valid_* helpers."""

    def test_valid(self) -> None:
        assert is_valid_timestamp("WEEK+2D")
        assert is_valid_duration("01:30:00")

    def test_invalid(self) -> None:
        assert not is_valid_timestamp("soon")
        assert not is_valid_duration("1X")

    def test_none_is_invalid(self) -> None:
        assert not is_valid_timestamp(None)
        assert not is_valid_duration(None)


class TestCurrentTime:
    """get_current_time()."""

    def test_default_zone_is_current_engines(self) -> None:
        assert get_current_time().utcoffset() == timedelta(0)

    def test_named_zone(self) -> None:
        now = get_current_time("Asia/Tokyo")
        assert now.utcoffset() == timedelta(hours=9)
