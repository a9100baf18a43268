"""Tests for time utilities."""

from datetime import datetime, timedelta, timezone

import pytest

from accession_report.utils.time import (
    HISTORICAL_EPOCH,
    local_now,
    parse_report_timestamp,
    to_local_naive,
    to_utc_z,
    utc_now_z,
)


def test_utc_now_z_always_ends_with_z():
    """Test that utc_now_z() always ends with Z and never with +00:00Z."""
    result = utc_now_z()
    assert result.endswith('Z'), f"Expected result to end with 'Z', got: {result}"
    assert '+00:00Z' not in result


def test_to_utc_z_raises_on_naive_datetime():
    """Test that to_utc_z() raises ValueError for naive datetime."""
    with pytest.raises(ValueError, match="Naive datetime not allowed"):
        to_utc_z(datetime.now())


def test_to_utc_z_converts_non_utc_timezone():
    """Test that to_utc_z() converts non-UTC timezone to UTC."""
    est = timezone(timedelta(hours=-5))
    result = to_utc_z(datetime(2025, 12, 23, 12, 0, 0, tzinfo=est))
    assert result == '2025-12-23T17:00:00Z'


def test_historical_epoch():
    """Test the lower bound used when no start date is given."""
    assert HISTORICAL_EPOCH == datetime(1800, 1, 1, 0, 0, 0)


def test_local_now_is_naive_whole_seconds():
    """Test that the default upper bound is local, naive and second-aligned."""
    now = local_now()
    assert now.tzinfo is None
    assert now.microsecond == 0


def test_parse_date_only_is_midnight():
    """Test that a bare date parses to midnight."""
    assert parse_report_timestamp("1999-07-04") == datetime(1999, 7, 4, 0, 0, 0)


def test_parse_drops_microseconds():
    """Test that parsed timestamps are truncated to whole seconds."""
    assert parse_report_timestamp("2020-01-01T10:11:12.987654") == datetime(2020, 1, 1, 10, 11, 12)


@pytest.mark.parametrize("value", ["", "garbage", "2020-02-31", "13/45/2020"])
def test_parse_rejects_unrecognized_text(value):
    """Test that unparseable text raises ValueError."""
    with pytest.raises(ValueError, match="Unrecognized date/time"):
        parse_report_timestamp(value)


def test_to_local_naive_keeps_naive_wall_clock():
    """Test that naive values are only truncated to whole seconds."""
    assert to_local_naive(datetime(2020, 1, 1, 10, 11, 12, 500)) == datetime(2020, 1, 1, 10, 11, 12)


def test_to_local_naive_converts_aware_values():
    """Test that aware values become naive local time for the same instant."""
    aware = datetime(2020, 6, 1, 12, 0, 0, 750, tzinfo=timezone.utc)
    result = to_local_naive(aware)

    assert result.tzinfo is None
    assert result.microsecond == 0
    assert result.astimezone() == aware.replace(microsecond=0)
