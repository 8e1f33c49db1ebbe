import pytest

from src.calendar_utils import (
    expand_date_ranges,
    first_weekday_offset,
    is_leap_year,
    iso_key,
    parse_iso,
    week_count,
)


@pytest.mark.parametrize("year,leap", [(2024, True), (2025, False), (2000, True), (1900, False), (2100, False)])
def test_is_leap_year(year, leap):
    assert is_leap_year(year) is leap


def test_first_weekday_offset_reference_dates():
    assert first_weekday_offset(2026, 1) == 3   # Thursday
    assert first_weekday_offset(2026, 3) == 6   # Sunday
    assert first_weekday_offset(2024, 1) == 0   # Monday


def test_week_count():
    assert week_count(2026, 1) == 5
    assert week_count(2026, 3) == 6
    # February 2021 starts on a Monday and fits in exactly four rows
    assert week_count(2021, 2) == 4


def test_iso_key_zero_pads():
    assert iso_key(2026, 5, 3) == "2026-05-03"


def test_expand_date_ranges_inclusive_and_merged():
    dates = expand_date_ranges([("2026-05-30", "2026-06-02"), ("2026-06-01", "2026-06-03")])
    assert dates == frozenset(
        ["2026-05-30", "2026-05-31", "2026-06-01", "2026-06-02", "2026-06-03"]
    )


def test_expand_single_day_and_empty():
    assert expand_date_ranges([("2026-01-01", "2026-01-01")]) == frozenset(["2026-01-01"])
    assert expand_date_ranges([]) == frozenset()


def test_expand_crosses_year_end():
    dates = expand_date_ranges([("2025-12-30", "2026-01-02")])
    assert "2025-12-31" in dates and "2026-01-01" in dates
    assert len(dates) == 4


def test_expand_rejects_reversed_range():
    with pytest.raises(ValueError):
        expand_date_ranges([("2026-06-07", "2026-05-23")])


@pytest.mark.parametrize(
    "bad", ["2026-1-1", "2026-13-01", "", "not a date", "2026-W01-1", "20260101", "2026-001", "2026-01-01T00"]
)
def test_parse_iso_rejects_malformed(bad):
    with pytest.raises(ValueError):
        parse_iso(bad)


def test_expand_rejects_week_dates():
    with pytest.raises(ValueError):
        expand_date_ranges([("2026-W01-1", "2026-01-04")])


def test_parse_iso_accepts_padded_dates():
    assert parse_iso(" 2026-05-31 ").isoformat() == "2026-05-31"
