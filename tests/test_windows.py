"""Tests for date window calculations."""

from __future__ import annotations

import time
from datetime import date, timedelta

import pytest

from lojista.errors import InvalidWindowSpec
from lojista.services.windows import (
    CalendarMonth,
    MonthToDate,
    SingleDay,
    TrailingDays,
    YearMonth,
    compute_window,
    date_range,
    parse_year_month,
)


def test_single_day_window_is_just_the_reference():
    window = compute_window(date(2024, 5, 17), SingleDay())

    assert window.start == window.end == date(2024, 5, 17)
    assert window.dates == (date(2024, 5, 17),)


def test_trailing_seven_days_across_new_year():
    window = compute_window(date(2024, 1, 1), TrailingDays(7))

    assert window.start == date(2023, 12, 26)
    assert window.end == date(2024, 1, 1)
    assert len(window.dates) == 7
    assert window.dates[0] == date(2023, 12, 26)
    assert window.dates[-1] == date(2024, 1, 1)


@pytest.mark.parametrize("days", [1, 2, 7, 30, 31, 365, 366])
def test_trailing_windows_are_contiguous_without_repeats(days):
    window = compute_window(date(2024, 3, 1), TrailingDays(days))

    assert len(window.dates) == days
    assert len(set(window.dates)) == days
    for earlier, later in zip(window.dates, window.dates[1:]):
        assert later - earlier == timedelta(days=1)
    assert window.dates[-1] == date(2024, 3, 1)


@pytest.mark.parametrize("days", [0, -1, -30])
def test_trailing_window_rejects_non_positive_lengths(days):
    with pytest.raises(InvalidWindowSpec):
        compute_window(date(2024, 3, 1), TrailingDays(days))


@pytest.mark.parametrize(
    ("year", "month", "length"),
    [
        (2024, 1, 31),
        (2024, 2, 29),
        (2023, 2, 28),
        (1900, 2, 28),
        (2000, 2, 29),
        (2024, 4, 30),
        (2024, 12, 31),
    ],
)
def test_calendar_month_covers_the_whole_month(year, month, length):
    window = compute_window(date(2030, 6, 15), CalendarMonth(YearMonth(year, month)))

    assert window.dates[0] == date(year, month, 1)
    assert window.dates[-1] == date(year, month, length)
    assert len(window.dates) == length


@pytest.mark.skipif(not hasattr(time, "tzset"), reason="time.tzset is POSIX-only")
@pytest.mark.parametrize("tz", ["America/Sao_Paulo", "Pacific/Honolulu", "Asia/Tokyo", "UTC"])
def test_month_window_does_not_shift_with_local_timezone(monkeypatch, tz):
    monkeypatch.setenv("TZ", tz)
    time.tzset()
    try:
        window = compute_window(date(2024, 3, 10), CalendarMonth.parse("2024-03"))
    finally:
        monkeypatch.undo()
        time.tzset()

    assert window.start == date(2024, 3, 1)
    assert window.end == date(2024, 3, 31)


def test_month_to_date_runs_from_the_first():
    window = compute_window(date(2024, 2, 10), MonthToDate())

    assert window.start == date(2024, 2, 1)
    assert window.end == date(2024, 2, 10)
    assert len(window) == 10


def test_parse_year_month_reads_integers():
    assert parse_year_month("2024-03") == YearMonth(2024, 3)
    assert parse_year_month(" 2024-3 ") == YearMonth(2024, 3)
    assert str(YearMonth(2024, 3)) == "2024-03"


@pytest.mark.parametrize("raw", ["2024", "2024-13", "2024-00", "24-03", "2024/03", "", "março", "2024-03-01"])
def test_parse_year_month_rejects_malformed(raw):
    with pytest.raises(InvalidWindowSpec):
        parse_year_month(raw)


def test_unknown_window_kind_is_rejected():
    with pytest.raises(InvalidWindowSpec):
        compute_window(date(2024, 1, 1), "weekly")  # type: ignore[arg-type]


def test_date_range_rejects_inverted_bounds():
    with pytest.raises(InvalidWindowSpec):
        date_range(date(2024, 1, 2), date(2024, 1, 1))


def test_window_membership():
    window = compute_window(date(2024, 1, 10), TrailingDays(3))

    assert date(2024, 1, 8) in window
    assert date(2024, 1, 7) not in window
    assert "2024-01-08" not in window
