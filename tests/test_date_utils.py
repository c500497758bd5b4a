from __future__ import annotations

from datetime import date, timedelta

import pytest

from trainer_calendar.services.date_utils import (
    calendar_grid,
    date_range,
    days_in_month,
    format_date,
    get_day_of_week,
    is_date_editable,
    is_date_in_future,
    is_same_day,
    is_slot_editable,
    is_today,
    month_name,
    parse_date,
)


def test_format_date_zero_pads():
    assert format_date(date(2026, 3, 5)) == "2026-03-05"
    assert format_date(date(987, 1, 1)) == "0987-01-01"


@pytest.mark.parametrize("d", [date(2026, 1, 1), date(2024, 2, 29), date(2026, 12, 31), date(1999, 7, 4)])
def test_parse_date_inverts_format_date(d):
    assert parse_date(format_date(d)) == d


def test_parse_date_ignores_time_part():
    assert parse_date("2026-03-10T15:30:00.000Z") == date(2026, 3, 10)


@pytest.mark.parametrize("value", ["", "not-a-date", "2026-13-01", "2026-02-30", "10/03/2026"])
def test_parse_date_rejects_malformed(value):
    with pytest.raises(ValueError):
        parse_date(value)


def test_is_same_day_and_is_today():
    assert is_same_day(date(2026, 3, 1), date(2026, 3, 1))
    assert not is_same_day(date(2026, 3, 1), date(2026, 3, 2))
    assert is_today(date(2026, 3, 1), today=date(2026, 3, 1))
    assert not is_today(date(2026, 3, 2), today=date(2026, 3, 1))


@pytest.mark.parametrize(
    "year,month,expected",
    [(2026, 1, 31), (2026, 2, 28), (2024, 2, 29), (1900, 2, 28), (2000, 2, 29), (2026, 4, 30), (2026, 12, 31)],
)
def test_days_in_month_length_and_order(year, month, expected):
    days = days_in_month(year, month)
    assert len(days) == expected
    assert days[0] == date(year, month, 1)
    assert all(b - a == timedelta(days=1) for a, b in zip(days, days[1:]))
    assert all(d.month == month for d in days)


def test_calendar_grid_is_current_month_only():
    assert calendar_grid(2026, 3) == days_in_month(2026, 3)


def test_date_range_inclusive():
    assert date_range(date(2026, 3, 30), date(2026, 4, 2)) == [
        date(2026, 3, 30),
        date(2026, 3, 31),
        date(2026, 4, 1),
        date(2026, 4, 2),
    ]
    assert date_range(date(2026, 3, 1), date(2026, 3, 1)) == [date(2026, 3, 1)]


def test_date_range_reversed_is_empty():
    assert date_range(date(2026, 3, 2), date(2026, 3, 1)) == []


def test_day_of_week_starts_on_sunday():
    # 2026-03-01 is a Sunday
    assert get_day_of_week(date(2026, 3, 1)) == 0
    assert get_day_of_week(date(2026, 3, 2)) == 1
    assert get_day_of_week(date(2026, 3, 7)) == 6


def test_editability():
    today = date(2026, 3, 10)
    assert is_date_editable(today, today)
    assert not is_date_editable(date(2026, 3, 9), today)
    assert not is_date_in_future(today, today)
    assert is_date_in_future(date(2026, 3, 11), today)
    assert not is_slot_editable(date(2026, 3, 11), True, today)
    assert is_slot_editable(date(2026, 3, 11), False, today)


def test_month_name():
    assert month_name(1) == "January"
    assert month_name(12) == "December"
