"""Tests for ISO week coordinate conversion."""

from datetime import date, timedelta

import pytest

from iso_calendar import isoweek
from iso_calendar.isoweek import (
    gregorian_triple,
    has_leap_week,
    iso_month_of_week,
    iso_triple,
    iso_week_of,
    monday_of_iso_week,
    weeks_in_year,
    weeks_of_iso_month,
)


@pytest.mark.parametrize(
    "d, expected",
    [
        (date(2024, 1, 1), 1),
        (date(2021, 1, 1), 53),
        (date(2020, 12, 31), 53),
        (date(2019, 12, 30), 1),
        (date(2024, 12, 30), 1),
        (date(2023, 1, 1), 52),
        (date(2026, 10, 18), 42),
    ],
)
def test_iso_week_of_known_dates(d, expected):
    assert iso_week_of(d) == expected


def test_iso_week_of_agrees_with_isocalendar():
    d = date(2018, 12, 1)
    while d < date(2022, 2, 1):
        assert iso_week_of(d) == d.isocalendar().week, d
        d += timedelta(days=1)


@pytest.mark.parametrize(
    "year, week, expected",
    [
        (2020, 1, date(2019, 12, 30)),
        (2021, 1, date(2021, 1, 4)),
        (2024, 1, date(2024, 1, 1)),
        (2026, 1, date(2025, 12, 29)),
        (2020, 53, date(2020, 12, 28)),
        (2024, 10, date(2024, 3, 4)),
    ],
)
def test_monday_of_iso_week(year, week, expected):
    assert monday_of_iso_week(year, week) == expected


def test_monday_round_trip_for_every_valid_week():
    for year in range(1990, 2041):
        for week in range(1, weeks_in_year(year) + 1):
            monday = monday_of_iso_week(year, week)
            assert monday.weekday() == 0
            assert iso_week_of(monday) == week, (year, week)
            assert monday == date.fromisocalendar(year, week, 1)


@pytest.mark.parametrize("year", [2004, 2009, 2015, 2020, 2026])
def test_has_leap_week(year):
    assert has_leap_week(year)
    assert weeks_in_year(year) == 53


@pytest.mark.parametrize("year", [2019, 2021, 2022, 2023, 2024, 2025])
def test_has_no_leap_week(year):
    assert not has_leap_week(year)
    assert weeks_in_year(year) == 52


@pytest.mark.parametrize(
    "week, month",
    [
        (1, 1),
        (4, 1),
        (5, 2),
        (8, 2),
        (9, 3),
        (13, 3),
        (14, 4),
        (26, 6),
        (27, 7),
        (39, 9),
        (40, 10),
        (44, 11),
        (48, 12),
        (52, 12),
        (53, 12),
    ],
)
def test_iso_month_of_week(week, month):
    assert iso_month_of_week(week) == month


def test_weeks_of_iso_month_partition():
    assert weeks_of_iso_month(2024, 1) == [1, 2, 3, 4]
    assert weeks_of_iso_month(2024, 3) == [9, 10, 11, 12, 13]
    assert weeks_of_iso_month(2024, 4) == [14, 15, 16, 17]
    assert weeks_of_iso_month(2021, 12) == [48, 49, 50, 51, 52]
    assert weeks_of_iso_month(2020, 12) == [48, 49, 50, 51, 52, 53]

    for year in (2020, 2021):
        weeks = [w for m in range(1, 13) for w in weeks_of_iso_month(year, m)]
        assert weeks == list(range(1, weeks_in_year(year) + 1))
        assert all(iso_month_of_week(w) == m for m in range(1, 13) for w in weeks_of_iso_month(year, m))


def test_iso_triple_near_year_boundaries():
    assert iso_triple(2021, 1, 1) == (2020, 53, 4)
    assert iso_triple(2024, 12, 30) == (2025, 1, 0)
    assert iso_triple(2027, 1, 3) == (2026, 53, 6)

    d = date(2019, 12, 1)
    while d < date(2028, 1, 31):
        iso = d.isocalendar()
        assert iso_triple(d.year, d.month, d.day) == (iso.year, iso.week, iso.weekday - 1), d
        d += timedelta(days=1)


def test_gregorian_triple_inverts_iso_triple():
    assert gregorian_triple(2025, 1, 0) == (2024, 12, 30)
    assert gregorian_triple(2020, 53, 4) == (2021, 1, 1)
    for year in (2019, 2020, 2026):
        for week in range(1, weeks_in_year(year) + 1):
            for offset in range(7):
                assert iso_triple(*gregorian_triple(year, week, offset)) == (year, week, offset)


def test_ordinal_matches_date_toordinal():
    for d in (date(1, 1, 1), date(1600, 2, 29), date(1900, 3, 1), date(2000, 12, 31), date(9999, 12, 31)):
        assert isoweek.ordinal(d.year, d.month, d.day) == d.toordinal()
        assert isoweek.from_ordinal(d.toordinal()) == (d.year, d.month, d.day)


@pytest.mark.parametrize("start", [date(1599, 12, 1), date(1899, 12, 1), date(1999, 12, 1), date(2023, 12, 1)])
def test_from_ordinal_across_century_and_leap_boundaries(start):
    for n in range(start.toordinal(), start.toordinal() + 800):
        d = date.fromordinal(n)
        assert isoweek.from_ordinal(n) == (d.year, d.month, d.day)
        assert isoweek.weekday(n) == d.weekday()


def test_ordinal_rolls_day_overflow_into_next_month():
    assert isoweek.ordinal(2025, 2, 29) == isoweek.ordinal(2025, 3, 1)
    assert isoweek.ordinal(2024, 2, 30) == isoweek.ordinal(2024, 3, 1)
    assert isoweek.ordinal(2024, 4, 31) == isoweek.ordinal(2024, 5, 1)


def test_arithmetic_beyond_datetime_range():
    assert isoweek.from_ordinal(isoweek.ordinal(12024, 6, 15)) == (12024, 6, 15)
    assert iso_triple(*gregorian_triple(12024, 20, 3)) == (12024, 20, 3)
