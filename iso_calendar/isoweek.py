"""ISO-8601 week coordinates and their mapping to month/day dates.

Week 1 of an ISO year is the Monday..Sunday week containing the year's first
Thursday. Dates are handled as proleptic Gregorian day numbers that match
``datetime.date.toordinal()`` (0001-01-01 is day 1), so the arithmetic is
not limited to ``datetime``'s year range and an overflowing day-of-month
(Feb 30) simply rolls into the next month.
"""

from __future__ import annotations

from datetime import date

THURSDAY = 3

WEEKS_PER_QUARTER = 13

# Cumulative day counts at the start of each month of a common year.
_DAYS_BEFORE_MONTH = (0, 31, 59, 90, 120, 151, 181, 212, 243, 273, 304, 334)


def is_leap_year(year: int) -> bool:
    """Gregorian leap-year rule."""
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_month(year: int, month: int) -> int:
    """Length of a Gregorian month."""
    if month == 2:
        return 29 if is_leap_year(year) else 28
    if month in (4, 6, 9, 11):
        return 30
    return 31


def _days_before_year(year: int) -> int:
    y = year - 1
    return y * 365 + y // 4 - y // 100 + y // 400


def ordinal(year: int, month: int, day: int) -> int:
    """Day number of a Gregorian date, compatible with ``date.toordinal()``.

    ``month`` must be 1..12; ``day`` is not checked against the month length
    and rolls forward (``ordinal(2025, 2, 29) == ordinal(2025, 3, 1)``).
    """
    days = _days_before_year(year) + _DAYS_BEFORE_MONTH[month - 1]
    if month > 2 and is_leap_year(year):
        days += 1
    return days + day


def from_ordinal(n: int) -> tuple[int, int, int]:
    """Inverse of :func:`ordinal` for calendar-valid dates."""
    # 400-year cycles have 146097 days; work from a zero-based day index.
    n0 = n - 1
    n400, n0 = divmod(n0, 146097)
    n100, n0 = divmod(n0, 36524)
    n4, n0 = divmod(n0, 1461)
    n1, n0 = divmod(n0, 365)
    year = n400 * 400 + n100 * 100 + n4 * 4 + n1 + 1
    if n1 == 4 or n100 == 4:
        # Last day of a leap cycle: Dec 31 of the previous year.
        return year - 1, 12, 31

    month = 1
    while month < 12:
        next_start = _DAYS_BEFORE_MONTH[month] + (1 if month >= 2 and is_leap_year(year) else 0)
        if n0 < next_start:
            break
        month += 1
    start = _DAYS_BEFORE_MONTH[month - 1] + (1 if month > 2 and is_leap_year(year) else 0)
    return year, month, n0 - start + 1


def weekday(n: int) -> int:
    """Day of week of a day number, Monday = 0 ... Sunday = 6."""
    return (n - 1) % 7


def _first_thursday(year: int) -> int:
    jan1 = ordinal(year, 1, 1)
    return jan1 + (THURSDAY - weekday(jan1)) % 7


def _iso_year_week(n: int) -> tuple[int, int]:
    thursday = n - weekday(n) + THURSDAY
    year = from_ordinal(thursday)[0]
    return year, 1 + (thursday - _first_thursday(year)) // 7


def _monday(year: int, week: int) -> int:
    simple = ordinal(year, 1, 1) + (week - 1) * 7
    dow = weekday(simple)
    if dow <= THURSDAY:
        return simple - dow
    return simple + 7 - dow


def iso_week_of(d: date) -> int:
    """Return the ISO week number of a Gregorian date."""
    return _iso_year_week(d.toordinal())[1]


def monday_of_iso_week(year: int, week: int) -> date:
    """Return the Monday that starts ISO week ``week`` of ``year``."""
    return date.fromordinal(_monday(year, week))


def has_leap_week(year: int) -> bool:
    """True iff ``year`` has an ISO week 53."""
    return _iso_year_week(ordinal(year, 12, 31)) == (year, 53)


def weeks_in_year(year: int) -> int:
    return 53 if has_leap_week(year) else 52


def iso_month_of_week(iso_week: int) -> int:
    """Map an ISO week to one of the 12 ISO months.

    Each quarter spans 13 weeks split 4/4/5; week 53 belongs to month 12.
    """
    quarter = min((iso_week - 1) // WEEKS_PER_QUARTER, 3)
    in_quarter = iso_week - 1 - quarter * WEEKS_PER_QUARTER
    if in_quarter < 4:
        return quarter * 3 + 1
    if in_quarter < 8:
        return quarter * 3 + 2
    return quarter * 3 + 3


def weeks_of_iso_month(year: int, iso_month: int) -> list[int]:
    """ISO weeks that make up ``iso_month`` of ``year``."""
    quarter, month_in_quarter = divmod(iso_month - 1, 3)
    first = quarter * WEEKS_PER_QUARTER + month_in_quarter * 4 + 1
    count = 5 if month_in_quarter == 2 else 4
    weeks = list(range(first, first + count))
    if iso_month == 12 and has_leap_week(year):
        weeks.append(53)
    return weeks


def iso_triple(year: int, month: int, day: int) -> tuple[int, int, int]:
    """Convert a month/day date to ``(iso_year, iso_week, day_offset)``.

    The ISO year is the year the week belongs to, which differs from the
    Gregorian year for days between Dec 29 and Jan 3.
    """
    n = ordinal(year, month, day)
    iso_year, week = _iso_year_week(n)
    return iso_year, week, weekday(n)


def gregorian_triple(year: int, iso_week: int, day_offset: int) -> tuple[int, int, int]:
    """Convert ISO coordinates to ``(year, month, day)``."""
    return from_ordinal(_monday(year, iso_week) + day_offset)
