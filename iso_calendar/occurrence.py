"""Decide whether an event occurs on a given day.

Each coordinate system has its own native evaluator that only understands
events anchored in that system. The ``*_any`` wrappers accept any event and
convert the queried day into the anchor's system before delegating, so a
calendar grid can ask the same question of every event regardless of how
it was stored.

All functions here are pure and never raise for valid events; an event with
the wrong anchor kind simply does not occur.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date

from . import isoweek
from .dates import DateKind, NormalDate
from .event import Event
from .recurrence import RecurrencePattern

NEXT_OCCURRENCE_HORIZON_YEARS = 10


def _every_n_years(pattern: RecurrencePattern, year_diff: int) -> bool:
    if pattern is RecurrencePattern.NONE:
        return year_diff == 0
    interval = pattern.years
    if interval is None:
        return False
    return year_diff >= 0 and year_diff % interval == 0


def is_calendar_date(year: int, month: int, day: int) -> bool:
    """True if the month/day triple names a day that exists."""
    return 1 <= month <= 12 and 1 <= day <= isoweek.days_in_month(year, month)


def occurs_on_iso_date(event: Event, year: int, iso_week: int, day_offset: int) -> bool:
    """Evaluate an ISO-anchored event on an ISO day.

    ISO anchors only recur on the same week and weekday in later years; the
    daily, weekly, monthly and quarterly rules never match here.
    """
    anchor = event.date
    if anchor.kind is not DateKind.ISO:
        return False
    if iso_week != anchor.iso_week or day_offset != anchor.day_offset:
        return False
    return _every_n_years(event.recurrence, year - anchor.year)


def occurs_on_normal_date(event: Event, year: int, month: int, day: int) -> bool:
    """Evaluate a month/day-anchored event on a month/day date."""
    anchor = event.date
    if anchor.kind is not DateKind.NORMAL:
        return False

    pattern = event.recurrence

    # A single event matches its anchor exactly, even an anchor like Feb 30.
    if pattern is RecurrencePattern.NONE:
        return (year, month, day) == (anchor.year, anchor.month, anchor.day)

    # Days that do not exist (Feb 29 of a common year) never host a repetition.
    if not is_calendar_date(year, month, day):
        return False

    days_since = isoweek.ordinal(year, month, day) - anchor.ordinal()

    if pattern is RecurrencePattern.EVERY_DAY:
        return days_since >= 0
    if pattern is RecurrencePattern.EVERY_WEEK:
        return days_since >= 0 and days_since % 7 == 0
    if pattern is RecurrencePattern.EVERY_MONTH:
        return day == anchor.day and days_since >= 0
    if pattern is RecurrencePattern.EVERY_QUARTER:
        return day == anchor.day and (month - anchor.month) % 3 == 0 and days_since >= 0

    # Yearly rules: same month and day, year delta a multiple of the interval.
    if month != anchor.month or day != anchor.day:
        return False
    return _every_n_years(pattern, year - anchor.year)


def occurs_on_normal_date_any(event: Event, year: int, month: int, day: int) -> bool:
    """Evaluate any event on a month/day date."""
    if event.date.kind is DateKind.NORMAL:
        return occurs_on_normal_date(event, year, month, day)
    if not is_calendar_date(year, month, day):
        return False
    return occurs_on_iso_date(event, *isoweek.iso_triple(year, month, day))


def occurs_on_iso_date_any(event: Event, year: int, iso_week: int, day_offset: int) -> bool:
    """Evaluate any event on an ISO day."""
    if event.date.kind is DateKind.ISO:
        return occurs_on_iso_date(event, year, iso_week, day_offset)
    return occurs_on_normal_date(event, *isoweek.gregorian_triple(year, iso_week, day_offset))


def events_on_normal_date(events: Iterable[Event], year: int, month: int, day: int) -> list[Event]:
    """Events from ``events`` that occur on the given month/day date."""
    return [e for e in events if occurs_on_normal_date_any(e, year, month, day)]


def events_on_iso_date(events: Iterable[Event], year: int, iso_week: int, day_offset: int) -> list[Event]:
    """Events from ``events`` that occur on the given ISO day."""
    return [e for e in events if occurs_on_iso_date_any(e, year, iso_week, day_offset)]


def next_occurrence(
    event: Event,
    start: date | NormalDate,
    horizon_years: int = NEXT_OCCURRENCE_HORIZON_YEARS,
) -> NormalDate | None:
    """Find the first day on or after ``start`` on which ``event`` occurs.

    Scans forward one day at a time, for at most ``horizon_years`` years.

    Args:
        event: Event to search
        start: First day to consider
        horizon_years: Search bound in years

    Returns:
        The occurrence day, or None if there is none within the horizon
    """
    first = isoweek.ordinal(start.year, start.month, start.day)
    last = isoweek.ordinal(start.year + horizon_years, start.month, start.day)
    for n in range(first, last):
        year, month, day = isoweek.from_ordinal(n)
        if occurs_on_normal_date_any(event, year, month, day):
            return NormalDate(year, month, day)
    return None
