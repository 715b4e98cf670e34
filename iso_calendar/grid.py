"""Month views for the ISO and the month/day calendars.

The builders return plain data (rows of cells with the events occurring on
each day) for a renderer to draw.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from . import isoweek
from .dates import IsoDate, NormalDate
from .event import Event
from .occurrence import events_on_iso_date, events_on_normal_date

MONTH_NAMES = [
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
]


@dataclass
class DayCell:
    """One day of a month view."""

    date: NormalDate
    iso_date: IsoDate
    events: list[Event] = field(default_factory=list)
    is_today: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": str(self.date),
            "isoDate": str(self.iso_date),
            "isToday": self.is_today,
            "events": [_event_summary(e) for e in self.events],
        }


@dataclass
class IsoWeekRow:
    """A Monday..Sunday row of the ISO month view."""

    iso_week: int
    cells: list[DayCell]
    is_current_week: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "isoWeek": self.iso_week,
            "isCurrentWeek": self.is_current_week,
            "days": [c.to_dict() for c in self.cells],
        }


@dataclass
class IsoMonthView:
    year: int
    iso_month: int
    weeks: list[IsoWeekRow]

    @property
    def title(self) -> str:
        return f"{MONTH_NAMES[self.iso_month - 1]} {self.year}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "year": self.year,
            "month": self.iso_month,
            "title": self.title,
            "weeks": [w.to_dict() for w in self.weeks],
        }


@dataclass
class NormalMonthView:
    """Sunday-first rows of seven; ``None`` pads days outside the month."""

    year: int
    month: int
    weeks: list[list[DayCell | None]]

    @property
    def title(self) -> str:
        return f"{MONTH_NAMES[self.month - 1]} {self.year}"

    def cells(self) -> list[DayCell]:
        return [c for row in self.weeks for c in row if c is not None]

    def to_dict(self) -> dict[str, Any]:
        return {
            "year": self.year,
            "month": self.month,
            "title": self.title,
            "weeks": [[c.to_dict() if c else None for c in row] for row in self.weeks],
        }


def _event_summary(event: Event) -> dict[str, Any]:
    return {
        "id": event.id,
        "title": event.title,
        "color": event.color,
        "recurrence": event.recurrence.label,
    }


def iso_month_grid(
    year: int, iso_month: int, events: Sequence[Event], today: date | None = None
) -> IsoMonthView:
    """Build the ISO month view.

    Args:
        year: ISO year
        iso_month: ISO month 1..12 (4 or 5 weeks, plus week 53 in December
            of leap-week years)
        events: Candidate events
        today: Day to highlight (defaults to the current date)

    Returns:
        IsoMonthView with one row per ISO week
    """
    today = today or date.today()
    today_iso = isoweek.iso_triple(today.year, today.month, today.day)[:2]

    rows: list[IsoWeekRow] = []
    for week in isoweek.weeks_of_iso_month(year, iso_month):
        cells = []
        for offset in range(7):
            iso_date = IsoDate(year, week, offset)
            normal = iso_date.to_normal()
            cells.append(
                DayCell(
                    date=normal,
                    iso_date=iso_date,
                    events=events_on_iso_date(events, year, week, offset),
                    is_today=(normal.year, normal.month, normal.day)
                    == (today.year, today.month, today.day),
                )
            )
        rows.append(IsoWeekRow(iso_week=week, cells=cells, is_current_week=today_iso == (year, week)))

    return IsoMonthView(year=year, iso_month=iso_month, weeks=rows)


def normal_month_grid(
    year: int, month: int, events: Sequence[Event], today: date | None = None
) -> NormalMonthView:
    """Build the month/day view, Sunday first."""
    today = today or date.today()

    first = isoweek.ordinal(year, month, 1)
    # Sunday = 0 for the leading blanks.
    leading = (isoweek.weekday(first) + 1) % 7

    row: list[DayCell | None] = [None] * leading
    weeks: list[list[DayCell | None]] = []
    for day in range(1, isoweek.days_in_month(year, month) + 1):
        normal = NormalDate(year, month, day)
        row.append(
            DayCell(
                date=normal,
                iso_date=normal.to_iso(),
                events=events_on_normal_date(events, year, month, day),
                is_today=(year, month, day) == (today.year, today.month, today.day),
            )
        )
        if len(row) == 7:
            weeks.append(row)
            row = []

    if row:
        row.extend([None] * (7 - len(row)))
        weeks.append(row)

    return NormalMonthView(year=year, month=month, weeks=weeks)
