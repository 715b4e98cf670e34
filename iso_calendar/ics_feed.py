"""ICS feed endpoint for calendar subscriptions.

Provides read-only HTTP access to all events as one iCalendar file:
    GET /api/events/feed.ics

Each event becomes an all-day VEVENT starting on its anchor date. The
recurrence pattern is translated to an RRULE; ISO-anchored events keep
their week number and weekday through BYWEEKNO/BYDAY. ISO weeks that can
cross a year boundary are listed day by day in RDATE instead, because
RRULE intervals count Gregorian years and the evaluator counts ISO years.
"""

from __future__ import annotations

import logging
from datetime import UTC, date, datetime
from typing import Any

from icalendar import Calendar as iCalendar
from icalendar import Event as iEvent
from icalendar.prop import vDDDLists
from starlette.requests import Request
from starlette.responses import Response

from . import isoweek
from .api import EventAPI
from .dates import DateKind
from .event import Event
from .occurrence import NEXT_OCCURRENCE_HORIZON_YEARS, is_calendar_date
from .recurrence import RecurrencePattern

logger = logging.getLogger(__name__)

PRODID = "-//iso-calendar//Event Feed//EN"

ICAL_WEEKDAYS = ["MO", "TU", "WE", "TH", "FR", "SA", "SU"]

# ISO weeks 2..51 never leave the Gregorian year of the same number.
FIRST_INNER_WEEK = 2
LAST_INNER_WEEK = 51

FEED_HORIZON_YEARS = NEXT_OCCURRENCE_HORIZON_YEARS

_NORMAL_RULES: dict[RecurrencePattern, dict[str, Any]] = {
    RecurrencePattern.EVERY_DAY: {"freq": "DAILY"},
    RecurrencePattern.EVERY_WEEK: {"freq": "WEEKLY"},
    RecurrencePattern.EVERY_MONTH: {"freq": "MONTHLY"},
    RecurrencePattern.EVERY_QUARTER: {"freq": "MONTHLY", "interval": 3},
}


class UnsupportedRecurrence(ValueError):
    """The event never occurs, so it has no iCalendar form."""


def _week_inside_year(iso_week: int) -> bool:
    """True if the ISO week always lies in the Gregorian year of the same number.

    Week 1 can start in late December and weeks 52 and 53 can end in early
    January, so yearly RRULE stepping drifts off the ISO year for them.
    """
    return FIRST_INNER_WEEK <= iso_week <= LAST_INNER_WEEK


def is_listed(event: Event) -> bool:
    """True if the event is published as explicit dates rather than an RRULE."""
    return event.date.kind is DateKind.ISO and not _week_inside_year(event.date.iso_week)


def recurrence_rule(event: Event) -> dict[str, Any] | None:
    """Translate an event's recurrence into RRULE parts.

    Returns:
        Mapping for icalendar's vRecur, or None for non-recurring events and
        for events published through :func:`occurrence_dates`

    Raises:
        UnsupportedRecurrence: For ISO anchors with daily, weekly, monthly
            or quarterly patterns, which never occur
    """
    pattern = event.recurrence
    if pattern is RecurrencePattern.NONE:
        return None

    years = pattern.years
    if event.date.kind is DateKind.ISO:
        if years is None:
            raise UnsupportedRecurrence(f"{pattern.value} is not evaluated for ISO dates")
        if is_listed(event):
            return None
        rule: dict[str, Any] = {
            "freq": "YEARLY",
            "byweekno": event.date.iso_week,
            "byday": ICAL_WEEKDAYS[event.date.day_offset],
        }
    elif years is None:
        rule = dict(_NORMAL_RULES[pattern])
    else:
        rule = {"freq": "YEARLY"}

    if years and years > 1:
        rule["interval"] = years
    return rule


def occurrence_dates(event: Event, until_year: int) -> list[date]:
    """Days an ISO-anchored yearly event occurs on, up to ISO year ``until_year``.

    Week 53 is skipped in ISO years that do not have one.
    """
    anchor = event.date
    step = event.recurrence.years or 1
    last = anchor.year if event.recurrence is RecurrencePattern.NONE else until_year

    days = []
    for year in range(anchor.year, last + 1, step):
        if anchor.iso_week == 53 and not isoweek.has_leap_week(year):
            continue
        days.append(date(*isoweek.gregorian_triple(year, anchor.iso_week, anchor.day_offset)))
    return days


def start_date(event: Event) -> date:
    """Anchor date of ``event`` as a Gregorian date."""
    anchor = event.date if event.date.kind is DateKind.NORMAL else event.date.to_normal()
    return date(anchor.year, anchor.month, anchor.day)


def event_to_vevent(event: Event, stamp: datetime | None = None) -> iEvent:
    """Convert an event to an all-day VEVENT.

    ISO anchors in weeks 1, 52 and 53 get a DTSTART plus an RDATE list
    covering :data:`FEED_HORIZON_YEARS` past the later of the anchor year and
    the stamp year; everything else gets an RRULE.

    Raises:
        UnsupportedRecurrence: If the event has no day to publish
    """
    stamp = stamp or datetime.now(UTC)
    anchor = event.date
    if anchor.kind is DateKind.NORMAL and not is_calendar_date(anchor.year, anchor.month, anchor.day):
        raise UnsupportedRecurrence(f"anchor {anchor} is not a calendar day")
    rule = recurrence_rule(event)

    extra_days: list[date] = []
    if is_listed(event):
        days = occurrence_dates(event, max(anchor.year, stamp.year) + FEED_HORIZON_YEARS)
        if not days:
            raise UnsupportedRecurrence(f"no ISO year up to the horizon has {anchor}")
        first, extra_days = days[0], days[1:]
    else:
        first = start_date(event)

    vevent = iEvent()
    vevent.add("uid", event.id)
    vevent.add("dtstamp", stamp)
    vevent.add("summary", event.title)
    if event.description:
        vevent.add("description", event.description)
    vevent.add("dtstart", first)
    vevent.add("color", event.color)
    vevent.add("x-financial-cost", f"{event.financial_cost:.2f}")
    if rule is not None:
        vevent.add("rrule", rule)
    if extra_days:
        vevent.add("rdate", vDDDLists(extra_days), parameters={"VALUE": "DATE"})
    return vevent


def generate_ical(events: list[Event], name: str = "ISO Calendar") -> str:
    """Generate a single VCALENDAR with one VEVENT per event."""
    cal = iCalendar()
    cal.add("prodid", PRODID)
    cal.add("version", "2.0")
    cal.add("calscale", "GREGORIAN")
    cal.add("method", "PUBLISH")
    cal.add("x-wr-calname", name)

    stamp = datetime.now(UTC)
    for event in events:
        try:
            cal.add_component(event_to_vevent(event, stamp))
        except UnsupportedRecurrence as e:
            logger.debug("Leaving event %s out of the feed: %s", event.id, e)
        except (OverflowError, ValueError) as e:
            logger.warning("Cannot export event %s: %s", event.id, e)

    return cal.to_ical().decode("utf-8")


class ICSFeedHandler:
    """Handler for the ICS feed endpoint."""

    def __init__(self, api: EventAPI, name: str = "ISO Calendar") -> None:
        self.api = api
        self.name = name

    async def handle_feed_request(self, request: Request) -> Response:
        """Handle GET /api/events/feed.ics.

        Returns:
            Response with Content-Type text/calendar
        """
        events = await self.api.fetch_events()
        ical_content = generate_ical(events, self.name)
        logger.debug("Generated feed with %d events, %d bytes", len(events), len(ical_content))

        return Response(
            content=ical_content,
            media_type="text/calendar; charset=utf-8",
            headers={
                "Content-Disposition": 'inline; filename="calendar.ics"',
                "Cache-Control": "private, max-age=300",
            },
        )
