"""Events on an ISO week calendar and a month/day calendar."""

from .api import EventAPI, ImportResult, LocalEventAPI
from .client import Client
from .dates import DateKind, IsoDate, NormalDate
from .errors import FieldError, HTTPError, ValidationError
from .event import Event
from .isoweek import has_leap_week, iso_month_of_week, iso_week_of, monday_of_iso_week
from .occurrence import (
    events_on_iso_date,
    events_on_normal_date,
    next_occurrence,
    occurs_on_iso_date,
    occurs_on_iso_date_any,
    occurs_on_normal_date,
    occurs_on_normal_date_any,
)
from .recurrence import RecurrencePattern
from .server import create_app

__version__ = "0.1.0"

__all__ = [
    "Client",
    "DateKind",
    "Event",
    "EventAPI",
    "FieldError",
    "HTTPError",
    "ImportResult",
    "IsoDate",
    "LocalEventAPI",
    "NormalDate",
    "RecurrencePattern",
    "ValidationError",
    "create_app",
    "events_on_iso_date",
    "events_on_normal_date",
    "has_leap_week",
    "iso_month_of_week",
    "iso_week_of",
    "monday_of_iso_week",
    "next_occurrence",
    "occurs_on_iso_date",
    "occurs_on_iso_date_any",
    "occurs_on_normal_date",
    "occurs_on_normal_date_any",
]
