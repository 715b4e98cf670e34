"""Shared fixtures for the calendar tests."""

from __future__ import annotations

import itertools
import uuid
from typing import Any

import pytest

from iso_calendar.dates import IsoDate, NormalDate
from iso_calendar.event import Event
from iso_calendar.recurrence import RecurrencePattern

_counter = itertools.count(1)


def new_id() -> str:
    """Deterministic, valid UUID strings."""
    return str(uuid.UUID(int=next(_counter)))


def make_event(
    date: IsoDate | NormalDate,
    recurrence: RecurrencePattern | str = RecurrencePattern.NONE,
    **overrides: Any,
) -> Event:
    fields: dict[str, Any] = {
        "id": new_id(),
        "title": "Team offsite",
        "description": "",
        "financial_cost": 0,
        "color": "#3498db",
        "recurrence": RecurrencePattern(recurrence),
        "date": date,
    }
    fields.update(overrides)
    return Event(**fields)


def event_data(**overrides: Any) -> dict[str, Any]:
    """Structural event input as the HTTP layer receives it."""
    data: dict[str, Any] = {
        "id": new_id(),
        "title": "Dentist",
        "description": "Yearly check-up",
        "financialCost": 80.5,
        "color": "#AA00ff",
        "recurrence": "EveryYear",
        "date": {"type": "normal", "value": {"year": 2024, "month": 3, "day": 12}},
    }
    data.update(overrides)
    return data



@pytest.fixture
def id_factory():
    return new_id


@pytest.fixture(name="make_event")
def make_event_fixture():
    return make_event


@pytest.fixture(name="event_data")
def event_data_fixture():
    return event_data
