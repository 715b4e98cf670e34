"""CSV import and export of events.

Columns::

    id, title, description, financialCost, color, recurrence,
    dateType, year, isoWeek, dayOffset, month, day

``id`` is optional on import (a new one is generated); ``dateType`` is
``iso`` or ``normal`` and anything else is read as ``iso``. ISO rows use
``isoWeek``/``dayOffset``, normal rows use ``month``/``day``.
"""

from __future__ import annotations

import csv
import io
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from typing import Any

from .dates import DateKind
from .event import Event
from .recurrence import RecurrencePattern

CSV_COLUMNS = [
    "id",
    "title",
    "description",
    "financialCost",
    "color",
    "recurrence",
    "dateType",
    "year",
    "isoWeek",
    "dayOffset",
    "month",
    "day",
]

DEFAULT_COLOR = "#3498db"


@dataclass
class CSVRow:
    """A data row and its 1-based line number (header is line 1)."""

    number: int
    values: dict[str, str]


def _int_or_raw(value: str) -> Any:
    try:
        return int(value)
    except ValueError:
        return value or None


def _float_or_zero(value: str) -> float:
    try:
        cost = float(value)
    except ValueError:
        return 0
    return cost if cost == cost else 0  # NaN


def read_rows(text: str) -> Iterator[CSVRow]:
    """Parse CSV text into rows keyed by the header names.

    Blank lines are skipped; surrounding whitespace is stripped from headers
    and values; missing trailing values read as empty strings.
    """
    lines = [line for line in text.splitlines() if line.strip()]
    reader = csv.reader(lines)
    header = [h.strip() for h in next(reader, [])]
    for number, values in enumerate(reader, start=2):
        row = {name: (values[i].strip() if i < len(values) else "") for i, name in enumerate(header)}
        yield CSVRow(number=number, values=row)


def row_to_event_data(row: dict[str, str], id_factory: Callable[[], str]) -> dict[str, Any]:
    """Map a CSV row onto the structural event form, applying defaults.

    The result still has to go through :meth:`Event.from_dict`.
    """
    year = _int_or_raw(row.get("year", ""))
    if row.get("dateType") == DateKind.NORMAL.value:
        date = {
            "type": DateKind.NORMAL.value,
            "value": {
                "year": year,
                "month": _int_or_raw(row.get("month", "")),
                "day": _int_or_raw(row.get("day", "")),
            },
        }
    else:
        date = {
            "type": DateKind.ISO.value,
            "value": {
                "year": year,
                "isoWeek": _int_or_raw(row.get("isoWeek", "")),
                "dayOffset": _int_or_raw(row.get("dayOffset", "")),
            },
        }

    return {
        "id": row.get("id") or id_factory(),
        "title": row.get("title", ""),
        "description": row.get("description", ""),
        "financialCost": _float_or_zero(row.get("financialCost", "")),
        "color": row.get("color") or DEFAULT_COLOR,
        "recurrence": row.get("recurrence") or RecurrencePattern.NONE.value,
        "date": date,
    }


def event_to_row(event: Event) -> dict[str, Any]:
    row: dict[str, Any] = {column: "" for column in CSV_COLUMNS}
    row.update(
        id=event.id,
        title=event.title,
        description=event.description,
        financialCost=event.financial_cost,
        color=event.color,
        recurrence=event.recurrence.value,
        dateType=event.date.kind.value,
    )
    row.update(event.date.to_dict())
    return row


def write_csv(events: Iterable[Event]) -> str:
    """Serialize events to CSV text with a header row."""
    out = io.StringIO()
    writer = csv.DictWriter(out, fieldnames=CSV_COLUMNS, lineterminator="\n")
    writer.writeheader()
    for event in events:
        writer.writerow(event_to_row(event))
    return out.getvalue()
