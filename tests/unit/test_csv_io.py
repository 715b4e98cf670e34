"""Tests for CSV parsing and serialization."""

import csv
import io

from iso_calendar.csv_io import CSV_COLUMNS, DEFAULT_COLOR, read_rows, row_to_event_data, write_csv
from iso_calendar.dates import IsoDate, NormalDate
from iso_calendar.event import Event
from iso_calendar.recurrence import RecurrencePattern

HEADER = ",".join(CSV_COLUMNS)


def test_read_rows_skips_blank_lines():
    text = f"{HEADER}\n\n,Standup,,0,,,iso,2024,2,0,,\n   \n,Review,,0,,,iso,2024,3,0,,\n"
    rows = list(read_rows(text))

    assert [r.number for r in rows] == [2, 3]
    assert [r.values["title"] for r in rows] == ["Standup", "Review"]


def test_read_rows_strips_and_pads():
    text = " id , title ,dateType\n , Padded , normal\n,Short\n"
    rows = list(read_rows(text))

    assert rows[0].values == {"id": "", "title": "Padded", "dateType": "normal"}
    assert rows[1].values == {"id": "", "title": "Short", "dateType": ""}


def test_read_rows_quoted_values():
    text = f'{HEADER}\n,"Lunch, with team","Says ""hi""",0,,,iso,2024,2,0,,\n'
    (row,) = read_rows(text)
    assert row.values["title"] == "Lunch, with team"
    assert row.values["description"] == 'Says "hi"'


def test_read_rows_empty_text():
    assert list(read_rows("")) == []
    assert list(read_rows(HEADER)) == []


def test_row_to_event_data_iso_defaults(id_factory):
    row = {"title": "Standup", "dateType": "iso", "year": "2024", "isoWeek": "2", "dayOffset": "0"}
    data = row_to_event_data(row, id_factory)

    event = Event.from_dict(data)
    assert event.color == DEFAULT_COLOR
    assert event.recurrence is RecurrencePattern.NONE
    assert event.financial_cost == 0
    assert event.description == ""
    assert event.date == IsoDate(2024, 2, 0)


def test_row_to_event_data_normal():
    row = {
        "id": "5b3b7a35-9f3e-4b1c-9a34-0a1bb7d5f1a2",
        "title": "Rent",
        "financialCost": "950.00",
        "color": "#aabbcc",
        "recurrence": "EveryMonth",
        "dateType": "normal",
        "year": "2024",
        "month": "1",
        "day": "31",
    }
    data = row_to_event_data(row, lambda: "unused")

    assert data["id"] == "5b3b7a35-9f3e-4b1c-9a34-0a1bb7d5f1a2"
    assert data["financialCost"] == 950.0
    assert data["date"] == {"type": "normal", "value": {"year": 2024, "month": 1, "day": 31}}


def test_unknown_date_type_reads_as_iso(id_factory):
    data = row_to_event_data({"dateType": "gregorian", "year": "2024", "isoWeek": "5", "dayOffset": "1"}, id_factory)
    assert data["date"]["type"] == "iso"


def test_unparseable_cost_is_zero(id_factory):
    assert row_to_event_data({"financialCost": "lots"}, id_factory)["financialCost"] == 0
    assert row_to_event_data({"financialCost": "nan"}, id_factory)["financialCost"] == 0


def test_bad_numbers_stay_invalid(id_factory):
    data = row_to_event_data({"title": "x", "year": "2024", "isoWeek": "two", "dayOffset": ""}, id_factory)
    assert data["date"]["value"] == {"year": 2024, "isoWeek": "two", "dayOffset": None}


def test_write_csv(make_event):
    events = [
        make_event(IsoDate(2024, 10, 2), RecurrencePattern.EVERY_2_YEARS, financial_cost=12.5),
        make_event(NormalDate(2024, 2, 29), RecurrencePattern.EVERY_YEAR, title="Leap, day"),
    ]
    text = write_csv(events)

    rows = list(csv.DictReader(io.StringIO(text)))
    assert text.splitlines()[0] == HEADER
    assert rows[0]["dateType"] == "iso"
    assert (rows[0]["isoWeek"], rows[0]["dayOffset"], rows[0]["month"]) == ("10", "2", "")
    assert rows[0]["financialCost"] == "12.5"
    assert rows[1]["title"] == "Leap, day"
    assert (rows[1]["month"], rows[1]["day"], rows[1]["isoWeek"]) == ("2", "29", "")


def test_written_rows_read_back_as_same_events(make_event, id_factory):
    events = [
        make_event(IsoDate(2020, 53, 4), RecurrencePattern.EVERY_YEAR, description='Quote "here"'),
        make_event(NormalDate(2024, 1, 31), RecurrencePattern.EVERY_MONTH, financial_cost=950),
    ]
    rows = list(read_rows(write_csv(events)))
    assert [Event.from_dict(row_to_event_data(r.values, id_factory)) for r in rows] == events
