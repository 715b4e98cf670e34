"""Tests for IsoDate, NormalDate and the tagged anchor form."""

import dataclasses

import pytest

from iso_calendar.dates import DateKind, IsoDate, NormalDate, anchor_from_dict, anchor_to_dict
from iso_calendar.errors import ValidationError


class TestIsoDate:
    def test_valid(self):
        d = IsoDate(2024, 53, 6)
        assert (d.year, d.iso_week, d.day_offset) == (2024, 53, 6)
        assert d.kind is DateKind.ISO

    def test_week_out_of_range(self):
        with pytest.raises(ValidationError) as exc_info:
            IsoDate(2024, 54, 0)
        assert exc_info.value.fields == ["isoWeek"]

    def test_all_fields_reported(self):
        with pytest.raises(ValidationError) as exc_info:
            IsoDate(0, 0, 7)
        assert exc_info.value.fields == ["year", "isoWeek", "dayOffset"]

    def test_rejects_non_integers(self):
        with pytest.raises(ValidationError) as exc_info:
            IsoDate(2024, "1", True)  # type: ignore[arg-type]
        assert exc_info.value.fields == ["isoWeek", "dayOffset"]
        assert "must be an integer" in str(exc_info.value)

    def test_str(self):
        assert str(IsoDate(2024, 1, 0)) == "2024-W01-0"
        assert str(IsoDate(987, 45, 6)) == "0987-W45-6"

    def test_frozen(self):
        d = IsoDate(2024, 1, 0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            d.year = 2025  # type: ignore[misc]

    def test_to_normal(self):
        assert IsoDate(2020, 53, 4).to_normal() == NormalDate(2021, 1, 1)
        assert IsoDate(2025, 1, 0).to_normal() == NormalDate(2024, 12, 30)

    def test_from_dict(self):
        assert IsoDate.from_dict({"year": 2024, "isoWeek": 10, "dayOffset": 2}) == IsoDate(2024, 10, 2)
        assert IsoDate.from_dict({"year": 2024.0, "isoWeek": 10, "dayOffset": 2}) == IsoDate(2024, 10, 2)

    def test_from_dict_missing_and_bad(self):
        with pytest.raises(ValidationError) as exc_info:
            IsoDate.from_dict({"year": 2024})
        assert exc_info.value.fields == ["isoWeek", "dayOffset"]
        assert all(e.reason == "is required" for e in exc_info.value.errors)

        with pytest.raises(ValidationError) as exc_info:
            IsoDate.from_dict({"year": 2024, "isoWeek": 2.5, "dayOffset": 0})
        assert exc_info.value.fields == ["isoWeek"]


class TestNormalDate:
    def test_day_not_checked_against_month_length(self):
        d = NormalDate(2024, 2, 30)
        assert str(d) == "2024-02-30"

    @pytest.mark.parametrize(
        "year, month, day, field",
        [(2024, 13, 1, "month"), (2024, 0, 1, "month"), (2024, 1, 32, "day"), (0, 1, 1, "year")],
    )
    def test_out_of_range(self, year, month, day, field):
        with pytest.raises(ValidationError) as exc_info:
            NormalDate(year, month, day)
        assert exc_info.value.fields == [field]

    def test_str(self):
        assert str(NormalDate(2024, 3, 5)) == "2024-03-05"

    def test_to_iso(self):
        assert NormalDate(2024, 12, 30).to_iso() == IsoDate(2025, 1, 0)
        assert NormalDate(2021, 1, 3).to_iso() == IsoDate(2020, 53, 6)

    def test_equality_and_hash(self):
        assert NormalDate(2024, 1, 1) == NormalDate(2024, 1, 1)
        assert len({NormalDate(2024, 1, 1), NormalDate(2024, 1, 1)}) == 1


class TestAnchorDict:
    def test_round_trip(self):
        for anchor in (IsoDate(2024, 10, 2), NormalDate(2024, 2, 29)):
            assert anchor_from_dict(anchor_to_dict(anchor)) == anchor

    def test_wire_shape(self):
        assert anchor_to_dict(IsoDate(2024, 10, 2)) == {
            "type": "iso",
            "value": {"year": 2024, "isoWeek": 10, "dayOffset": 2},
        }
        assert anchor_to_dict(NormalDate(2024, 2, 29)) == {
            "type": "normal",
            "value": {"year": 2024, "month": 2, "day": 29},
        }

    def test_unknown_tag(self):
        with pytest.raises(ValidationError) as exc_info:
            anchor_from_dict({"type": "lunar", "value": {}})
        assert exc_info.value.fields == ["type"]

    def test_value_not_an_object(self):
        with pytest.raises(ValidationError) as exc_info:
            anchor_from_dict({"type": "iso", "value": "2024-W01-0"})
        assert exc_info.value.fields == ["value"]

    def test_nested_field_paths(self):
        with pytest.raises(ValidationError) as exc_info:
            anchor_from_dict({"type": "iso", "value": {"year": 2024, "isoWeek": 54, "dayOffset": 0}})
        assert exc_info.value.fields == ["value.isoWeek"]
