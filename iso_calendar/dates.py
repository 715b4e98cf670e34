"""Date value types for the two calendar coordinate systems."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar

from . import isoweek
from .errors import FieldError, ValidationError


class DateKind(str, Enum):
    """Tag identifying the coordinate system of an anchor date."""

    ISO = "iso"
    NORMAL = "normal"


def coerce_int(value: Any) -> int | None:
    """Return ``value`` as an int if it is an integral JSON number."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def check_range(
    errors: list[FieldError], name: str, value: Any, lo: int, hi: int | None = None
) -> None:
    """Append a FieldError to ``errors`` unless ``value`` is an int in [lo, hi]."""
    if isinstance(value, bool) or not isinstance(value, int):
        errors.append(FieldError(name, "must be an integer"))
    elif value < lo:
        errors.append(FieldError(name, f"must be >= {lo}"))
    elif hi is not None and value > hi:
        errors.append(FieldError(name, f"must be <= {hi}"))


def read_int_fields(data: Any, keys: tuple[str, ...]) -> dict[str, Any]:
    """Pull integer fields out of untyped input.

    Values that are not integral numbers are passed through unchanged so the
    constructor reports them; missing keys are reported here.
    """
    if not isinstance(data, dict):
        raise ValidationError([FieldError("value", "must be an object")])

    errors: list[FieldError] = []
    values: dict[str, Any] = {}
    for key in keys:
        if key not in data or data[key] is None:
            errors.append(FieldError(key, "is required"))
            continue
        raw = data[key]
        as_int = coerce_int(raw)
        values[key] = raw if as_int is None else as_int
    if errors:
        raise ValidationError(errors)
    return values


@dataclass(frozen=True)
class IsoDate:
    """A day in ISO week coordinates.

    ``day_offset`` counts from Monday (0) to Sunday (6).
    """

    year: int
    iso_week: int
    day_offset: int

    kind: ClassVar[DateKind] = DateKind.ISO

    def __post_init__(self) -> None:
        errors: list[FieldError] = []
        check_range(errors, "year", self.year, 1)
        check_range(errors, "isoWeek", self.iso_week, 1, 53)
        check_range(errors, "dayOffset", self.day_offset, 0, 6)
        if errors:
            raise ValidationError(errors)

    @classmethod
    def from_dict(cls, data: Any) -> IsoDate:
        values = read_int_fields(data, ("year", "isoWeek", "dayOffset"))
        return cls(values["year"], values["isoWeek"], values["dayOffset"])

    def to_dict(self) -> dict[str, int]:
        return {"year": self.year, "isoWeek": self.iso_week, "dayOffset": self.day_offset}

    def to_normal(self) -> NormalDate:
        """The same calendar day in month/day coordinates."""
        return NormalDate(*isoweek.gregorian_triple(self.year, self.iso_week, self.day_offset))

    def __str__(self) -> str:
        return f"{self.year:04d}-W{self.iso_week:02d}-{self.day_offset}"


@dataclass(frozen=True)
class NormalDate:
    """A day in year/month/day coordinates.

    ``day`` is only checked against 1..31, not against the month's length.
    """

    year: int
    month: int
    day: int

    kind: ClassVar[DateKind] = DateKind.NORMAL

    def __post_init__(self) -> None:
        errors: list[FieldError] = []
        check_range(errors, "year", self.year, 1)
        check_range(errors, "month", self.month, 1, 12)
        check_range(errors, "day", self.day, 1, 31)
        if errors:
            raise ValidationError(errors)

    @classmethod
    def from_dict(cls, data: Any) -> NormalDate:
        values = read_int_fields(data, ("year", "month", "day"))
        return cls(values["year"], values["month"], values["day"])

    def to_dict(self) -> dict[str, int]:
        return {"year": self.year, "month": self.month, "day": self.day}

    def to_iso(self) -> IsoDate:
        """The same calendar day in ISO week coordinates."""
        return IsoDate(*isoweek.iso_triple(self.year, self.month, self.day))

    def ordinal(self) -> int:
        return isoweek.ordinal(self.year, self.month, self.day)

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"


AnchorDate = IsoDate | NormalDate


def anchor_from_dict(data: Any) -> AnchorDate:
    """Build an anchor date from its tagged structural form.

    ``{"type": "iso" | "normal", "value": {...}}``; field errors are reported
    with paths relative to the tagged object (``type``, ``value.isoWeek``).
    """
    if not isinstance(data, dict):
        raise ValidationError([FieldError("date", "must be an object")])

    tag = data.get("type")
    if tag == DateKind.ISO.value:
        cls: type[IsoDate] | type[NormalDate] = IsoDate
    elif tag == DateKind.NORMAL.value:
        cls = NormalDate
    else:
        raise ValidationError([FieldError("type", f"must be 'iso' or 'normal', got {tag!r}")])

    value = data.get("value")
    if not isinstance(value, dict):
        raise ValidationError([FieldError("value", "must be an object")])
    try:
        return cls.from_dict(value)
    except ValidationError as e:
        raise e.prefixed("value") from None


def anchor_to_dict(anchor: AnchorDate) -> dict[str, Any]:
    return {"type": anchor.kind.value, "value": anchor.to_dict()}
