"""Calendar event entity."""

from __future__ import annotations

import dataclasses
import re
import uuid
from dataclasses import dataclass
from typing import Any

from .dates import AnchorDate, IsoDate, NormalDate, anchor_from_dict, anchor_to_dict
from .errors import FieldError, ValidationError
from .recurrence import RecurrencePattern

COLOR_PATTERN = re.compile(r"^#[0-9A-Fa-f]{6}$")


def _is_uuid(value: str) -> bool:
    try:
        uuid.UUID(value)
    except ValueError:
        return False
    return True


@dataclass(frozen=True)
class Event:
    """An event anchored on exactly one date, in either coordinate system.

    Instances are immutable; use :meth:`with_updates` to derive a changed copy
    that keeps the same id.
    """

    id: str
    title: str
    description: str
    financial_cost: float
    color: str
    recurrence: RecurrencePattern
    date: AnchorDate

    def __post_init__(self) -> None:
        errors: list[FieldError] = []

        if not isinstance(self.id, str) or not _is_uuid(self.id):
            errors.append(FieldError("id", "must be a UUID string"))
        if not isinstance(self.title, str) or not self.title:
            errors.append(FieldError("title", "must be a non-empty string"))
        if not isinstance(self.description, str):
            errors.append(FieldError("description", "must be a string"))
        if isinstance(self.financial_cost, bool) or not isinstance(self.financial_cost, (int, float)):
            errors.append(FieldError("financialCost", "must be a number"))
        elif not self.financial_cost >= 0:
            errors.append(FieldError("financialCost", "must be >= 0"))
        if not isinstance(self.color, str) or not COLOR_PATTERN.match(self.color):
            errors.append(FieldError("color", "must match #RRGGBB"))
        if not isinstance(self.recurrence, RecurrencePattern):
            errors.append(FieldError("recurrence", "must be a RecurrencePattern"))
        if not isinstance(self.date, (IsoDate, NormalDate)):
            errors.append(FieldError("date", "must be an IsoDate or NormalDate"))

        if errors:
            raise ValidationError(errors)

    @classmethod
    def from_dict(cls, data: Any) -> Event:
        """Build an event from untyped structural input.

        Args:
            data: Mapping in the wire shape (``financialCost``, tagged ``date``)

        Returns:
            Validated Event

        Raises:
            ValidationError: Listing every offending field
        """
        if not isinstance(data, dict):
            raise ValidationError([FieldError("event", "must be an object")])

        errors: list[FieldError] = []

        for key in ("id", "title", "description", "financialCost", "color", "recurrence", "date"):
            if key not in data or data[key] is None:
                errors.append(FieldError(key, "is required"))

        recurrence: Any = data.get("recurrence")
        if recurrence is not None:
            try:
                recurrence = RecurrencePattern.parse(recurrence)
            except ValueError as e:
                errors.append(FieldError("recurrence", str(e)))

        anchor: AnchorDate | None = None
        if data.get("date") is not None:
            try:
                anchor = anchor_from_dict(data["date"])
            except ValidationError as e:
                errors.extend(e.prefixed("date").errors)

        if errors:
            # Field-level checks of the remaining values still run so the
            # caller sees everything wrong with the input at once.
            errors.extend(_shape_errors(data, {e.field.split(".")[0] for e in errors}))
            raise ValidationError(errors)

        return cls(
            id=data["id"],
            title=data["title"],
            description=data["description"],
            financial_cost=data["financialCost"],
            color=data["color"],
            recurrence=recurrence,
            date=anchor,  # type: ignore[arg-type]
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "financialCost": self.financial_cost,
            "color": self.color,
            "recurrence": self.recurrence.value,
            "date": anchor_to_dict(self.date),
        }

    def with_updates(self, **changes: Any) -> Event:
        """Return a copy with some fields replaced and the same id.

        ``date`` may be swapped between an IsoDate and a NormalDate.

        Raises:
            TypeError: If ``id`` or an unknown field is given
            ValidationError: If a replacement value is invalid
        """
        if "id" in changes:
            raise TypeError("with_updates() cannot change the event id")
        if isinstance(changes.get("recurrence"), str) and not isinstance(
            changes["recurrence"], RecurrencePattern
        ):
            try:
                changes["recurrence"] = RecurrencePattern.parse(changes["recurrence"])
            except ValueError as e:
                raise ValidationError([FieldError("recurrence", str(e))]) from None
        return dataclasses.replace(self, **changes)


def _shape_errors(data: dict[str, Any], already: set[str]) -> list[FieldError]:
    """Run the scalar field checks for keys not yet reported."""
    candidate = {
        "id": data.get("id"),
        "title": data.get("title"),
        "description": data.get("description"),
        "financial_cost": data.get("financialCost"),
        "color": data.get("color"),
        "recurrence": RecurrencePattern.NONE,
        "date": IsoDate(1, 1, 0),
    }
    try:
        Event(**candidate)
    except ValidationError as e:
        return [err for err in e.errors if err.field not in already]
    return []
