"""Event API: the operations the calendar front end relies on.

Two implementations exist: :class:`LocalEventAPI` works in-process on top
of any :class:`~iso_calendar.store.EventBackend`, and
:class:`iso_calendar.client.Client` talks to the HTTP server. Callers are
handed one of them explicitly.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Protocol

from .csv_io import read_rows, row_to_event_data
from .errors import FieldError, ValidationError
from .event import Event
from .store.backend import EventBackend

logger = logging.getLogger(__name__)


@dataclass
class ImportResult:
    """Outcome of a CSV import."""

    success: int = 0
    updated: int = 0
    errors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"success": self.success, "updated": self.updated, "errors": list(self.errors)}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ImportResult:
        return cls(
            success=int(data.get("success", 0)),
            updated=int(data.get("updated", 0)),
            errors=[str(e) for e in data.get("errors", [])],
        )


class EventAPI(Protocol):
    """Event operations exposed to the calendar front end."""

    async def fetch_events(self) -> list[Event]:
        """Fetch all events."""
        ...

    async def get_event(self, event_id: str) -> Event:
        """Fetch one event.

        Raises:
            HTTPError: If not found (404)
        """
        ...

    async def create_event(self, data: dict[str, Any]) -> Event:
        """Create an event from structural data without an id.

        Raises:
            ValidationError: If the data is invalid
        """
        ...

    async def update_event(self, event_id: str, data: dict[str, Any]) -> Event:
        """Replace an existing event; the id in ``event_id`` wins over ``data``.

        Raises:
            HTTPError: If not found (404)
            ValidationError: If the data is invalid
        """
        ...

    async def delete_event(self, event_id: str) -> None:
        """Delete one event.

        Raises:
            HTTPError: If not found (404)
        """
        ...

    async def delete_all_events(self) -> None:
        """Delete every event."""
        ...

    async def import_events_from_csv(self, text: str) -> ImportResult:
        """Upsert events from CSV text."""
        ...


class LocalEventAPI:
    """EventAPI backed directly by a storage backend."""

    def __init__(
        self,
        backend: EventBackend,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        """Initialize API.

        Args:
            backend: Storage strategy holding the events
            id_factory: Generator for new event ids (random UUID4 by default)
        """
        self.backend = backend
        self.id_factory: Callable[[], str] = id_factory or (lambda: str(uuid.uuid4()))

    async def fetch_events(self) -> list[Event]:
        return await self.backend.list_events()

    async def get_event(self, event_id: str) -> Event:
        return await self.backend.get_event(event_id)

    async def create_event(self, data: dict[str, Any]) -> Event:
        if not isinstance(data, dict):
            raise ValidationError([FieldError("event", "must be an object")])
        event = Event.from_dict({**data, "id": self.id_factory()})
        await self.backend.put_event(event)
        logger.info("Created event %s (%s)", event.id, event.title)
        return event

    async def update_event(self, event_id: str, data: dict[str, Any]) -> Event:
        # Raises 404 before validating so a missing id wins over bad data.
        await self.backend.get_event(event_id)
        if not isinstance(data, dict):
            raise ValidationError([FieldError("event", "must be an object")])
        event = Event.from_dict({**data, "id": event_id})
        await self.backend.put_event(event)
        logger.info("Updated event %s", event.id)
        return event

    async def delete_event(self, event_id: str) -> None:
        await self.backend.delete_event(event_id)
        logger.info("Deleted event %s", event_id)

    async def delete_all_events(self) -> None:
        await self.backend.delete_all()
        logger.info("Deleted all events")

    async def import_events_from_csv(self, text: str) -> ImportResult:
        result = ImportResult()

        rows = list(read_rows(text))
        if not rows and not text.strip():
            result.errors.append("Empty CSV file")
            return result

        for row in rows:
            try:
                event = Event.from_dict(row_to_event_data(row.values, self.id_factory))
            except ValidationError as e:
                result.errors.append(f"Row {row.number}: {e}")
                continue

            if await self.backend.put_event(event):
                result.success += 1
            else:
                result.updated += 1

        logger.info(
            "CSV import: %d created, %d updated, %d errors",
            result.success,
            result.updated,
            len(result.errors),
        )
        return result
