"""Filesystem-based event backend."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from ..errors import HTTPError, ValidationError
from ..event import Event

logger = logging.getLogger(__name__)

STORAGE_FILE = "events.json"


class LocalEventBackend:
    """Events stored as one JSON document on disk.

    The document is a list of events in their structural form. It is read on
    every call and rewritten on every change; there is no locking.
    """

    def __init__(self, root_dir: Path, filename: str = STORAGE_FILE) -> None:
        """Initialize backend.

        Args:
            root_dir: Directory holding the events document
            filename: Name of the document inside root_dir
        """
        self.root_dir: Path = Path(root_dir)
        self.root_dir.mkdir(parents=True, exist_ok=True)
        self.path: Path = self.root_dir / filename

    def _load(self) -> dict[str, Event]:
        """Read and validate the stored events, skipping invalid records."""
        if not self.path.exists():
            return {}

        with open(self.path) as f:
            data: list[dict[str, Any]] = json.load(f)

        events: dict[str, Event] = {}
        for index, record in enumerate(data):
            try:
                event = Event.from_dict(record)
            except ValidationError as e:
                logger.warning("Skipping invalid stored event #%d in %s: %s", index, self.path, e)
                continue
            events[event.id] = event
        return events

    def _save(self, events: dict[str, Event]) -> None:
        tmp = self.path.with_suffix(".tmp")
        with open(tmp, "w") as f:
            json.dump([e.to_dict() for e in events.values()], f, indent=2)
        tmp.replace(self.path)

    async def list_events(self) -> list[Event]:
        return list(self._load().values())

    async def get_event(self, event_id: str) -> Event:
        events = self._load()
        if event_id not in events:
            raise HTTPError(404, Exception(f"Event not found: {event_id}"))
        return events[event_id]

    async def put_event(self, event: Event) -> bool:
        events = self._load()
        created = event.id not in events
        events[event.id] = event
        self._save(events)
        return created

    async def delete_event(self, event_id: str) -> None:
        events = self._load()
        if events.pop(event_id, None) is None:
            raise HTTPError(404, Exception(f"Event not found: {event_id}"))
        self._save(events)

    async def delete_all(self) -> None:
        self._save({})
