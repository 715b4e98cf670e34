"""In-memory event backend."""

from __future__ import annotations

from ..errors import HTTPError
from ..event import Event


class MemoryEventBackend:
    """Events kept in a dict for the lifetime of the process."""

    def __init__(self, events: list[Event] | None = None) -> None:
        self._events: dict[str, Event] = {e.id: e for e in events or []}

    async def list_events(self) -> list[Event]:
        return list(self._events.values())

    async def get_event(self, event_id: str) -> Event:
        try:
            return self._events[event_id]
        except KeyError:
            raise HTTPError(404, Exception(f"Event not found: {event_id}")) from None

    async def put_event(self, event: Event) -> bool:
        created = event.id not in self._events
        self._events[event.id] = event
        return created

    async def delete_event(self, event_id: str) -> None:
        if self._events.pop(event_id, None) is None:
            raise HTTPError(404, Exception(f"Event not found: {event_id}"))

    async def delete_all(self) -> None:
        self._events.clear()
