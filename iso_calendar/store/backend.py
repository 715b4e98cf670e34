"""Event storage backend interface."""

from __future__ import annotations

from typing import Protocol

from ..event import Event


class EventBackend(Protocol):
    """Keyed event storage.

    Implementations hold validated Event instances by id. They make no
    ordering or durability promises beyond what the concrete store offers.
    """

    async def list_events(self) -> list[Event]:
        """List all stored events."""
        ...

    async def get_event(self, event_id: str) -> Event:
        """Get an event by id.

        Raises:
            HTTPError: If the event is not found (404)
        """
        ...

    async def put_event(self, event: Event) -> bool:
        """Create or replace an event.

        Returns:
            True if the event was created, False if it replaced an existing one
        """
        ...

    async def delete_event(self, event_id: str) -> None:
        """Delete an event by id.

        Raises:
            HTTPError: If the event is not found (404)
        """
        ...

    async def delete_all(self) -> None:
        """Remove every event."""
        ...
