"""HTTP client for the calendar API.

Implements the same operations as :class:`iso_calendar.api.LocalEventAPI`
against a running server, so the two can be swapped by the caller.
"""

from __future__ import annotations

from typing import Any

import httpx

from .api import ImportResult
from .errors import FieldError, HTTPError, ValidationError
from .event import Event

API_PREFIX = "/api/events"


class Client:
    """Calendar API client over HTTP."""

    def __init__(
        self,
        http_client: httpx.AsyncClient | None = None,
        endpoint: str = "http://127.0.0.1:3000",
        timeout: float = 30.0,
    ) -> None:
        """Initialize client.

        Args:
            http_client: HTTP client to use (one is created when omitted)
            endpoint: Server base URL, used only when creating the HTTP client
            timeout: Request timeout in seconds for a created HTTP client
        """
        self._owns_client = http_client is None
        self._http_client = http_client or httpx.AsyncClient(base_url=endpoint, timeout=timeout)

    async def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_client:
            await self._http_client.aclose()

    async def __aenter__(self) -> Client:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        """Send a request and map error statuses to exceptions.

        Raises:
            ValidationError: On 400 answers carrying field details
            HTTPError: On any other non-2xx answer
        """
        response = await self._http_client.request(method, url, **kwargs)
        if response.is_success:
            return response

        try:
            body = response.json()
        except ValueError:
            body = {"error": response.text}

        details = body.get("details") if isinstance(body, dict) else None
        if response.status_code == 400 and isinstance(details, list):
            raise ValidationError([FieldError(d["field"], d["reason"]) for d in details])

        message = body.get("error", response.reason_phrase) if isinstance(body, dict) else response.text
        raise HTTPError(response.status_code, Exception(message))

    async def fetch_events(self) -> list[Event]:
        response = await self._request("GET", API_PREFIX)
        return [Event.from_dict(item) for item in response.json()]

    async def get_event(self, event_id: str) -> Event:
        response = await self._request("GET", f"{API_PREFIX}/{event_id}")
        return Event.from_dict(response.json())

    async def create_event(self, data: dict[str, Any]) -> Event:
        response = await self._request("POST", API_PREFIX, json=data)
        return Event.from_dict(response.json())

    async def update_event(self, event_id: str, data: dict[str, Any]) -> Event:
        response = await self._request("PUT", f"{API_PREFIX}/{event_id}", json=data)
        return Event.from_dict(response.json())

    async def delete_event(self, event_id: str) -> None:
        await self._request("DELETE", f"{API_PREFIX}/{event_id}")

    async def delete_all_events(self) -> None:
        await self._request("DELETE", API_PREFIX)

    async def import_events_from_csv(self, text: str) -> ImportResult:
        files = {"csvFile": ("events.csv", text.encode("utf-8"), "text/csv")}
        response = await self._request("POST", f"{API_PREFIX}/import", files=files)
        return ImportResult.from_dict(response.json())

    async def export_events_to_csv(self) -> str:
        response = await self._request("GET", f"{API_PREFIX}/export.csv")
        return response.text
