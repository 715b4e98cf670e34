"""HTTP API for events and calendar views."""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable
from datetime import UTC, date, datetime
from typing import Any

from starlette.applications import Starlette
from starlette.datastructures import UploadFile
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.routing import Route

from .api import LocalEventAPI
from .csv_io import write_csv
from .errors import HTTPError, ValidationError, http_errorf, is_not_found
from .grid import iso_month_grid, normal_month_grid
from .ics_feed import ICSFeedHandler
from .occurrence import next_occurrence
from .store.backend import EventBackend

logger = logging.getLogger(__name__)

CSV_UPLOAD_FIELD = "csvFile"

Endpoint = Callable[[Request], Awaitable[Response]]


def _parse_date(value: str | None, name: str) -> date | None:
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise http_errorf(400, "invalid %s date %r, expected YYYY-MM-DD", name, value) from None


def _parse_month(request: Request) -> tuple[int, int]:
    year: int = request.path_params["year"]
    month: int = request.path_params["month"]
    if year < 1 or not 1 <= month <= 12:
        raise http_errorf(400, "invalid year/month %d/%d", year, month)
    return year, month


async def _json_body(request: Request) -> Any:
    try:
        return await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise HTTPError(400, Exception(f"invalid JSON body: {e}")) from e


class Handler:
    """Request handlers for the calendar API.

    Each public coroutine handles one route. :meth:`wrap` turns the errors
    raised by the API into JSON error responses and does debug logging.
    """

    def __init__(self, api: LocalEventAPI, calendar_name: str = "ISO Calendar", debug: bool = False):
        self.api = api
        self.feed_handler = ICSFeedHandler(api, name=calendar_name)
        self.debug = debug

    def wrap(self, endpoint: Endpoint) -> Endpoint:
        async def handle(request: Request) -> Response:
            if self.debug:
                await self._log_request(request)

            try:
                response = await endpoint(request)
            except ValidationError as e:
                response = JSONResponse(
                    {"error": "Invalid event data", "details": e.to_list()}, status_code=400
                )
            except HTTPError as e:
                message = "Event not found" if is_not_found(e) else str(e.err or e)
                response = JSONResponse({"error": message}, status_code=e.code)
            except Exception as e:
                logger.exception("Unhandled error for %s %s", request.method, request.url.path)
                response = JSONResponse({"error": f"Internal error: {e}"}, status_code=500)

            if self.debug:
                self._log_response(response)
            return response

        return handle

    async def health(self, request: Request) -> Response:
        return JSONResponse({"status": "ok", "timestamp": datetime.now(UTC).isoformat()})

    async def list_events(self, request: Request) -> Response:
        events = await self.api.fetch_events()
        return JSONResponse([e.to_dict() for e in events])

    async def create_event(self, request: Request) -> Response:
        event = await self.api.create_event(await _json_body(request))
        return JSONResponse(event.to_dict(), status_code=201)

    async def delete_all_events(self, request: Request) -> Response:
        await self.api.delete_all_events()
        return Response(status_code=204)

    async def get_event(self, request: Request) -> Response:
        event = await self.api.get_event(request.path_params["event_id"])
        return JSONResponse(event.to_dict())

    async def update_event(self, request: Request) -> Response:
        event = await self.api.update_event(request.path_params["event_id"], await _json_body(request))
        return JSONResponse(event.to_dict())

    async def delete_event(self, request: Request) -> Response:
        await self.api.delete_event(request.path_params["event_id"])
        return Response(status_code=204)

    async def import_events(self, request: Request) -> Response:
        """Handle POST /api/events/import.

        Accepts a multipart upload in the ``csvFile`` field or a raw
        ``text/csv`` body.
        """
        content_type = request.headers.get("content-type", "")
        text: str | None = None

        if content_type.startswith("multipart/form-data"):
            form = await request.form()
            upload = form.get(CSV_UPLOAD_FIELD)
            if isinstance(upload, UploadFile):
                text = (await upload.read()).decode("utf-8-sig")
        elif content_type.startswith("text/"):
            body = await request.body()
            if body:
                text = body.decode("utf-8-sig")

        if text is None:
            return JSONResponse({"error": "No file uploaded"}, status_code=400)
        if not text.strip():
            return JSONResponse({"error": "Empty CSV file"}, status_code=400)

        result = await self.api.import_events_from_csv(text)
        return JSONResponse(result.to_dict())

    async def export_events(self, request: Request) -> Response:
        events = await self.api.fetch_events()
        return Response(
            content=write_csv(events),
            media_type="text/csv; charset=utf-8",
            headers={"Content-Disposition": 'attachment; filename="events.csv"'},
        )

    async def feed_ics(self, request: Request) -> Response:
        return await self.feed_handler.handle_feed_request(request)

    async def event_next_occurrence(self, request: Request) -> Response:
        """Handle GET /api/events/{id}/next?from=YYYY-MM-DD."""
        event = await self.api.get_event(request.path_params["event_id"])
        start = _parse_date(request.query_params.get("from"), "from") or date.today()
        found = next_occurrence(event, start)
        return JSONResponse({"eventId": event.id, "from": start.isoformat(), "date": str(found) if found else None})

    async def iso_month(self, request: Request) -> Response:
        year, month = _parse_month(request)
        today = _parse_date(request.query_params.get("today"), "today")
        events = await self.api.fetch_events()
        return JSONResponse(iso_month_grid(year, month, events, today=today).to_dict())

    async def normal_month(self, request: Request) -> Response:
        year, month = _parse_month(request)
        today = _parse_date(request.query_params.get("today"), "today")
        events = await self.api.fetch_events()
        return JSONResponse(normal_month_grid(year, month, events, today=today).to_dict())

    async def _log_request(self, request: Request) -> None:
        from .debug import log_request

        body = await request.body()
        log_request(request.method, request.url.path, dict(request.headers.items()), body or None)

    def _log_response(self, response: Response) -> None:
        from .debug import log_response

        log_response(response.status_code, dict(response.headers.items()), getattr(response, "body", None))


def create_app(
    backend: EventBackend,
    calendar_name: str = "ISO Calendar",
    debug: bool = False,
) -> Starlette:
    """Create a Starlette app for the calendar API.

    Args:
        backend: Storage strategy for events
        calendar_name: Name used in the iCalendar feed
        debug: Log requests and responses

    Returns:
        Starlette application
    """
    handler = Handler(LocalEventAPI(backend), calendar_name=calendar_name, debug=debug)
    w = handler.wrap

    routes = [
        Route("/api/health", w(handler.health), methods=["GET"]),
        Route("/api/events", w(handler.list_events), methods=["GET"]),
        Route("/api/events", w(handler.create_event), methods=["POST"]),
        Route("/api/events", w(handler.delete_all_events), methods=["DELETE"]),
        Route("/api/events/import", w(handler.import_events), methods=["POST"]),
        Route("/api/events/export.csv", w(handler.export_events), methods=["GET"]),
        Route("/api/events/feed.ics", w(handler.feed_ics), methods=["GET"]),
        Route("/api/events/{event_id}/next", w(handler.event_next_occurrence), methods=["GET"]),
        Route("/api/events/{event_id}", w(handler.get_event), methods=["GET"]),
        Route("/api/events/{event_id}", w(handler.update_event), methods=["PUT"]),
        Route("/api/events/{event_id}", w(handler.delete_event), methods=["DELETE"]),
        Route("/api/calendar/iso/{year:int}/{month:int}", w(handler.iso_month), methods=["GET"]),
        Route("/api/calendar/normal/{year:int}/{month:int}", w(handler.normal_month), methods=["GET"]),
    ]

    return Starlette(routes=routes)
