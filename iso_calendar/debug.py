"""Debug logging utilities for the calendar server."""

from __future__ import annotations

import json
import logging
from typing import Any

logger = logging.getLogger("iso_calendar")
http_logger = logging.getLogger("iso_calendar.http")


def format_json(body: bytes | str) -> str:
    """Pretty-print a JSON body, or return it unchanged if it is not JSON."""
    try:
        if isinstance(body, bytes):
            body = body.decode("utf-8")
        return json.dumps(json.loads(body), indent=2, ensure_ascii=False)
    except (UnicodeDecodeError, json.JSONDecodeError):
        if isinstance(body, bytes):
            return body.decode("utf-8", errors="replace")
        return str(body)


def is_json_content(content_type: str | None) -> bool:
    if not content_type:
        return False
    return "json" in content_type.lower()


def _log_headers(headers: dict[str, Any], interesting: list[str]) -> None:
    http_logger.info("Headers:")
    for header in interesting:
        value = headers.get(header.lower(), headers.get(header))
        if value:
            if header == "Authorization":
                value = "[REDACTED]"
            http_logger.info(f"  {header}: {value}")


def _log_body(title: str, content_type: str, body: bytes) -> None:
    http_logger.info("-" * 80)
    http_logger.info(title)

    if is_json_content(content_type):
        for line in format_json(body).split("\n"):
            if line.strip():
                http_logger.info(f"  {line}")
    else:
        preview = body[:200].decode("utf-8", errors="replace")
        http_logger.info(f"  [{len(body)} bytes] {preview}")
        if len(body) > 200:
            http_logger.info(f"  ... ({len(body) - 200} more bytes)")


def log_request(method: str, path: str, headers: dict[str, str], body: bytes | None) -> None:
    """Log an incoming HTTP request.

    Args:
        method: HTTP method
        path: Request path
        headers: Request headers
        body: Request body (if any)
    """
    http_logger.info("=" * 80)
    http_logger.info(f">>> INCOMING REQUEST: {method} {path}")
    http_logger.info("-" * 80)
    _log_headers(headers, ["Content-Type", "Content-Length", "Accept", "Authorization"])
    if body:
        _log_body("Request Body:", headers.get("content-type", ""), body)
    http_logger.info("=" * 80)


def log_response(status_code: int, headers: dict[str, Any], body: bytes | None) -> None:
    """Log an outgoing HTTP response.

    Args:
        status_code: HTTP status code
        headers: Response headers
        body: Response body (if any)
    """
    http_logger.info("=" * 80)
    http_logger.info(f"<<< OUTGOING RESPONSE: {status_code}")
    http_logger.info("-" * 80)
    _log_headers(headers, ["Content-Type", "Content-Length", "Content-Disposition"])
    if body:
        _log_body("Response Body:", headers.get("content-type", ""), body)
    http_logger.info("=" * 80)
    http_logger.info("")


def setup_debug_logging() -> None:
    """Configure debug logging for the calendar server."""
    logger.setLevel(logging.DEBUG)

    handler = logging.StreamHandler()
    handler.setLevel(logging.DEBUG)

    # Messages are formatted by the callers
    handler.setFormatter(logging.Formatter("%(message)s"))

    logger.addHandler(handler)
    logger.propagate = False
