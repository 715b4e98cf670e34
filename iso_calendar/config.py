"""Server configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

ISO_CALENDAR_ADDR = os.getenv("ISO_CALENDAR_ADDR")
ISO_CALENDAR_PORT = os.getenv("ISO_CALENDAR_PORT") or os.getenv("PORT")
ISO_CALENDAR_DATA_DIR = os.getenv("ISO_CALENDAR_DATA_DIR")
ISO_CALENDAR_DEBUG = os.getenv("ISO_CALENDAR_DEBUG")


def _flag(value: str | None) -> bool:
    return (value or "").strip().lower() in ("1", "true", "yes", "on")


@dataclass
class ServerConfig:
    """Configuration for the calendar HTTP server.

    Defaults come from the environment; command-line flags override them.
    """

    addr: str = ISO_CALENDAR_ADDR or "127.0.0.1"
    port: int = int(ISO_CALENDAR_PORT or 3000)

    # Directory for the JSON event store; None keeps events in memory
    data_dir: Path | None = field(
        default_factory=lambda: Path(ISO_CALENDAR_DATA_DIR) if ISO_CALENDAR_DATA_DIR else None
    )

    debug: bool = _flag(ISO_CALENDAR_DEBUG)
    calendar_name: str = "ISO Calendar"
