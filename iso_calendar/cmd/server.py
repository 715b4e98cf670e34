"""Calendar server command-line tool."""

import argparse
import sys
from pathlib import Path

from iso_calendar.config import ServerConfig


def main() -> None:
    """Main entry point for the calendar server."""
    config = ServerConfig()

    parser = argparse.ArgumentParser(
        description="ISO week / month calendar event server",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Start server with in-memory storage
  iso-calendar-server

  # Persist events to a directory and listen on port 8080
  iso-calendar-server --port 8080 --data-dir /path/to/data

Endpoints:
  - Events API:   http://localhost:PORT/api/events
  - CSV import:   http://localhost:PORT/api/events/import
  - ICS feed:     http://localhost:PORT/api/events/feed.ics
  - ISO month:    http://localhost:PORT/api/calendar/iso/YEAR/MONTH
  - Normal month: http://localhost:PORT/api/calendar/normal/YEAR/MONTH

Environment:
  ISO_CALENDAR_ADDR, ISO_CALENDAR_PORT (or PORT), ISO_CALENDAR_DATA_DIR,
  ISO_CALENDAR_DEBUG provide the defaults for the options below.
        """,
    )
    parser.add_argument(
        "--addr",
        default=config.addr,
        help=f"listening address (default: {config.addr})",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=config.port,
        help=f"listening port (default: {config.port})",
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=config.data_dir,
        help="directory for the JSON event store (default: keep events in memory)",
    )
    parser.add_argument(
        "--name",
        default=config.calendar_name,
        help="calendar name used in the ICS feed",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=config.debug,
        help="enable debug logging (logs request/response bodies)",
    )

    args = parser.parse_args()

    if args.data_dir is not None:
        data_dir = args.data_dir.resolve()
        if data_dir.exists() and not data_dir.is_dir():
            print(f"Error: path is not a directory: {data_dir}", file=sys.stderr)
            sys.exit(1)

    if args.debug:
        from iso_calendar.debug import setup_debug_logging

        setup_debug_logging()

    from iso_calendar.server import create_app
    from iso_calendar.store import LocalEventBackend, MemoryEventBackend

    if args.data_dir is not None:
        backend = LocalEventBackend(data_dir)
    else:
        backend = MemoryEventBackend()

    app = create_app(backend, calendar_name=args.name, debug=args.debug)

    import uvicorn

    print(f"Calendar server listening on {args.addr}:{args.port}")
    if args.data_dir is not None:
        print(f"Events stored in: {backend.path}")
    else:
        print("Events kept in memory")

    uvicorn.run(
        app,
        host=args.addr,
        port=args.port,
        log_level="debug" if args.debug else "info",
    )


if __name__ == "__main__":
    main()
