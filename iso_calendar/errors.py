"""Error types shared by the calendar engine and its collaborators."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class FieldError:
    """A single violated field constraint."""

    field: str
    reason: str

    def __str__(self) -> str:
        return f"{self.field}: {self.reason}"


class ValidationError(ValueError):
    """Structural input violated one or more field constraints.

    Raised by every construction entry point (dates, events). The offending
    fields are listed in ``errors`` so callers can render a message per field.
    """

    def __init__(self, errors: list[FieldError]):
        self.errors = list(errors)
        super().__init__(str(self))

    def __str__(self) -> str:
        return "; ".join(str(e) for e in self.errors)

    @property
    def fields(self) -> list[str]:
        return [e.field for e in self.errors]

    def prefixed(self, prefix: str) -> ValidationError:
        """Return a copy whose field paths are nested under ``prefix``."""
        return ValidationError([FieldError(f"{prefix}.{e.field}", e.reason) for e in self.errors])

    def to_list(self) -> list[dict[str, str]]:
        """Plain form used in HTTP error bodies."""
        return [{"field": e.field, "reason": e.reason} for e in self.errors]


class HTTPError(Exception):
    """HTTP error with status code."""

    def __init__(self, code: int, err: Exception | None = None):
        self.code = code
        self.err = err
        super().__init__(str(self))

    def __str__(self) -> str:
        from http import HTTPStatus

        try:
            text = HTTPStatus(self.code).phrase
        except ValueError:
            text = "Unknown"

        s = f"{self.code} {text}"
        if self.err:
            return f"{s}: {self.err}"
        return s


def is_not_found(err: Exception | None) -> bool:
    """Check if an error is a 404 Not Found."""
    if isinstance(err, HTTPError):
        return err.code == 404
    return False


def http_errorf(code: int, format_str: str, *args: Any) -> HTTPError:
    """Create an HTTPError with a formatted message."""
    return HTTPError(code, Exception(format_str % args if args else format_str))
