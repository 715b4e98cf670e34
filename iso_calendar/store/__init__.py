"""Event storage backends."""

from .backend import EventBackend
from .fs_backend import LocalEventBackend
from .memory_backend import MemoryEventBackend

__all__ = [
    "EventBackend",
    "LocalEventBackend",
    "MemoryEventBackend",
]
