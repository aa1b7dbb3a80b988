"""
Stable facade: in-memory store, format selector, and error types. No I/O.
Do not add exports without updating __all__.
"""

from __future__ import annotations

from .errors import (
    KeyExistsError,
    KeyNotFoundError,
    KVStoreError,
    StoreIOError,
    StoreNotFoundError,
    StoreParseError,
    UnknownFormatError,
)
from .store import Store
from .types import Format

# Do not add exports without updating __all__.
__all__ = [
    "Format",
    "KVStoreError",
    "KeyExistsError",
    "KeyNotFoundError",
    "Store",
    "StoreIOError",
    "StoreNotFoundError",
    "StoreParseError",
    "UnknownFormatError",
]
