"""
Top-level public API surface. Stable facades only.
Canonical entrypoint: import kv_store; use kv_store.Store, kv_store.get_codec, kv_store.commands.
Does not import cli.
"""

from __future__ import annotations

from . import commands, core, store
from ._version import __version__
from .core import (
    Format,
    KeyExistsError,
    KeyNotFoundError,
    KVStoreError,
    Store,
    StoreIOError,
    StoreNotFoundError,
    StoreParseError,
    UnknownFormatError,
)
from .store import Codec, get_codec, resolve_format

# Do not add exports without updating __all__.
__all__ = [
    "__version__",
    "Codec",
    "Format",
    "KVStoreError",
    "KeyExistsError",
    "KeyNotFoundError",
    "Store",
    "StoreIOError",
    "StoreNotFoundError",
    "StoreParseError",
    "UnknownFormatError",
    "commands",
    "core",
    "get_codec",
    "resolve_format",
    "store",
]
