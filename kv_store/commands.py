"""
Store commands: each is one straight decode -> (mutate) -> (encode) pass over a single file.
Errors from the store and codecs propagate unchanged; the file is written at most once.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Mapping, Optional

from .core.errors import KeyExistsError, KeyNotFoundError, StoreIOError
from .core.store import Store
from .core.types import Entry, PathLike
from .store.codec import Codec

logger = logging.getLogger(__name__)


def init_store(path: PathLike, codec: Codec, seed: Optional[Mapping[str, str]] = None) -> Store:
    """Write a new store (empty, or the seed entries) to path; creates parent dirs, overwrites."""
    path = Path(path)
    if path.exists():
        logger.warning("Overwriting existing store %s", path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise StoreIOError(str(path.parent), e.strerror or str(e)) from e
    store = Store(seed or {})
    codec.encode(store, path)
    logger.info("Initialized %s with %d entries", path, len(store))
    return store


def list_entries(path: PathLike, codec: Codec) -> List[Entry]:
    return codec.decode(path).list()


def add_entry(
    path: PathLike,
    codec: Codec,
    key: str,
    value: str,
    *,
    overwrite: bool = True,
) -> bool:
    """
    Add or replace key in the store at path. Returns True if the key was new.
    overwrite=False raises KeyExistsError for an existing key and writes nothing.
    """
    store = codec.decode(path)
    if not overwrite and key in store:
        raise KeyExistsError(key)
    created = store.add(key, value)
    codec.encode(store, path)
    logger.info("%s key %r in %s", "Added" if created else "Replaced", key, path)
    return created


def remove_entry(path: PathLike, codec: Codec, key: str, *, missing_ok: bool = False) -> bool:
    """
    Remove key from the store at path. Returns True if it was removed.
    A missing key raises KeyNotFoundError, or with missing_ok=True is a no-op returning False.
    Nothing is written unless a key was removed.
    """
    store = codec.decode(path)
    try:
        store.remove(key)
    except KeyNotFoundError:
        if not missing_ok:
            raise
        logger.warning("Key %r not in %s; nothing removed", key, path)
        return False
    codec.encode(store, path)
    logger.info("Removed key %r from %s", key, path)
    return True


__all__ = ["add_entry", "init_store", "list_entries", "remove_entry"]
