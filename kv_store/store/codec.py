"""
Codec interface: decode a file into a Store, encode a Store back to the file.
One implementation per Format; see registry.get_codec.
"""

from __future__ import annotations

import logging
import os
import stat
from abc import ABC, abstractmethod
from pathlib import Path
from typing import ClassVar, Iterable, Tuple

from kv_store.core.errors import StoreIOError, StoreNotFoundError, StoreParseError
from kv_store.core.store import Store
from kv_store.core.types import Format, PathLike

logger = logging.getLogger(__name__)


class Codec(ABC):
    """
    Format-specific persistence for a Store.

    decode raises StoreNotFoundError for a missing file, StoreParseError for
    content the format cannot accept, StoreIOError for other read failures.
    encode overwrites the file or raises StoreIOError, leaving it unchanged.
    """

    format: ClassVar[Format]

    @abstractmethod
    def decode(self, path: PathLike) -> Store:
        ...

    @abstractmethod
    def encode(self, store: Store, path: PathLike) -> None:
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"

    @staticmethod
    def _store_from_pairs(pairs: Iterable[Tuple[object, object]], path: PathLike) -> Store:
        """Build a Store from decoded pairs; non-text cells and repeated keys are parse errors."""
        store = Store()
        for key, value in pairs:
            if not isinstance(key, str):
                raise StoreParseError(str(path), f"key {key!r} is not text")
            if not isinstance(value, str):
                raise StoreParseError(
                    str(path), f"value for key '{key}' must be text, got {type(value).__name__}"
                )
            if key in store:
                raise StoreParseError(str(path), f"duplicate key '{key}'")
            store.add(key, value)
        return store


class TextCodec(Codec):
    """Codec for text formats: whole-file read, render to a string, atomic replace."""

    @abstractmethod
    def _parse(self, text: str, path: Path) -> Store:
        ...

    @abstractmethod
    def _render(self, store: Store) -> str:
        ...

    def decode(self, path: PathLike) -> Store:
        path = Path(path)
        store = self._parse(read_text(path), path)
        logger.debug("Decoded %d entries from %s (%s)", len(store), path, self.format.value)
        return store

    def encode(self, store: Store, path: PathLike) -> None:
        path = Path(path)
        atomic_write_text(path, self._render(store))
        logger.debug("Encoded %d entries to %s (%s)", len(store), path, self.format.value)


def read_text(path: Path) -> str:
    try:
        with open(path, encoding="utf-8", newline="") as f:
            return f.read()
    except FileNotFoundError as e:
        raise StoreNotFoundError(str(path)) from e
    except UnicodeDecodeError as e:
        raise StoreParseError(str(path), f"not valid UTF-8 text ({e.reason})") from e
    except OSError as e:
        raise StoreIOError(str(path), e.strerror or str(e)) from e


def atomic_write_text(path: Path, text: str) -> None:
    """
    Write text to path. Atomic: write to <name>.tmp then rename over the target.
    A symlinked path is written through to the file it points at; an existing
    target keeps its permission bits.
    """
    target = path.resolve() if path.is_symlink() else path
    tmp = target.with_name(target.name + ".tmp")
    try:
        with open(tmp, "w", encoding="utf-8", newline="") as f:
            f.write(text)
        if target.exists():
            os.chmod(tmp, stat.S_IMODE(target.stat().st_mode))
        tmp.replace(target)
    except OSError as e:
        try:
            tmp.unlink(missing_ok=True)
        except OSError:
            logger.warning("Could not remove temp file %s", tmp)
        raise StoreIOError(str(path), e.strerror or str(e)) from e


__all__ = ["Codec", "TextCodec", "atomic_write_text", "read_text"]
