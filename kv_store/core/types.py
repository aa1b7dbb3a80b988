"""
Shared enums and typing aliases for kv_store.
Format is the tagged selector for codecs; it is never persisted with the data.
"""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import Optional, Tuple, Union

from .errors import UnknownFormatError

PathLike = Union[str, "os.PathLike[str]"]
Entry = Tuple[str, str]


class Format(str, Enum):
    YAML = "yaml"
    JSON = "json"
    CSV = "csv"
    SQLITE = "sqlite"

    @classmethod
    def parse(cls, name: Union[str, "Format"]) -> "Format":
        """Resolve a format name (case-insensitive, common aliases allowed)."""
        if isinstance(name, Format):
            return name
        key = str(name).strip().lower().lstrip(".")
        fmt = _ALIASES.get(key)
        if fmt is None:
            raise UnknownFormatError(
                f"Unknown format '{name}'. Available: {[f.value for f in cls]}"
            )
        return fmt

    @classmethod
    def from_path(cls, path: PathLike) -> Optional["Format"]:
        """Format implied by the file extension, or None when unrecognized."""
        return _EXTENSIONS.get(Path(path).suffix.lower())


_ALIASES = {
    "yaml": Format.YAML,
    "yml": Format.YAML,
    "json": Format.JSON,
    "csv": Format.CSV,
    "sqlite": Format.SQLITE,
    "sqlite3": Format.SQLITE,
    "db": Format.SQLITE,
}

_EXTENSIONS = {
    ".yml": Format.YAML,
    ".yaml": Format.YAML,
    ".json": Format.JSON,
    ".csv": Format.CSV,
    ".db": Format.SQLITE,
    ".sqlite": Format.SQLITE,
    ".sqlite3": Format.SQLITE,
}


__all__ = ["Entry", "Format", "PathLike"]
