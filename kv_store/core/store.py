"""
In-memory key/value store. No I/O; codecs in kv_store.store load and persist it.
"""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Union

from .errors import KeyNotFoundError
from .types import Entry


def _check_text(name: str, value: object) -> None:
    if not isinstance(value, str):
        raise TypeError(f"{name} must be str, got {type(value).__name__}")


class Store:
    """
    Mapping from string keys to string values.

    Insertion order is kept; overwriting a key keeps its original position.
    Equality compares entries only, not order.
    """

    def __init__(self, entries: Optional[Union[Mapping[str, str], Iterable[Entry]]] = None) -> None:
        self._data: Dict[str, str] = {}
        if entries is None:
            return
        items = entries.items() if isinstance(entries, Mapping) else entries
        for key, value in items:
            self.add(key, value)

    @classmethod
    def from_pairs(cls, pairs: Iterable[Entry]) -> "Store":
        return cls(pairs)

    def add(self, key: str, value: str) -> bool:
        """Insert or overwrite. Returns True if the key was new."""
        _check_text("key", key)
        _check_text("value", value)
        created = key not in self._data
        self._data[key] = value
        return created

    def remove(self, key: str) -> str:
        """Delete key and return its value. Raises KeyNotFoundError if absent."""
        try:
            return self._data.pop(key)
        except KeyError:
            raise KeyNotFoundError(key) from None

    def list(self) -> List[Entry]:
        return list(self._data.items())

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self._data.get(key, default)

    def to_dict(self) -> Dict[str, str]:
        return dict(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Store):
            return self._data == other._data
        if isinstance(other, Mapping):
            return self._data == dict(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"Store({self._data!r})"


__all__ = ["Store"]
