"""
JSON codec: a single object of key -> string value.
"""

from __future__ import annotations

import json
from pathlib import Path

from kv_store.core.errors import StoreParseError
from kv_store.core.store import Store
from kv_store.core.types import Format

from .codec import TextCodec


class _Pairs(list):
    """Decoded JSON object kept as ordered pairs so repeated keys stay visible."""


class JsonCodec(TextCodec):
    format = Format.JSON

    def _parse(self, text: str, path: Path) -> Store:
        try:
            data = json.loads(text, object_pairs_hook=_Pairs)
        except json.JSONDecodeError as e:
            raise StoreParseError(str(path), f"invalid JSON ({e})") from e
        if not isinstance(data, _Pairs):
            raise StoreParseError(str(path), "expected an object at top level")
        return self._store_from_pairs(data, path)

    def _render(self, store: Store) -> str:
        return json.dumps(store.to_dict(), indent=2, ensure_ascii=False) + "\n"
