"""
YAML codec: a single top-level mapping of key -> value.
Scalars are read with the base loader, so every value keeps its literal text ("1" stays "1").
Repeated keys are a parse error rather than last-one-wins.
"""

from __future__ import annotations

from pathlib import Path

import yaml

from kv_store.core.errors import StoreParseError
from kv_store.core.store import Store
from kv_store.core.types import Format

from .codec import TextCodec


class _UniqueKeyLoader(yaml.BaseLoader):
    """Base loader that rejects a key repeated within one mapping."""

    def construct_mapping(self, node, deep=False):
        if isinstance(node, yaml.MappingNode):
            seen = set()
            for key_node, _ in node.value:
                key = self.construct_object(key_node, deep=deep)
                if not isinstance(key, str):
                    continue
                if key in seen:
                    raise yaml.constructor.ConstructorError(
                        "while constructing a mapping",
                        node.start_mark,
                        f"found duplicate key {key!r}",
                        key_node.start_mark,
                    )
                seen.add(key)
        return super().construct_mapping(node, deep=deep)


class YamlCodec(TextCodec):
    format = Format.YAML

    def _parse(self, text: str, path: Path) -> Store:
        try:
            data = yaml.load(text, Loader=_UniqueKeyLoader)
        except yaml.YAMLError as e:
            raise StoreParseError(str(path), f"invalid YAML ({e})") from e
        if not isinstance(data, dict):
            raise StoreParseError(str(path), "expected a mapping at top level")
        return self._store_from_pairs(data.items(), path)

    def _render(self, store: Store) -> str:
        return yaml.safe_dump(
            store.to_dict(),
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
        )
