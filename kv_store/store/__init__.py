"""
Store persistence: one codec per format (YAML, JSON, CSV, SQLite).
No business logic; commands in kv_store.commands drive decode -> mutate -> encode.
"""

from __future__ import annotations

from .codec import Codec, TextCodec
from .csv_codec import CsvCodec
from .json_codec import JsonCodec
from .registry import CODECS, get_codec, resolve_format
from .sqlite_codec import SqliteCodec
from .yaml_codec import YamlCodec

__all__ = [
    "CODECS",
    "Codec",
    "CsvCodec",
    "JsonCodec",
    "SqliteCodec",
    "TextCodec",
    "YamlCodec",
    "get_codec",
    "resolve_format",
]
