"""
Codec registry: maps each Format to its Codec class and resolves the codec for a file.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional, Type, Union

from kv_store.core.types import Format, PathLike

from .codec import Codec
from .csv_codec import CsvCodec
from .json_codec import JsonCodec
from .sqlite_codec import DEFAULT_TABLE, SqliteCodec
from .yaml_codec import YamlCodec

logger = logging.getLogger(__name__)

CODECS: Dict[Format, Type[Codec]] = {
    Format.YAML: YamlCodec,
    Format.JSON: JsonCodec,
    Format.CSV: CsvCodec,
    Format.SQLITE: SqliteCodec,
}


def get_codec(fmt: Union[str, Format], *, sqlite_table: Optional[str] = None) -> Codec:
    """Instantiate the codec for fmt. sqlite_table only applies to the SQLite codec."""
    fmt = Format.parse(fmt)
    if fmt is Format.SQLITE:
        return SqliteCodec(table=sqlite_table or DEFAULT_TABLE)
    return CODECS[fmt]()


def resolve_format(
    path: PathLike,
    fmt: Optional[Union[str, Format]] = None,
    *,
    default: Union[str, Format] = Format.YAML,
) -> Format:
    """
    Explicit fmt wins; otherwise detect from the file extension.
    Unrecognized extensions fall back to default with a warning.
    """
    if fmt is not None:
        return Format.parse(fmt)
    detected = Format.from_path(path)
    if detected is not None:
        return detected
    fallback = Format.parse(default)
    logger.warning("Could not determine format of %s, falling back to %s", path, fallback.value)
    return fallback
