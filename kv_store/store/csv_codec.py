"""
CSV codec: header row key,value then one CRLF-terminated row per entry; row order is store order.
All cells are read as text; NA conversion is off so "NA" and "" survive a round-trip.
"""

from __future__ import annotations

import io
import warnings
from pathlib import Path

import pandas as pd

from kv_store.core.errors import StoreParseError
from kv_store.core.store import Store
from kv_store.core.types import Format

from .codec import TextCodec

HEADER = ["key", "value"]


class CsvCodec(TextCodec):
    format = Format.CSV

    def _parse(self, text: str, path: Path) -> Store:
        try:
            # Rows wider than the header only warn by default; treat them as malformed.
            with warnings.catch_warnings():
                warnings.simplefilter("error", pd.errors.ParserWarning)
                df = pd.read_csv(
                    io.StringIO(text),
                    dtype=str,
                    keep_default_na=False,
                    index_col=False,
                )
        except (ValueError, pd.errors.ParserWarning) as e:
            raise StoreParseError(str(path), f"invalid CSV ({e})") from e
        columns = [str(c) for c in df.columns]
        if columns != HEADER:
            raise StoreParseError(
                str(path), f"expected header {','.join(HEADER)}, got {','.join(columns)}"
            )
        if df.isna().any().any():
            raise StoreParseError(str(path), "row with missing cells")
        return self._store_from_pairs(zip(df["key"].tolist(), df["value"].tolist()), path)

    def _render(self, store: Store) -> str:
        df = pd.DataFrame(store.list(), columns=HEADER)
        # CRLF terminator makes the writer quote any cell holding \r or \n.
        return df.to_csv(index=False, lineterminator="\r\n")
