"""
SQLite codec: one table of (id, key, value) rows in a file-backed database.
Encode is clear-and-reinsert inside a single transaction; other tables are left alone.
"""

from __future__ import annotations

import logging
import re
import sqlite3
from pathlib import Path

from kv_store.core.errors import StoreIOError, StoreNotFoundError, StoreParseError
from kv_store.core.store import Store
from kv_store.core.types import Format, PathLike

from .codec import Codec
from .sqlite_session import sqlite_conn

logger = logging.getLogger(__name__)

DEFAULT_TABLE = "kvstore"
_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class SqliteCodec(Codec):
    """
    Store persisted in table `table` (default kvstore):
        id INTEGER PRIMARY KEY AUTOINCREMENT, key TEXT UNIQUE NOT NULL, value TEXT NOT NULL
    Rows are read back in insertion (rowid) order.
    """

    format = Format.SQLITE

    def __init__(self, table: str = DEFAULT_TABLE) -> None:
        if not _IDENTIFIER.match(table):
            raise ValueError(f"Invalid SQLite table name: {table!r}")
        self.table = table

    def __repr__(self) -> str:
        return f"SqliteCodec(table={self.table!r})"

    def decode(self, path: PathLike) -> Store:
        path = Path(path)
        if not path.exists():
            raise StoreNotFoundError(str(path))
        if path.is_dir():
            raise StoreIOError(str(path), "is a directory")
        try:
            with sqlite_conn(path, read_only=True) as conn:
                rows = conn.execute(
                    f"SELECT key, value FROM {self.table} ORDER BY rowid"
                ).fetchall()
        except sqlite3.OperationalError as e:
            if "unable to open" in str(e):
                raise StoreIOError(str(path), str(e)) from e
            raise StoreParseError(str(path), str(e)) from e
        except sqlite3.DatabaseError as e:
            raise StoreParseError(str(path), str(e)) from e
        store = self._store_from_pairs(rows, path)
        logger.debug("Decoded %d entries from %s (table %s)", len(store), path, self.table)
        return store

    def encode(self, store: Store, path: PathLike) -> None:
        path = Path(path)
        try:
            with sqlite_conn(path) as conn:
                with conn:
                    conn.execute("BEGIN")
                    conn.execute(
                        f"""
                        CREATE TABLE IF NOT EXISTS {self.table} (
                            id INTEGER PRIMARY KEY AUTOINCREMENT NOT NULL,
                            key TEXT UNIQUE NOT NULL,
                            value TEXT NOT NULL
                        )
                        """
                    )
                    conn.execute(f"DELETE FROM {self.table}")
                    conn.executemany(
                        f"INSERT INTO {self.table} (key, value) VALUES (?, ?)",
                        store.list(),
                    )
        except sqlite3.Error as e:
            raise StoreIOError(str(path), str(e)) from e
        logger.debug("Encoded %d entries to %s (table %s)", len(store), path, self.table)
