"""
SQLite connection lifecycle: context manager with guaranteed close and foreign_keys=ON.
Read-only connections never create the database file.
"""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Union


@contextmanager
def sqlite_conn(
    db_path: Union[str, Path], *, read_only: bool = False
) -> Generator[sqlite3.Connection, None, None]:
    """
    Yield a SQLite connection that is always closed on exit.
    read_only=True opens with mode=ro; a missing file raises sqlite3.OperationalError.
    """
    path = Path(db_path).resolve()
    if read_only:
        conn = sqlite3.connect(f"{path.as_uri()}?mode=ro", uri=True)
    else:
        conn = sqlite3.connect(str(path))
    try:
        conn.execute("PRAGMA foreign_keys = ON")
        conn.commit()
        yield conn
    finally:
        conn.close()
