"""
SQLite codec: schema creation, clear-and-reinsert, read-only decode, foreign schemas.
"""

from __future__ import annotations

import sqlite3

import pytest

from kv_store.core.errors import StoreNotFoundError, StoreParseError
from kv_store.core.store import Store
from kv_store.store import SqliteCodec
from kv_store.store.sqlite_session import sqlite_conn


def _tables(path) -> set:
    with sqlite_conn(path) as conn:
        return {r[0] for r in conn.execute("SELECT name FROM sqlite_master WHERE type='table'")}


def test_encode_creates_kvstore_table(tmp_path):
    path = tmp_path / "s.db"
    SqliteCodec().encode(Store({"a": "1"}), path)
    assert "kvstore" in _tables(path)
    with sqlite_conn(path) as conn:
        cols = [r[1] for r in conn.execute("PRAGMA table_info(kvstore)")]
        rows = conn.execute("SELECT key, value FROM kvstore").fetchall()
    assert cols == ["id", "key", "value"]
    assert rows == [("a", "1")]


def test_encode_clears_and_reinserts(tmp_path):
    path = tmp_path / "s.db"
    codec = SqliteCodec()
    codec.encode(Store({"a": "1", "b": "2"}), path)
    codec.encode(Store({"b": "20", "c": "3"}), path)
    with sqlite_conn(path) as conn:
        rows = conn.execute("SELECT key, value FROM kvstore ORDER BY id").fetchall()
    assert rows == [("b", "20"), ("c", "3")]


def test_encode_leaves_other_tables_alone(tmp_path):
    path = tmp_path / "s.db"
    with sqlite_conn(path) as conn:
        conn.execute("CREATE TABLE notes (body TEXT)")
        conn.execute("INSERT INTO notes (body) VALUES ('keep me')")
        conn.commit()
    SqliteCodec().encode(Store({"a": "1"}), path)
    with sqlite_conn(path) as conn:
        assert conn.execute("SELECT body FROM notes").fetchall() == [("keep me",)]


def test_decode_missing_file_does_not_create_it(tmp_path):
    path = tmp_path / "absent.db"
    with pytest.raises(StoreNotFoundError):
        SqliteCodec().decode(path)
    assert not path.exists()


def test_decode_without_table_raises_parse_error(tmp_path):
    path = tmp_path / "s.db"
    with sqlite_conn(path) as conn:
        conn.execute("CREATE TABLE other (x INTEGER)")
        conn.commit()
    with pytest.raises(StoreParseError) as exc:
        SqliteCodec().decode(path)
    assert "kvstore" in str(exc.value)


def test_decode_empty_file_raises_parse_error(tmp_path):
    path = tmp_path / "s.db"
    path.write_bytes(b"")
    with pytest.raises(StoreParseError):
        SqliteCodec().decode(path)


def test_decode_foreign_schema_with_null_value_raises_parse_error(tmp_path):
    path = tmp_path / "s.db"
    with sqlite_conn(path) as conn:
        conn.execute("CREATE TABLE kvstore (key TEXT, value TEXT)")
        conn.execute("INSERT INTO kvstore VALUES ('a', NULL)")
        conn.commit()
    with pytest.raises(StoreParseError):
        SqliteCodec().decode(path)


def test_decode_foreign_schema_with_duplicate_keys_raises_parse_error(tmp_path):
    path = tmp_path / "s.db"
    with sqlite_conn(path) as conn:
        conn.execute("CREATE TABLE kvstore (key TEXT, value TEXT)")
        conn.executemany("INSERT INTO kvstore VALUES (?, ?)", [("a", "1"), ("a", "2")])
        conn.commit()
    with pytest.raises(StoreParseError) as exc:
        SqliteCodec().decode(path)
    assert "duplicate key 'a'" in str(exc.value)


def test_custom_table_name(tmp_path):
    path = tmp_path / "s.db"
    codec = SqliteCodec(table="settings")
    codec.encode(Store({"theme": "dark"}), path)
    assert codec.decode(path) == {"theme": "dark"}
    assert _tables(path) >= {"settings"}
    with pytest.raises(StoreParseError):
        SqliteCodec().decode(path)


@pytest.mark.parametrize("table", ["", "1abc", "kv; DROP TABLE x", "kv-store"])
def test_invalid_table_name_rejected(table):
    with pytest.raises(ValueError):
        SqliteCodec(table=table)


def test_sqlite_conn_read_only_rejects_writes(tmp_path):
    path = tmp_path / "s.db"
    SqliteCodec().encode(Store({"a": "1"}), path)
    with sqlite_conn(path, read_only=True) as conn:
        with pytest.raises(sqlite3.OperationalError):
            conn.execute("DELETE FROM kvstore")
