"""Codec failure modes: missing file, malformed content, write failures leave the file intact."""

from __future__ import annotations

import os
import stat
from pathlib import Path

import pytest

from kv_store.core.errors import StoreIOError, StoreNotFoundError, StoreParseError
from kv_store.core.store import Store
from kv_store.core.types import Format
from kv_store.store import get_codec


def test_decode_missing_file_raises_not_found(fmt, db_path):
    with pytest.raises(StoreNotFoundError) as exc:
        get_codec(fmt).decode(db_path)
    assert exc.value.path == str(db_path)
    assert not db_path.exists()


def test_decode_directory_raises_io_error(fmt, tmp_path):
    target = tmp_path / "adir"
    target.mkdir()
    with pytest.raises(StoreIOError):
        get_codec(fmt).decode(target)


_MALFORMED = {
    Format.YAML: [
        "a: [1, 2\n",
        "- a\n- b\n",
        "",
        "a:\n  nested: value\n",
        "a: '1'\na: '2'\n",
    ],
    Format.JSON: [
        "{not json",
        "[1, 2]",
        '{"a": 1}',
        '{"a": "1", "a": "2"}',
        '{"a": {"b": "c"}}',
    ],
    Format.CSV: [
        "",
        "name,other\nx,y\n",
        "key,value\na,1\nb,2,3\n",
        "key,value\na,1\na,2\n",
        "value,key\n1,a\n",
    ],
}


@pytest.mark.parametrize(
    "fmt,content",
    [(fmt, content) for fmt, cases in _MALFORMED.items() for content in cases],
)
def test_decode_malformed_text_raises_parse_error(tmp_path, fmt, content):
    path = tmp_path / "bad.txt"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(StoreParseError) as exc:
        get_codec(fmt).decode(path)
    assert exc.value.path == str(path)


def test_decode_non_utf8_raises_parse_error(tmp_path):
    path = tmp_path / "bad.json"
    path.write_bytes(b'{"a": "\xff\xfe"}')
    with pytest.raises(StoreParseError):
        get_codec("json").decode(path)


def test_decode_garbage_as_sqlite_raises_parse_error(tmp_path):
    path = tmp_path / "bad.db"
    path.write_text("this is definitely not a sqlite database\n" * 20, encoding="utf-8")
    with pytest.raises(StoreParseError):
        get_codec("sqlite").decode(path)


@pytest.mark.parametrize("fmt", [Format.YAML, Format.JSON, Format.CSV], ids=lambda f: f.value)
def test_failed_replace_keeps_existing_file(tmp_path, monkeypatch, fmt):
    path = tmp_path / "store.dat"
    codec = get_codec(fmt)
    codec.encode(Store({"a": "1"}), path)
    before = path.read_bytes()

    def _fail_replace(self, target):
        raise OSError(28, "No space left on device")

    monkeypatch.setattr(Path, "replace", _fail_replace)
    with pytest.raises(StoreIOError) as exc:
        codec.encode(Store({"a": "2", "b": "3"}), path)
    assert "No space left" in str(exc.value)
    assert path.read_bytes() == before
    assert not (tmp_path / "store.dat.tmp").exists()


def test_encode_into_missing_directory_raises_io_error(fmt, tmp_path):
    path = tmp_path / "missing" / "store.dat"
    with pytest.raises(StoreIOError):
        get_codec(fmt).encode(Store({"a": "1"}), path)
    assert not path.parent.exists()


def test_sqlite_encode_over_non_database_keeps_file(tmp_path):
    path = tmp_path / "notes.db"
    content = b"plain text notes, not a database\n" * 20
    path.write_bytes(content)
    with pytest.raises(StoreIOError):
        get_codec("sqlite").encode(Store({"a": "1"}), path)
    assert path.read_bytes() == content


def test_encode_keeps_file_mode(fmt, db_path):
    codec = get_codec(fmt)
    codec.encode(Store({"a": "1"}), db_path)
    os.chmod(db_path, 0o600)
    codec.encode(Store({"a": "2"}), db_path)
    assert stat.S_IMODE(db_path.stat().st_mode) == 0o600
    assert codec.decode(db_path) == {"a": "2"}


def test_encode_through_symlink_updates_link_target(fmt, tmp_path):
    codec = get_codec(fmt)
    real = tmp_path / "real.dat"
    link = tmp_path / "link.dat"
    codec.encode(Store({"a": "1"}), real)
    link.symlink_to(real)
    codec.encode(Store({"a": "2"}), link)
    assert link.is_symlink()
    assert codec.decode(real) == {"a": "2"}
    assert not (tmp_path / "link.dat.tmp").exists()
    assert not (tmp_path / "real.dat.tmp").exists()
