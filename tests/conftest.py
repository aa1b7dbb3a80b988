"""Shared fixtures: isolate each test from kv_store env vars and any kv_store.yaml in the cwd."""

from __future__ import annotations

import pytest

from kv_store.core.types import Format

_ENV_VARS = ("KV_STORE_CONFIG", "KV_STORE_FORMAT", "KV_STORE_SQLITE_TABLE", "KV_STORE_LOG_LEVEL")

SUFFIXES = {
    Format.YAML: ".yml",
    Format.JSON: ".json",
    Format.CSV: ".csv",
    Format.SQLITE: ".db",
}


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture(params=list(Format), ids=lambda f: f.value)
def fmt(request) -> Format:
    return request.param


@pytest.fixture
def db_path(tmp_path, fmt):
    return tmp_path / f"store{SUFFIXES[fmt]}"
