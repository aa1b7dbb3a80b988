"""
Shared exception types for kv_store.
Every error carries the process exit code the CLI returns for it.
"""

from __future__ import annotations


class KVStoreError(Exception):
    """Base exception for kv_store; catch this for any package-raised error."""

    exit_code = 1


class UnknownFormatError(KVStoreError, ValueError):
    """Format identifier does not name a supported codec."""

    exit_code = 2


class StoreNotFoundError(KVStoreError):
    """Store file does not exist."""

    exit_code = 3

    def __init__(self, path: str) -> None:
        super().__init__(f"Store file not found: {path}")
        self.path = path


class StoreParseError(KVStoreError):
    """Store file content is not valid for the selected format."""

    exit_code = 4

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Could not parse {path}: {reason}")
        self.path = path
        self.reason = reason


class KeyNotFoundError(KVStoreError):
    exit_code = 5

    def __init__(self, key: str) -> None:
        super().__init__(f"Key '{key}' does not exist in db")
        self.key = key


class KeyExistsError(KVStoreError):
    exit_code = 6

    def __init__(self, key: str) -> None:
        super().__init__(f"Key '{key}' already exists in db")
        self.key = key


class StoreIOError(KVStoreError):
    """Reading or writing the store file failed (permissions, disk, bad path)."""

    exit_code = 7

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"I/O error on {path}: {reason}")
        self.path = path
        self.reason = reason


__all__ = [
    "KVStoreError",
    "KeyExistsError",
    "KeyNotFoundError",
    "StoreIOError",
    "StoreNotFoundError",
    "StoreParseError",
    "UnknownFormatError",
]
