"""
Top-level CLI: kv-store [options] DATABASE {init,list,add,remove} [args...].
Each command is one decode -> (mutate) -> (encode) pass; package errors become exit codes.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, Dict, List, Optional

import yaml

from kv_store import config
from kv_store._version import __version__
from kv_store.commands import add_entry, init_store, list_entries, remove_entry
from kv_store.core.errors import KVStoreError, UnknownFormatError
from kv_store.core.types import Format
from kv_store.store.codec import Codec
from kv_store.store.registry import get_codec, resolve_format

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def _format_arg(value: str) -> Format:
    try:
        return Format.parse(value)
    except UnknownFormatError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="kv-store",
        description="Key/value store persisted as YAML, JSON, CSV, or SQLite.",
    )
    ap.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    ap.add_argument(
        "-f",
        "--format",
        type=_format_arg,
        default=None,
        help="Store format: yaml, json, csv, sqlite (default: from file extension)",
    )
    ap.add_argument(
        "--config",
        default=None,
        help="Config YAML (default: $KV_STORE_CONFIG or ./kv_store.yaml)",
    )
    ap.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=None,
        help="Log level (default: logging.level from config, WARNING)",
    )
    ap.add_argument("database", help="Path to the store file")

    sub = ap.add_subparsers(dest="command", metavar="command")
    sub.required = True
    sub.add_parser("init", help="Create a new store file (overwrites an existing one)")
    sub.add_parser("list", help="List all entries")
    p_add = sub.add_parser("add", help="Add a key, replacing its value if present")
    p_add.add_argument("key")
    p_add.add_argument("value")
    p_add.add_argument(
        "--no-overwrite",
        action="store_true",
        help="Fail instead of replacing the value of an existing key",
    )
    p_remove = sub.add_parser("remove", help="Remove a key")
    p_remove.add_argument("key")
    p_remove.add_argument(
        "--missing-ok",
        action="store_true",
        help="Succeed without changes when the key is absent",
    )
    return ap


def _configure_logging(level_name: str) -> None:
    level = getattr(logging, level_name, logging.WARNING)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr)
    logging.getLogger("kv_store").setLevel(level)


def _cmd_init(args: argparse.Namespace, path: Path, codec: Codec, cfg: dict) -> int:
    init_store(path, codec, seed=config.init_seed(cfg))
    print(f"Initialized {path}")
    return 0


def _cmd_list(args: argparse.Namespace, path: Path, codec: Codec, cfg: dict) -> int:
    entries = list_entries(path, codec)
    print(f"Database contains {len(entries)} entries")
    for key, value in entries:
        print(f" Key: {key:6}, Value: {value}")
    return 0


def _cmd_add(args: argparse.Namespace, path: Path, codec: Codec, cfg: dict) -> int:
    add_entry(path, codec, args.key, args.value, overwrite=not args.no_overwrite)
    print(f"Successfully added key/value {args.key}:{args.value}")
    return 0


def _cmd_remove(args: argparse.Namespace, path: Path, codec: Codec, cfg: dict) -> int:
    if remove_entry(path, codec, args.key, missing_ok=args.missing_ok):
        print(f"Successfully removed key '{args.key}'")
    else:
        print(f"Key '{args.key}' not present; nothing removed")
    return 0


_COMMANDS: Dict[str, Callable[[argparse.Namespace, Path, Codec, dict], int]] = {
    "init": _cmd_init,
    "list": _cmd_list,
    "add": _cmd_add,
    "remove": _cmd_remove,
}


def main(argv: Optional[List[str]] = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    args = build_parser().parse_args(argv)
    path = Path(args.database)

    try:
        cfg = config.get_config(args.config)
        _configure_logging(args.log_level or config.log_level(cfg))
    except (OSError, yaml.YAMLError) as e:
        print(f"config error: {e}", file=sys.stderr)
        return 1

    try:
        fmt = resolve_format(path, args.format, default=config.default_format(cfg))
        codec = get_codec(fmt, sqlite_table=config.sqlite_table(cfg))
        return _COMMANDS[args.command](args, path, codec, cfg)
    except KVStoreError as e:
        print(f"{args.command} failed: {e}", file=sys.stderr)
        return e.exit_code
    except ValueError as e:
        print(f"config error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
