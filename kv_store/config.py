"""
Load config from kv_store.yaml with optional env overrides.
Single source of truth for the fallback format, SQLite table, init seed, and log level.
"""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

logger = logging.getLogger(__name__)

# Defaults if no YAML or env
_DEFAULTS: Dict[str, Any] = {
    "format": {"default": "yaml"},
    "sqlite": {"table": "kvstore"},
    "init": {"seed": {}},
    "logging": {"level": "WARNING"},
}

CONFIG_ENV = "KV_STORE_CONFIG"
CONFIG_FILENAME = "kv_store.yaml"


def _config_yaml_path(config_path: Optional[Union[str, Path]] = None) -> Optional[Path]:
    """Explicit path, else $KV_STORE_CONFIG, else kv_store.yaml in the working directory."""
    if config_path is not None:
        return Path(config_path)
    env_path = os.environ.get(CONFIG_ENV)
    if env_path:
        return Path(env_path)
    local = Path.cwd() / CONFIG_FILENAME
    return local if local.exists() else None


def _load_yaml(config_path: Optional[Union[str, Path]] = None) -> dict:
    path = _config_yaml_path(config_path)
    if path is None or not path.exists():
        return {}
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if not isinstance(data, dict):
        logger.warning("Ignoring config %s: expected a mapping at top level", path)
        return {}
    # Sections must stay mappings so accessors can index into them.
    for section in _DEFAULTS:
        if section in data and not isinstance(data[section], dict):
            logger.warning("Ignoring config %s: section '%s' must be a mapping", path, section)
            del data[section]
    return data


def _deep_merge(base: dict, override: dict) -> dict:
    out = dict(base)
    for k, v in override.items():
        if k in out and isinstance(out[k], dict) and isinstance(v, dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = v
    return out


def _env_overrides() -> dict:
    overrides: dict = {}
    fmt = os.environ.get("KV_STORE_FORMAT")
    if fmt:
        overrides.setdefault("format", {})["default"] = fmt
    table = os.environ.get("KV_STORE_SQLITE_TABLE")
    if table:
        overrides.setdefault("sqlite", {})["table"] = table
    level = os.environ.get("KV_STORE_LOG_LEVEL")
    if level:
        overrides.setdefault("logging", {})["level"] = level
    return overrides


def get_config(config_path: Optional[Union[str, Path]] = None) -> dict:
    """Return merged config: defaults <- kv_store.yaml <- env."""
    merged = _deep_merge(_DEFAULTS, _load_yaml(config_path))
    merged = _deep_merge(merged, _env_overrides())
    return merged


# Convenience accessors; pass a dict from get_config() to avoid re-reading the file.
def default_format(cfg: Optional[dict] = None) -> str:
    cfg = get_config() if cfg is None else cfg
    return str(cfg["format"]["default"])


def sqlite_table(cfg: Optional[dict] = None) -> str:
    cfg = get_config() if cfg is None else cfg
    return str(cfg["sqlite"]["table"])


def init_seed(cfg: Optional[dict] = None) -> Dict[str, str]:
    cfg = get_config() if cfg is None else cfg
    seed = cfg["init"].get("seed") or {}
    if not isinstance(seed, dict):
        logger.warning("Ignoring init.seed: expected a mapping, got %s", type(seed).__name__)
        return {}
    return {str(k): str(v) for k, v in seed.items()}


def log_level(cfg: Optional[dict] = None) -> str:
    cfg = get_config() if cfg is None else cfg
    return str(cfg["logging"]["level"]).upper()
