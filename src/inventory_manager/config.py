from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Dict, Optional

from dotenv import dotenv_values

from .logging import get_logger
from .paths import expand_abs, find_upwards

log = get_logger("config")


DEFAULT_DB_FILENAME = "inventory.db"
DEFAULT_API_HOST = "127.0.0.1"
DEFAULT_API_PORT = 8001


@dataclass
class InventoryConfig:
    db_path: str
    api_host: str = DEFAULT_API_HOST
    api_port: int = DEFAULT_API_PORT


def _read_dotenv(dotenv_dir: Optional[str]) -> Dict[str, str]:
    """Return key/value pairs from the nearest `.env` (environment untouched)."""
    path = find_upwards(dotenv_dir, ".env")
    if not path:
        log.debug(f"No .env found starting from: {os.path.abspath(dotenv_dir or '.')}")
        return {}
    try:
        values = dotenv_values(path)
    except OSError as e:
        log.warning(f"Failed reading .env: {e}")
        return {}
    env = {k: v.strip() for k, v in values.items() if v is not None}
    log.debug(f"Loaded {len(env)} key(s) from .env at {path}")
    return env


def _lookup(key: str, env: Dict[str, str]) -> Optional[str]:
    v = os.environ.get(key)
    if v and v.strip():
        return v.strip()
    v = env.get(key)
    return v if v else None


def _as_port(raw: Optional[str]) -> int:
    if raw is None:
        return DEFAULT_API_PORT
    try:
        port = int(raw)
    except ValueError:
        log.warning(f"Ignoring invalid INVENTORY_API_PORT={raw!r}; using {DEFAULT_API_PORT}")
        return DEFAULT_API_PORT
    if not 0 < port < 65536:
        log.warning(f"INVENTORY_API_PORT={port} out of range; using {DEFAULT_API_PORT}")
        return DEFAULT_API_PORT
    return port


def load_config(dotenv_dir: Optional[str] = None, *, db_path: Optional[str] = None) -> InventoryConfig:
    """Resolve settings from explicit overrides, the environment, then `.env`.

    The database path is relative to the working directory unless absolute.
    """
    env = _read_dotenv(dotenv_dir or os.getcwd())
    resolved_db = db_path or _lookup("INVENTORY_DB_PATH", env) or DEFAULT_DB_FILENAME
    cfg = InventoryConfig(
        db_path=expand_abs(resolved_db),
        api_host=_lookup("INVENTORY_API_HOST", env) or DEFAULT_API_HOST,
        api_port=_as_port(_lookup("INVENTORY_API_PORT", env)),
    )
    log.debug(f"Resolved configuration: {cfg}")
    return cfg
