from __future__ import annotations

# boon/db.py
import logging
import os
import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator
from urllib.parse import quote

import yaml

from .errors import StoreConnectionError

logger = logging.getLogger(__name__)

# DB path resolution order:
# 1) env BOON_DB_PATH
# 2) config.yaml db_path
# 3) boon.db at the project root
_PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
_DEFAULT_DB = os.path.join(_PROJECT_ROOT, "boon.db")
DEFAULT_PORT = 8080


def _read_config_yaml() -> dict:
    cfg_path = os.path.join(_PROJECT_ROOT, "config.yaml")
    if not os.path.exists(cfg_path):
        return {}
    with open(cfg_path, "r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f) or {}
    out = {}
    v = cfg.get("db_path")
    if isinstance(v, str) and v.strip():
        out["db_path"] = v.strip()
    if cfg.get("db_timeout") is not None:
        out["db_timeout"] = float(cfg["db_timeout"])
    return out


@dataclass(frozen=True)
class StoreConfig:
    """Where the report store lives.

    ``path`` is the database file; its absence means the database has not
    been provisioned yet. ``timeout`` is the driver's busy timeout in seconds.
    """

    path: str
    timeout: float = 5.0

    def dsn(self, mode: str = "rw") -> str:
        """SQLite URI for this store. ``rw`` refuses to create a missing file, ``rwc`` creates it."""
        return f"file:{quote(str(Path(self.path).resolve()))}?mode={mode}"

    def exists(self) -> bool:
        return os.path.exists(self.path)


def get_db_path() -> str:
    env_path = os.environ.get("BOON_DB_PATH")
    if env_path:
        return env_path
    return _read_config_yaml().get("db_path") or _DEFAULT_DB


def load_config() -> StoreConfig:
    cfg = _read_config_yaml()
    return StoreConfig(path=get_db_path(), timeout=cfg.get("db_timeout", 5.0))


def listen_port() -> int:
    return int(os.environ.get("PORT") or DEFAULT_PORT)


def _connect(config: StoreConfig, mode: str) -> sqlite3.Connection:
    conn = sqlite3.connect(
        config.dsn(mode),
        uri=True,
        timeout=config.timeout,
        check_same_thread=False,
        isolation_level=None,
    )
    conn.row_factory = sqlite3.Row
    return conn


def open_conn(config: StoreConfig) -> sqlite3.Connection:
    """
    Open the shared connection handle and verify it with a round-trip.
    The database must already exist (see boon.schema.ensure_schema).
    """
    try:
        conn = _connect(config, "rw")
    except sqlite3.Error as e:
        raise StoreConnectionError(f"sqlite: could not get a connection: {e}") from e
    try:
        conn.execute("SELECT 1").fetchone()
    except sqlite3.Error as e:
        conn.close()
        raise StoreConnectionError(f"sqlite: could not establish a good connection: {e}") from e
    logger.info("connected to %s", config.path)
    return conn


def close_conn(conn: sqlite3.Connection) -> None:
    conn.close()


@contextmanager
def get_conn(config: StoreConfig, create: bool = False) -> Iterator[sqlite3.Connection]:
    """
    Short-lived connection, closed on exit. With ``create`` the database file
    (and its directory) is created when missing.
    """
    if create:
        os.makedirs(os.path.dirname(os.path.abspath(config.path)) or ".", exist_ok=True)
    conn = _connect(config, "rwc" if create else "rw")
    try:
        yield conn
    finally:
        conn.close()
