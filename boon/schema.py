"""Schema bootstrap: make sure the report database and its tables exist.

Safe to run on every startup; a provisioned store gets no DDL at all.
"""
from __future__ import annotations

import logging
import sqlite3
from sqlite3 import Connection

from .db import StoreConfig, get_conn
from .errors import SchemaError, StoreConnectionError

logger = logging.getLogger(__name__)

# Ordered; the first failure aborts the rest.
DDL_STATEMENTS = [
    "PRAGMA encoding = 'UTF-8'",
    """
    CREATE TABLE IF NOT EXISTS reports (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        header TEXT NULL,
        description TEXT NULL,
        author TEXT NULL,
        lat REAL NULL,
        lon REAL NULL,
        community TEXT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS communities (
        name TEXT PRIMARY KEY,
        description TEXT NULL,
        tips TEXT NULL
    )
    """,
]


def has_table(conn: Connection, name: str) -> bool:
    row = conn.execute(
        "SELECT 1 FROM sqlite_master WHERE type='table' AND name=?", (name,)
    ).fetchone()
    return row is not None


def create_tables(conn: Connection):
    for stmt in DDL_STATEMENTS:
        try:
            conn.execute(stmt)
        except sqlite3.Error as e:
            raise SchemaError(stmt.strip(), e) from e


def ensure_schema(config: StoreConfig) -> None:
    """Create the database file and tables when either is missing."""
    if not config.exists():
        logger.info("database %s does not exist, creating it", config.path)
        try:
            with get_conn(config, create=True) as conn:
                create_tables(conn)
        except (sqlite3.Error, OSError) as e:
            raise StoreConnectionError(f"sqlite: could not create the database: {e}") from e
        return

    try:
        with get_conn(config) as conn:
            if has_table(conn, "reports"):
                return
            logger.info("table reports missing in %s, creating it", config.path)
            create_tables(conn)
    except sqlite3.Error as e:
        raise StoreConnectionError(f"sqlite: could not connect to the database: {e}") from e
