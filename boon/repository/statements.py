from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from sqlite3 import Connection, Cursor

from ..errors import RowCountMismatchError, StatementExecutionError, StatementPrepareError

LIST_SQL = (
    "SELECT id, header, description, author, lat, lon, community "
    "FROM reports ORDER BY id ASC"
)

INSERT_SQL = (
    "INSERT INTO reports(header, description, author, lat, lon, community) "
    "VALUES(?,?,?,?,?,?)"
)

UPDATE_SQL = (
    "UPDATE reports SET header=?, description=?, author=?, lat=?, lon=?, community=? "
    "WHERE id=?"
)

DELETE_SQL = "DELETE FROM reports WHERE id=?"


class PreparedStatement:
    """
    A statement compiled once against a connection.

    sqlite3 keeps compiled statements in a per-connection cache keyed by the
    SQL text, so running the same text again reuses the compiled form.
    """

    def __init__(self, conn: Connection, name: str, sql: str):
        self.conn = conn
        self.name = name
        self.sql = sql
        self.param_count = sql.count("?")

    def prepare(self) -> "PreparedStatement":
        try:
            self.conn.execute("EXPLAIN " + self.sql, (None,) * self.param_count).fetchall()
        except sqlite3.Error as e:
            raise StatementPrepareError(self.name, e) from e
        return self

    def exec(self, *args) -> Cursor:
        try:
            return self.conn.execute(self.sql, args)
        except sqlite3.Error as e:
            raise StatementExecutionError(f"sqlite: could not execute statement: {e}") from e

    def query(self, *args) -> list[sqlite3.Row]:
        try:
            return self.conn.execute(self.sql, args).fetchall()
        except sqlite3.Error as e:
            raise StatementExecutionError(f"sqlite: could not execute query: {e}") from e


@dataclass
class Statements:
    list: PreparedStatement
    insert: PreparedStatement
    update: PreparedStatement
    delete: PreparedStatement

    @classmethod
    def prepare(cls, conn: Connection) -> "Statements":
        """Compile all four statements; the first failure raises StatementPrepareError."""
        return cls(
            list=PreparedStatement(conn, "list", LIST_SQL).prepare(),
            insert=PreparedStatement(conn, "insert", INSERT_SQL).prepare(),
            update=PreparedStatement(conn, "update", UPDATE_SQL).prepare(),
            delete=PreparedStatement(conn, "delete", DELETE_SQL).prepare(),
        )


def exec_affecting_one_row(stmt: PreparedStatement, *args) -> Cursor:
    cur = stmt.exec(*args)
    if cur.rowcount != 1:
        raise RowCountMismatchError(expected=1, got=cur.rowcount)
    return cur
