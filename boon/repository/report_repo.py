from __future__ import annotations

import logging
import sqlite3
import threading
from sqlite3 import Connection

from ..db import StoreConfig, close_conn, open_conn
from ..errors import InvalidReportIdError, StatementExecutionError, StoreConnectionError
from ..models import Report
from ..schema import ensure_schema
from .statements import Statements, exec_affecting_one_row

logger = logging.getLogger(__name__)


class ReportRepository:
    """Persists reports through four statements prepared at construction."""

    def __init__(self, conn: Connection, statements: Statements):
        self.conn = conn
        self.stmts = statements
        self._closed = False
        # lastrowid and rowcount belong to the connection; one writer at a time
        self._write_lock = threading.Lock()

    def add(self, report: Report) -> int:
        """Insert ``report`` (its id is ignored) and return the id the store assigned."""
        with self._write_lock:
            cur = exec_affecting_one_row(
                self.stmts.insert,
                report.header,
                report.description,
                report.author,
                report.lat,
                report.lon,
                report.community,
            )
            new_id = cur.lastrowid
        if not new_id:
            raise StatementExecutionError("sqlite: could not get last insert ID")
        logger.debug("added report id=%s", new_id)
        return int(new_id)

    def list(self) -> list[Report]:
        rows = self.stmts.list.query()
        out: list[Report] = []
        for r in rows:
            try:
                out.append(Report.from_row(r))
            except (KeyError, TypeError, ValueError) as e:
                raise StatementExecutionError(f"sqlite: could not read row: {e}") from e
        return out

    def update(self, report: Report) -> None:
        if not report.id:
            raise InvalidReportIdError("sqlite: report with unassigned ID passed into update")
        with self._write_lock:
            exec_affecting_one_row(
                self.stmts.update,
                report.header,
                report.description,
                report.author,
                report.lat,
                report.lon,
                report.community,
                report.id,
            )
        logger.debug("updated report id=%s", report.id)

    def delete(self, report_id: int) -> None:
        if not report_id:
            raise InvalidReportIdError("sqlite: report with unassigned ID passed into delete")
        with self._write_lock:
            exec_affecting_one_row(self.stmts.delete, report_id)
        logger.debug("deleted report id=%s", report_id)

    def ping(self) -> None:
        """Round-trip to the store; raises StoreConnectionError when it does not answer."""
        try:
            self.conn.execute("SELECT 1").fetchone()
        except sqlite3.Error as e:
            raise StoreConnectionError(f"sqlite: store did not answer: {e}") from e

    def close(self) -> None:
        if self._closed:
            logger.warning("report repository already closed")
            return
        self._closed = True
        close_conn(self.conn)


def open_repository(config: StoreConfig) -> ReportRepository:
    """
    Bootstrap the schema, open the shared connection and prepare the
    statements. Raises a StoreError subclass on any failure; the caller
    decides whether that ends the process.
    """
    ensure_schema(config)
    conn = open_conn(config)
    try:
        stmts = Statements.prepare(conn)
    except Exception:
        close_conn(conn)
        raise
    return ReportRepository(conn, stmts)
