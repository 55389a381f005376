"""Repository layer: report persistence over SQLite.

Keep SQL strings here so routes only see Report objects.
"""
from __future__ import annotations

from .report_repo import ReportRepository, open_repository
from .statements import PreparedStatement, Statements, exec_affecting_one_row

__all__ = [
    "ReportRepository",
    "open_repository",
    "PreparedStatement",
    "Statements",
    "exec_affecting_one_row",
]
