from __future__ import annotations


class StoreError(Exception):
    """Base class for every failure raised by the data-access layer."""


class StoreConnectionError(StoreError):
    """The store could not be opened or did not answer the liveness check."""


class SchemaError(StoreError):
    def __init__(self, statement: str, cause: Exception):
        self.statement = statement
        super().__init__(f"sqlite: could not create schema: {cause}")


class StatementPrepareError(StoreError):
    def __init__(self, name: str, cause: Exception):
        self.name = name
        super().__init__(f"sqlite: prepare {name}: {cause}")


class StatementExecutionError(StoreError):
    pass


class RowCountMismatchError(StoreError):
    """A mutating statement ran cleanly but did not touch exactly the expected rows."""

    def __init__(self, expected: int, got: int):
        self.expected = expected
        self.got = got
        super().__init__(f"sqlite: expected {expected} row affected, got {got}")


class InvalidReportIdError(StoreError, ValueError):
    pass
