"""
SQLite adapter over the standard library ``sqlite3`` module.
"""

from __future__ import annotations

import sqlite3
from typing import Any, Sequence

from ..dialects.sqlite import SQLiteDialect
from .base import (
    AdapterConnectionError,
    AdapterExecutionError,
    AdapterTransactionError,
    ConnectionConfig,
    DatabaseAdapter,
)

_MEMORY_URLS = {":memory:", "sqlite://", "sqlite:///:memory:", "sqlite3:///:memory:", "sqlite::memory:"}
_PATH_PREFIXES = ("sqlite:///", "sqlite3:///", "sqlite:")


class SQLiteAdapter(DatabaseAdapter):
    """
    Rows come back as ``sqlite3.Row`` and foreign keys are enforced.

    The connection runs in the legacy isolation mode so ``begin`` issues the
    ``BEGIN`` itself; autocommit configs open with ``isolation_level=None``.
    """

    backend = "sqlite"

    def __init__(self, slow_query_ms: int | None = None) -> None:
        super().__init__(SQLiteDialect(), slow_query_ms=slow_query_ms)

    def _open(self, config: ConnectionConfig) -> sqlite3.Connection:
        path = self.normalize_path(config.url)
        try:
            connection = sqlite3.connect(
                path,
                isolation_level=None if config.autocommit else "",
                timeout=5.0 if config.timeout is None else config.timeout,
                check_same_thread=False,
            )
        except sqlite3.Error as exc:
            raise AdapterConnectionError(f"Failed to open SQLite database {path!r}.") from exc
        if config.isolation_level:
            connection.isolation_level = config.isolation_level
        connection.row_factory = sqlite3.Row
        connection.execute("PRAGMA foreign_keys = ON")
        self.logger.info("Opened SQLite database %s", path)
        return connection

    def _check_params(self, sql: str, params: Sequence[Any]) -> None:
        # sqlite3 reports qmark mismatches itself
        return None

    def _execute(self, cursor: sqlite3.Cursor, sql: str, params: Sequence[Any]) -> None:
        try:
            cursor.execute(sql, tuple(params))
        except sqlite3.ProgrammingError as exc:
            raise AdapterExecutionError(str(exc)) from exc

    def begin(self) -> None:
        connection = self._ensure_connection()
        if connection.in_transaction:
            raise AdapterTransactionError("A transaction is already active on this connection.")
        connection.execute(self.begin_statement)

    @staticmethod
    def normalize_path(url: str) -> str:
        """
        Filename for ``sqlite3.connect`` from ``sqlite:///path``,
        ``sqlite3:///path`` or ``jdbc:sqlite:path`` URLs.
        """
        text = url.strip()
        if text.lower().startswith("jdbc:"):
            text = text[len("jdbc:") :]
        if text in _MEMORY_URLS:
            return ":memory:"
        for prefix in _PATH_PREFIXES:
            if text.startswith(prefix):
                return text[len(prefix) :]
        return text
