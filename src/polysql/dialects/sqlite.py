"""
SQLite dialect implementation.
"""

from __future__ import annotations

from typing import Final

from .base import Dialect, DialectCapabilities
from .drivers import DriverType


class SQLiteDialect(Dialect):
    """
    SQLite dialect using qmark param style and minimal capabilities.
    """

    name: Final[str] = "sqlite"
    driver: Final[DriverType] = DriverType.SQLITE
    param_style: Final[str] = "qmark"
    quote_char: Final[str] = "`"
    capabilities: Final[DialectCapabilities] = DialectCapabilities(
        supports_returning=True,
        supports_savepoints=True,
        supports_partial_indexes=True,
        supports_schema_namespaces=False,
        supports_databases=False,
        supports_database_if_not_exists=False,
        supports_right_join=False,
        supports_multi_table_drop=False,
        supports_truncate=False,
        supports_row_locking=False,
    )
    autoincrement_types = frozenset({"INTEGER"})

    def limit_clause(self, limit: int | None, offset: int | None) -> str:
        parts: list[str] = []
        if limit is not None:
            parts.append(f"LIMIT {limit}")
        if offset is not None:
            if limit is None:
                parts.append("LIMIT -1")
            parts.append(f"OFFSET {offset}")
        return " ".join(parts)

    def parameter_placeholder(self, position: int | None = None) -> str:
        return "?"

    def autoincrement_clause(
        self, logical_name: str, *, parameter: object = None, unsigned: bool = False
    ) -> str | None:
        # AUTOINCREMENT only attaches to the rowid alias: a bare INTEGER.
        if logical_name.upper() != "INTEGER" or parameter is not None or unsigned:
            return None
        return "PRIMARY KEY AUTOINCREMENT"


def get_sqlite_dialect() -> Dialect:
    return SQLiteDialect()
