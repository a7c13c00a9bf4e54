"""
INSERT builder with per-dialect IGNORE and upsert syntax.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping

from ...dialects.drivers import DriverType
from ...errors import FeatureNotSupportedError, MissingRequiredFieldError, QueryConfigurationError
from ..clauses import InsertMethod
from ..compiler import SQLCompiler
from .base import QueryProvider, join_parts


class InsertQueryProvider(QueryProvider):
    """
    ``INSERT INTO t (cols) VALUES (...)[, (...)]`` plus IGNORE/upsert variants.

    ``INSERT_IGNORE`` renders ``INSERT IGNORE`` (MySQL), ``INSERT OR IGNORE``
    (SQLite) or ``ON CONFLICT DO NOTHING`` (PostgreSQL). ``INSERT_OR_UPDATE``
    renders ``ON DUPLICATE KEY UPDATE`` (MySQL) or ``ON CONFLICT ... DO UPDATE``
    and updates every column outside the conflict target.
    """

    statement_kind = "insert"

    def __init__(self, table: str | None = None) -> None:
        super().__init__()
        self.table_name = table
        self.rows: List[Dict[str, Any]] = []
        self.insert_method = InsertMethod.INSERT
        self.conflict_columns: List[str] = []
        self.update_columns: List[str] | None = None
        self.returning_columns: List[str] = []
        if table is not None:
            self._configured()

    # Configuration ------------------------------------------------------
    def table(self, name: str) -> "InsertQueryProvider":
        self.table_name = name
        return self._configured()

    def entry(self, column: str, value: Any) -> "InsertQueryProvider":
        """Set ``column`` on the current (last) row."""
        if not self.rows:
            self.rows.append({})
        self.rows[-1][column] = value
        return self._configured()

    def values(self, row: Mapping[str, Any] | None = None, **columns: Any) -> "InsertQueryProvider":
        """Append a new row."""
        data = dict(row or {})
        data.update(columns)
        self.rows.append(data)
        return self._configured()

    def method(self, method: InsertMethod) -> "InsertQueryProvider":
        self.insert_method = method
        return self._configured()

    def on_conflict(self, *columns: str) -> "InsertQueryProvider":
        self.conflict_columns = list(columns)
        return self._configured()

    def update_on_conflict(self, *columns: str) -> "InsertQueryProvider":
        """Restrict which columns an upsert overwrites."""
        self.update_columns = list(columns)
        return self._configured()

    def returning(self, *columns: str) -> "InsertQueryProvider":
        self.returning_columns = list(columns)
        return self._configured()

    def returns_rows(self) -> bool:
        return bool(self.returning_columns)

    # Rendering ----------------------------------------------------------
    def _render(self, compiler: SQLCompiler) -> str:
        if not self.table_name:
            raise MissingRequiredFieldError("table", "Table name is required.")
        if not self.rows or not self.rows[0]:
            raise MissingRequiredFieldError("entries", "INSERT needs at least one column value.")
        columns = list(self.rows[0])
        for row in self.rows[1:]:
            if list(row) != columns:
                raise QueryConfigurationError("Every INSERT row must set the same columns in the same order.")

        method = self.insert_method
        if method is not InsertMethod.INSERT and compiler.dialect is None:
            raise FeatureNotSupportedError(None, f"{method.name} without a target driver")

        verb = "INSERT INTO"
        conflict = ""
        update_columns = self._update_columns(columns)
        if method is InsertMethod.INSERT_IGNORE:
            verb, conflict = self._ignore(compiler)
        elif method is InsertMethod.INSERT_OR_UPDATE:
            if compiler.is_mysql_family() and not update_columns:
                verb = "INSERT IGNORE INTO"
            elif not compiler.is_mysql_family():
                conflict = self._on_conflict_update(compiler, update_columns)

        values = ", ".join(
            "(" + ", ".join(compiler.value(row[column]) for column in columns) + ")"
            for row in self.rows
        )
        if method is InsertMethod.INSERT_OR_UPDATE and compiler.is_mysql_family() and update_columns:
            conflict = self._on_duplicate_key(compiler, update_columns)

        returning = ""
        if self.returning_columns:
            if not compiler.supports("returning"):
                raise FeatureNotSupportedError(compiler.driver, "INSERT ... RETURNING")
            returning = f"RETURNING {compiler.identifiers(self.returning_columns)}"

        return join_parts(
            verb,
            f"{compiler.table(self.table_name)} ({compiler.identifiers(columns)})",
            f"VALUES {values}",
            conflict,
            returning,
        )

    def _update_columns(self, columns: List[str]) -> List[str]:
        if self.update_columns is not None:
            unknown = [column for column in self.update_columns if column not in columns]
            if unknown:
                raise QueryConfigurationError(
                    f"Upsert update columns {unknown} are not part of the inserted row."
                )
            return list(self.update_columns)
        return [column for column in columns if column not in self.conflict_columns]

    def _conflict_target(self, compiler: SQLCompiler) -> str:
        if not self.conflict_columns:
            return ""
        return f"({compiler.identifiers(self.conflict_columns)})"

    def _ignore(self, compiler: SQLCompiler) -> tuple[str, str]:
        if compiler.is_mysql_family():
            return "INSERT IGNORE INTO", ""
        if compiler.driver is DriverType.SQLITE:
            return "INSERT OR IGNORE INTO", ""
        if compiler.driver is DriverType.POSTGRESQL:
            return "INSERT INTO", join_parts("ON CONFLICT", self._conflict_target(compiler), "DO NOTHING")
        raise FeatureNotSupportedError(compiler.driver, "INSERT IGNORE")

    def _on_conflict_update(self, compiler: SQLCompiler, update_columns: List[str]) -> str:
        if compiler.driver is DriverType.POSTGRESQL and not self.conflict_columns:
            raise MissingRequiredFieldError(
                "conflict_columns", "PostgreSQL upserts need the conflicting key columns."
            )
        if compiler.driver not in (DriverType.POSTGRESQL, DriverType.SQLITE):
            raise FeatureNotSupportedError(compiler.driver, "INSERT ... ON CONFLICT")
        target = self._conflict_target(compiler)
        if not update_columns:
            return join_parts("ON CONFLICT", target, "DO NOTHING")
        assignments = ", ".join(
            f"{compiler.identifier(column)} = excluded.{compiler.identifier(column)}"
            for column in update_columns
        )
        return join_parts("ON CONFLICT", target, f"DO UPDATE SET {assignments}")

    def _on_duplicate_key(self, compiler: SQLCompiler, update_columns: List[str]) -> str:
        if len(self.rows) == 1:
            row = self.rows[0]
            assignments = ", ".join(
                f"{compiler.identifier(column)} = {compiler.value(row[column])}"
                for column in update_columns
            )
        else:
            assignments = ", ".join(
                f"{compiler.identifier(column)} = VALUES({compiler.identifier(column)})"
                for column in update_columns
            )
        return f"ON DUPLICATE KEY UPDATE {assignments}"
