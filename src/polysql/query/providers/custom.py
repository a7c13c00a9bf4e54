"""
Raw SQL passthrough builder.
"""

from __future__ import annotations

import re
from typing import Any, Sequence

from ...errors import MissingRequiredFieldError
from ..compiler import CompiledStatement, SQLCompiler
from .base import BuilderState, QueryProvider

_ROW_RETURNING = re.compile(r"^\s*(SELECT|WITH|PRAGMA|SHOW|VALUES|EXPLAIN|DESCRIBE)\b|\bRETURNING\b", re.IGNORECASE)


class CustomQueryProvider(QueryProvider):
    """
    Pass a caller-written statement through unchanged, with optional parameters
    already written in the target driver's placeholder style.
    """

    statement_kind = "custom"

    def __init__(
        self,
        sql: str | None = None,
        params: Sequence[Any] | None = None,
        *,
        returns_rows: bool | None = None,
    ) -> None:
        super().__init__()
        self.sql = sql
        self.params = tuple(params or ())
        self._returns_rows = returns_rows
        if sql is not None:
            self._configured()

    def statement(self, sql: str, params: Sequence[Any] | None = None) -> "CustomQueryProvider":
        self.sql = sql
        self.params = tuple(params or ())
        return self._configured()

    def returns_rows(self) -> bool:
        if self._returns_rows is not None:
            return self._returns_rows
        return bool(self.sql and _ROW_RETURNING.search(self.sql))

    def _render(self, compiler: SQLCompiler) -> str:
        if not self.sql or not self.sql.strip():
            raise MissingRequiredFieldError("sql", "Custom statement text is required.")
        return self.sql.strip()

    def _finish(self, compiler: SQLCompiler) -> CompiledStatement:
        sql = self._render(compiler)
        self._state = BuilderState.RENDERED
        return CompiledStatement(sql, self.params if compiler.parameterized else ())
