"""
DELETE builder.
"""

from __future__ import annotations

from typing import Any, List

from ...errors import MissingRequiredFieldError
from ..clauses import Limit, Order
from ..compiler import SQLCompiler
from ..expressions import ConditionNode, Operator, render_conditions
from .base import QueryProvider, as_condition, join_parts
from .update import render_modify_tail, render_returning


class DeleteQueryProvider(QueryProvider):
    """
    ``DELETE FROM t [WHERE ...] [ORDER BY ...] [LIMIT n] [RETURNING ...]``.
    """

    statement_kind = "delete"

    def __init__(self, table: str | None = None) -> None:
        super().__init__()
        self.table_name = table
        self.conditions: List[ConditionNode] = []
        self.order: Order | None = None
        self.limit_value: Limit | None = None
        self.returning_columns: List[str] = []
        if table is not None:
            self._configured()

    def table(self, name: str) -> "DeleteQueryProvider":
        self.table_name = name
        return self._configured()

    def where(
        self, key: ConditionNode | str, operator: Operator = Operator.EQUALS, value: Any = None
    ) -> "DeleteQueryProvider":
        self.conditions.append(as_condition(key, operator, value))
        return self._configured()

    def order_by(self, order: Order) -> "DeleteQueryProvider":
        self.order = order
        return self._configured()

    def limit(self, count: int | None) -> "DeleteQueryProvider":
        self.limit_value = None if count is None else Limit(count)
        return self._configured()

    def returning(self, *columns: str) -> "DeleteQueryProvider":
        self.returning_columns = list(columns)
        return self._configured()

    def returns_rows(self) -> bool:
        return bool(self.returning_columns)

    def _render(self, compiler: SQLCompiler) -> str:
        if not self.table_name:
            raise MissingRequiredFieldError("table", "Table name is required.")
        where = f"WHERE {render_conditions(self.conditions, compiler)}" if self.conditions else ""
        return join_parts(
            "DELETE FROM",
            compiler.table(self.table_name),
            where,
            *render_modify_tail(compiler, "DELETE", self.order, self.limit_value),
            render_returning(compiler, "DELETE", self.returning_columns),
        )
