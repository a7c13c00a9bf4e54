"""
UPDATE builder.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping

from ...dialects.drivers import DriverType
from ...errors import FeatureNotSupportedError, MissingRequiredFieldError
from ...utils import get_logger
from ..clauses import Limit, Order, UpdatePriority
from ..compiler import SQLCompiler
from ..expressions import ConditionNode, Operator, render_conditions
from .base import QueryProvider, as_condition, join_parts

logger = get_logger("query.update")


def render_modify_tail(
    compiler: SQLCompiler, statement: str, order: Order | None, limit: Limit | None
) -> List[str]:
    """
    ORDER BY / LIMIT on UPDATE and DELETE, which only MySQL and MariaDB accept.
    """

    parts: List[str] = []
    if order is not None and not order.is_empty():
        compiler.require_capability("modify_limit", f"{statement} ... ORDER BY")
        parts.append(order.render(compiler))
    if limit is not None:
        compiler.require_capability("modify_limit", f"{statement} ... LIMIT")
        parts.append(limit.render(compiler))
    return parts


def render_returning(compiler: SQLCompiler, statement: str, columns: List[str]) -> str:
    if not columns:
        return ""
    if not compiler.supports("returning"):
        raise FeatureNotSupportedError(compiler.driver, f"{statement} ... RETURNING")
    return f"RETURNING {compiler.identifiers(columns)}"


class UpdateQueryProvider(QueryProvider):
    """
    ``UPDATE [LOW_PRIORITY] [IGNORE] t SET c = v, ... [WHERE ...] [ORDER BY] [LIMIT]``.

    ``LOW_PRIORITY`` is dropped with a warning outside MySQL/MariaDB; ``IGNORE``
    becomes ``UPDATE OR IGNORE`` on SQLite and is rejected on PostgreSQL.
    """

    statement_kind = "update"

    def __init__(self, table: str | None = None) -> None:
        super().__init__()
        self.table_name = table
        self.entries: Dict[str, Any] = {}
        self.conditions: List[ConditionNode] = []
        self.priority = UpdatePriority.NORMAL
        self.ignore_errors = False
        self.order: Order | None = None
        self.limit_value: Limit | None = None
        self.returning_columns: List[str] = []
        if table is not None:
            self._configured()

    def table(self, name: str) -> "UpdateQueryProvider":
        self.table_name = name
        return self._configured()

    def entry(self, column: str, value: Any) -> "UpdateQueryProvider":
        self.entries[column] = value
        return self._configured()

    def set(self, values: Mapping[str, Any] | None = None, **columns: Any) -> "UpdateQueryProvider":
        self.entries.update(values or {})
        self.entries.update(columns)
        return self._configured()

    def where(
        self, key: ConditionNode | str, operator: Operator = Operator.EQUALS, value: Any = None
    ) -> "UpdateQueryProvider":
        self.conditions.append(as_condition(key, operator, value))
        return self._configured()

    def low_priority(self, enabled: bool = True) -> "UpdateQueryProvider":
        self.priority = UpdatePriority.LOW if enabled else UpdatePriority.NORMAL
        return self._configured()

    def ignore(self, enabled: bool = True) -> "UpdateQueryProvider":
        self.ignore_errors = enabled
        return self._configured()

    def order_by(self, order: Order) -> "UpdateQueryProvider":
        self.order = order
        return self._configured()

    def limit(self, count: int | None) -> "UpdateQueryProvider":
        self.limit_value = None if count is None else Limit(count)
        return self._configured()

    def returning(self, *columns: str) -> "UpdateQueryProvider":
        self.returning_columns = list(columns)
        return self._configured()

    def returns_rows(self) -> bool:
        return bool(self.returning_columns)

    def _render(self, compiler: SQLCompiler) -> str:
        if not self.table_name:
            raise MissingRequiredFieldError("table", "Table name is required.")
        if not self.entries:
            raise MissingRequiredFieldError("entries", "UPDATE needs at least one column value.")

        priority = ""
        if self.priority is UpdatePriority.LOW:
            if compiler.is_mysql_family():
                priority = "LOW_PRIORITY"
            else:
                logger.warning(
                    "LOW_PRIORITY is MySQL-only; updating %s with normal priority.",
                    self.table_name,
                    extra={"driver": compiler.driver},
                )

        verb = "UPDATE"
        if self.ignore_errors:
            if compiler.is_mysql_family():
                priority = join_parts(priority, "IGNORE")
            elif compiler.driver is DriverType.SQLITE:
                verb = "UPDATE OR IGNORE"
            else:
                raise FeatureNotSupportedError(compiler.driver, "UPDATE IGNORE")

        assignments = ", ".join(
            f"{compiler.identifier(column)} = {compiler.value(value)}"
            for column, value in self.entries.items()
        )
        where = f"WHERE {render_conditions(self.conditions, compiler)}" if self.conditions else ""
        return join_parts(
            verb,
            priority,
            compiler.table(self.table_name),
            f"SET {assignments}",
            where,
            *render_modify_tail(compiler, "UPDATE", self.order, self.limit_value),
            render_returning(compiler, "UPDATE", self.returning_columns),
        )
