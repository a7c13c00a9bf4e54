"""
SELECT builder.
"""

from __future__ import annotations

from typing import Any, List

from ...dialects.drivers import DriverType
from ...errors import FeatureNotSupportedError, MissingRequiredFieldError
from ..clauses import Group, Join, JoinType, Limit, LockMode, LockWait, Offset, Order, SelectType, render_limit
from ..compiler import SQLCompiler
from ..expressions import ConditionNode, Operator, SelectFunction, render_conditions
from .base import QueryProvider, as_condition, join_parts


class SelectQueryProvider(QueryProvider):
    """
    ``SELECT [DISTINCT] cols FROM t [AS a] joins WHERE ... GROUP BY ... ORDER BY ...
    LIMIT ... OFFSET ... [FOR UPDATE ...]``.
    """

    statement_kind = "select"
    produces_rows = True

    def __init__(self, table: str | None = None) -> None:
        super().__init__()
        self.table_name = table
        self.table_alias: str | None = None
        self.select_type = SelectType.NORMAL
        self.column_keys: List[str] = []
        self.select_function = SelectFunction.NORMAL
        self.joins: List[Join] = []
        self.conditions: List[ConditionNode] = []
        self.group: Group | None = None
        self.order: Order | None = None
        self.limit_value: Limit | None = None
        self.offset_value: Offset | None = None
        self.lock_mode: LockMode | None = None
        self.lock_wait = LockWait.WAIT
        if table is not None:
            self._configured()

    # Configuration ------------------------------------------------------
    def table(self, name: str, alias: str | None = None) -> "SelectQueryProvider":
        self.table_name = name
        self.table_alias = alias
        return self._configured()

    def alias(self, alias: str | None) -> "SelectQueryProvider":
        self.table_alias = alias
        return self._configured()

    def distinct(self, enabled: bool = True) -> "SelectQueryProvider":
        self.select_type = SelectType.DISTINCT if enabled else SelectType.NORMAL
        return self._configured()

    def columns(self, *columns: str) -> "SelectQueryProvider":
        self.column_keys.extend(columns)
        return self._configured()

    def function(self, function: SelectFunction) -> "SelectQueryProvider":
        """Wrap the first selected column, e.g. ``COUNT(*)``."""
        self.select_function = function
        return self._configured()

    def join(
        self, join: Join | JoinType, table: str | None = None, alias: str | None = None
    ) -> "SelectQueryProvider":
        if isinstance(join, JoinType):
            if table is None:
                raise MissingRequiredFieldError("table", "Join target table is required.")
            join = Join(join, table, alias)
        self.joins.append(join)
        return self._configured()

    def where(
        self, key: ConditionNode | str, operator: Operator = Operator.EQUALS, value: Any = None
    ) -> "SelectQueryProvider":
        self.conditions.append(as_condition(key, operator, value))
        return self._configured()

    def group_by(self, group: Group) -> "SelectQueryProvider":
        self.group = group
        return self._configured()

    def order_by(self, order: Order) -> "SelectQueryProvider":
        self.order = order
        return self._configured()

    def limit(self, count: int | None) -> "SelectQueryProvider":
        self.limit_value = None if count is None else Limit(count)
        return self._configured()

    def offset(self, count: int | None) -> "SelectQueryProvider":
        self.offset_value = None if count is None else Offset(count)
        return self._configured()

    def lock(self, mode: LockMode | None = LockMode.UPDATE, wait: LockWait = LockWait.WAIT) -> "SelectQueryProvider":
        self.lock_mode = mode
        self.lock_wait = wait
        return self._configured()

    # Rendering ----------------------------------------------------------
    def _render(self, compiler: SQLCompiler) -> str:
        if not self.table_name:
            raise MissingRequiredFieldError("table", "Table name is required.")

        source = compiler.table(self.table_name)
        if self.table_alias:
            source += f" AS {compiler.identifier(self.table_alias)}"

        where = ""
        joins = [join.render(compiler) for join in self.joins]
        if self.conditions:
            where = f"WHERE {render_conditions(self.conditions, compiler)}"
        group = self.group.render(compiler) if self.group is not None else ""
        order = self.order.render(compiler) if self.order is not None else ""

        return join_parts(
            self.select_type.value,
            self._render_columns(compiler),
            f"FROM {source}",
            *joins,
            where,
            group,
            order,
            render_limit(compiler, self.limit_value, self.offset_value),
            self._render_lock(compiler),
        )

    def _render_columns(self, compiler: SQLCompiler) -> str:
        columns = self.column_keys or ["*"]
        if self.select_function is not SelectFunction.NORMAL:
            return self.select_function.wrap(compiler.identifier(columns[0]))
        return compiler.identifiers(columns)

    def _render_lock(self, compiler: SQLCompiler) -> str:
        if self.lock_mode is None:
            if self.lock_wait is not LockWait.WAIT:
                raise MissingRequiredFieldError("lock_mode", f"{self.lock_wait.value} needs a lock mode.")
            return ""
        if compiler.dialect is not None and not compiler.supports("row_locking"):
            raise FeatureNotSupportedError(compiler.driver, self.lock_mode.value)
        if self.lock_mode.postgres_only:
            compiler.require(DriverType.POSTGRESQL, feature=self.lock_mode.value)
        return join_parts(self.lock_mode.value, self.lock_wait.value)
