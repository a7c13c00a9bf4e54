"""
CREATE INDEX and DROP INDEX builders.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, List

from ...dialects.drivers import DriverType
from ...errors import FeatureNotSupportedError, MissingRequiredFieldError, QueryConfigurationError
from ...utils import default_index_name
from ..clauses import Direction, DropBehaviour
from ..compiler import SQLCompiler
from ..expressions import ConditionNode, Operator, render_conditions
from .base import QueryProvider, as_condition, join_parts


class IndexMethod(Enum):
    BTREE = "BTREE"
    HASH = "HASH"
    GIN = "GIN"
    GIST = "GIST"
    BRIN = "BRIN"


@dataclass(frozen=True)
class IndexColumn:
    column: str
    direction: Direction | None = None
    length: int | None = None


class CreateIndexQueryProvider(QueryProvider):
    """
    ``CREATE [UNIQUE] INDEX [IF NOT EXISTS] name ON table [USING m] (cols) [WHERE ...]``.
    """

    statement_kind = "create index"

    def __init__(self, table: str | None = None, name: str | None = None) -> None:
        super().__init__()
        self.table_name = table
        self.index_name = name
        self.index_columns: List[IndexColumn] = []
        self.is_unique = False
        self.if_not_exists_flag = False
        self.index_method: IndexMethod | None = None
        self.conditions: List[ConditionNode] = []
        if table is not None:
            self._configured()

    def table(self, name: str) -> "CreateIndexQueryProvider":
        self.table_name = name
        return self._configured()

    def name(self, name: str) -> "CreateIndexQueryProvider":
        self.index_name = name
        return self._configured()

    def column(
        self, column: str, direction: Direction | None = None, *, length: int | None = None
    ) -> "CreateIndexQueryProvider":
        self.index_columns.append(IndexColumn(column, direction, length))
        return self._configured()

    def columns(self, *columns: str) -> "CreateIndexQueryProvider":
        for column in columns:
            self.column(column)
        return self._configured()

    def unique(self, enabled: bool = True) -> "CreateIndexQueryProvider":
        self.is_unique = enabled
        return self._configured()

    def if_not_exists(self, enabled: bool = True) -> "CreateIndexQueryProvider":
        self.if_not_exists_flag = enabled
        return self._configured()

    def method(self, method: IndexMethod | None) -> "CreateIndexQueryProvider":
        self.index_method = method
        return self._configured()

    def where(
        self, key: ConditionNode | str, operator: Operator = Operator.EQUALS, value: Any = None
    ) -> "CreateIndexQueryProvider":
        self.conditions.append(as_condition(key, operator, value))
        return self._configured()

    def _render(self, compiler: SQLCompiler) -> str:
        if not self.table_name:
            raise MissingRequiredFieldError("table", "Index table is required.")
        if not self.index_columns:
            raise MissingRequiredFieldError("columns", "Index needs at least one column.")
        name = self.index_name or default_index_name(
            self.table_name, [c.column for c in self.index_columns], unique=self.is_unique
        )

        if_not_exists = ""
        if self.if_not_exists_flag:
            if compiler.dialect is not None and not compiler.supports("index_if_not_exists"):
                raise FeatureNotSupportedError(compiler.driver, "CREATE INDEX IF NOT EXISTS")
            if_not_exists = "IF NOT EXISTS"

        using = self._using_clause(compiler)
        columns = ", ".join(self._render_column(column, compiler) for column in self.index_columns)

        where = ""
        if self.conditions:
            if compiler.dialect is not None and not compiler.supports("partial_indexes"):
                raise FeatureNotSupportedError(compiler.driver, "Partial index")
            # DDL cannot carry bound parameters.
            inline = SQLCompiler(compiler.dialect, quote_identifiers=compiler.quote_identifiers)
            where = f"WHERE {render_conditions(self.conditions, inline)}"

        return join_parts(
            "CREATE UNIQUE INDEX" if self.is_unique else "CREATE INDEX",
            if_not_exists,
            compiler.identifier(name),
            f"ON {compiler.table(self.table_name)}",
            using if compiler.driver is DriverType.POSTGRESQL else "",
            f"({columns})",
            "" if compiler.driver is DriverType.POSTGRESQL else using,
            where,
        )

    def _using_clause(self, compiler: SQLCompiler) -> str:
        method = self.index_method
        if method is None:
            return ""
        if compiler.driver is DriverType.POSTGRESQL:
            return f"USING {method.value.lower()}"
        if compiler.is_mysql_family() or compiler.dialect is None:
            if method not in (IndexMethod.BTREE, IndexMethod.HASH):
                raise FeatureNotSupportedError(compiler.driver, f"Index method {method.value}")
            return f"USING {method.value}"
        raise FeatureNotSupportedError(compiler.driver, "Index method")

    @staticmethod
    def _render_column(column: IndexColumn, compiler: SQLCompiler) -> str:
        sql = compiler.identifier(column.column)
        if column.length is not None:
            if compiler.dialect is not None and not compiler.is_mysql_family():
                raise FeatureNotSupportedError(compiler.driver, "Index prefix length")
            sql += f"({compiler.integer(column.length, 'length')})"
        if column.direction is not None:
            sql += f" {column.direction.value}"
        return sql


class DropIndexQueryProvider(QueryProvider):
    """
    ``DROP INDEX``; MySQL needs the owning table, PostgreSQL can drop several at once.
    """

    statement_kind = "drop index"

    def __init__(self, *names: str) -> None:
        super().__init__()
        self.index_names: List[str] = list(names)
        self.table_name: str | None = None
        self.if_exists_flag = False
        self.behaviour = DropBehaviour.NONE
        if names:
            self._configured()

    def index(self, *names: str) -> "DropIndexQueryProvider":
        self.index_names.extend(names)
        return self._configured()

    def table(self, name: str) -> "DropIndexQueryProvider":
        self.table_name = name
        return self._configured()

    def if_exists(self, enabled: bool = True) -> "DropIndexQueryProvider":
        self.if_exists_flag = enabled
        return self._configured()

    def drop_behaviour(self, behaviour: DropBehaviour) -> "DropIndexQueryProvider":
        self.behaviour = behaviour
        return self._configured()

    def _render(self, compiler: SQLCompiler) -> str:
        if not self.index_names:
            raise MissingRequiredFieldError("index", "At least one index name is required.")
        if self.if_exists_flag and compiler.dialect is not None:
            if compiler.is_mysql_family() and not compiler.supports("index_if_not_exists"):
                raise FeatureNotSupportedError(compiler.driver, "DROP INDEX IF EXISTS")
        if_exists = "IF EXISTS" if self.if_exists_flag else ""

        behaviour = ""
        if self.behaviour is not DropBehaviour.NONE:
            compiler.require(DriverType.POSTGRESQL, feature=f"DROP INDEX ... {self.behaviour.value}")
            behaviour = self.behaviour.value

        if compiler.driver is not DriverType.POSTGRESQL and len(self.index_names) > 1:
            raise QueryConfigurationError(
                f"{compiler.driver.readable_name if compiler.driver else 'This driver'} "
                "drops one index per statement."
            )
        names = ", ".join(compiler.identifier(name) for name in self.index_names)

        on_table = ""
        if compiler.is_mysql_family():
            if not self.table_name:
                raise MissingRequiredFieldError(
                    "table", "MySQL requires the table owning the index."
                )
            on_table = f"ON {compiler.table(self.table_name)}"
        elif compiler.dialect is None and self.table_name:
            on_table = f"ON {compiler.table(self.table_name)}"

        return join_parts("DROP INDEX", if_exists, names, on_table, behaviour)
