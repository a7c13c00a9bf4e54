"""
Clause descriptors (joins, grouping, ordering, limits) and builder option enums.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List

from ..errors import FeatureNotSupportedError, MissingRequiredFieldError
from .compiler import SQLCompiler
from .expressions import Condition, ConditionNode, Operator, render_conditions


class JoinType(Enum):
    INNER = "INNER JOIN"
    LEFT = "LEFT JOIN"
    RIGHT = "RIGHT JOIN"
    FULL = "FULL OUTER JOIN"

    @property
    def keyword(self) -> str:
        return self.value


class Direction(Enum):
    ASCENDING = "ASC"
    DESCENDING = "DESC"


class SelectType(Enum):
    NORMAL = "SELECT"
    DISTINCT = "SELECT DISTINCT"


class CreateMethod(Enum):
    DEFAULT = "default"
    IF_NOT_EXISTS = "if_not_exists"


class DeleteMethod(Enum):
    DEFAULT = "default"
    IF_EXISTS = "if_exists"


class InsertMethod(Enum):
    INSERT = "insert"
    INSERT_OR_UPDATE = "insert_or_update"
    INSERT_IGNORE = "insert_ignore"


class DropBehaviour(Enum):
    NONE = ""
    CASCADE = "CASCADE"
    RESTRICT = "RESTRICT"


class IdentityMode(Enum):
    NONE = ""
    RESTART = "RESTART IDENTITY"
    CONTINUE = "CONTINUE IDENTITY"


class UpdatePriority(Enum):
    NORMAL = "normal"
    LOW = "low"


class LockMode(Enum):
    """Row locking strength; the key-level variants exist only on PostgreSQL."""

    UPDATE = "FOR UPDATE"
    SHARE = "FOR SHARE"
    NO_KEY_UPDATE = "FOR NO KEY UPDATE"
    KEY_SHARE = "FOR KEY SHARE"

    @property
    def postgres_only(self) -> bool:
        return self in (LockMode.NO_KEY_UPDATE, LockMode.KEY_SHARE)


class LockWait(Enum):
    WAIT = ""
    NOWAIT = "NOWAIT"
    SKIP_LOCKED = "SKIP LOCKED"


@dataclass
class Join:
    """
    ``<TYPE> JOIN table [AS alias] ON ...`` descriptor.
    """

    join_type: JoinType
    table: str
    alias: str | None = None
    conditions: List[ConditionNode] = field(default_factory=list)

    def on(self, key: ConditionNode | str, operator: Operator = Operator.EQUALS, value: Any = None) -> "Join":
        if isinstance(key, str):
            key = Condition(key, operator, value)
        self.conditions.append(key)
        return self

    def render(self, compiler: SQLCompiler) -> str:
        if not self.table:
            raise MissingRequiredFieldError("table", "Join target table is required.")
        if not self.conditions:
            raise MissingRequiredFieldError(
                "conditions", f"Join on '{self.table}' needs at least one ON condition."
            )
        if compiler.dialect is not None:
            if self.join_type is JoinType.FULL and not compiler.supports("full_join"):
                raise FeatureNotSupportedError(compiler.driver, "FULL OUTER JOIN")
            if self.join_type is JoinType.RIGHT and not compiler.supports("right_join"):
                raise FeatureNotSupportedError(compiler.driver, "RIGHT JOIN")
        target = compiler.table(self.table)
        if self.alias:
            target += f" AS {compiler.identifier(self.alias)}"
        return f"{self.join_type.keyword} {target} ON {render_conditions(self.conditions, compiler)}"

    def __str__(self) -> str:
        return self.render(SQLCompiler())


@dataclass
class Group:
    """
    GROUP BY keys with optional HAVING conditions. Keys keep insertion order.
    """

    keys: List[str] = field(default_factory=list)
    conditions: List[ConditionNode] = field(default_factory=list)

    def key(self, *keys: str) -> "Group":
        for key in keys:
            if key not in self.keys:
                self.keys.append(key)
        return self

    def having(
        self, key: ConditionNode | str, operator: Operator = Operator.EQUALS, value: Any = None
    ) -> "Group":
        if isinstance(key, str):
            key = Condition(key, operator, value)
        self.conditions.append(key)
        return self

    def is_empty(self) -> bool:
        return not self.keys and not self.conditions

    def render(self, compiler: SQLCompiler) -> str:
        if self.is_empty():
            return ""
        if not self.keys:
            raise MissingRequiredFieldError("keys", "HAVING requires at least one GROUP BY key.")
        sql = f"GROUP BY {compiler.identifiers(self.keys)}"
        if self.conditions:
            sql += f" HAVING {render_conditions(self.conditions, compiler)}"
        return sql

    def __str__(self) -> str:
        return self.render(SQLCompiler())


@dataclass
class Order:
    """
    ORDER BY rules in caller insertion order; re-adding a key replaces its direction.
    """

    rules: Dict[str, Direction] = field(default_factory=dict)

    def rule(self, key: str, direction: Direction = Direction.ASCENDING) -> "Order":
        self.rules[key] = direction
        return self

    def is_empty(self) -> bool:
        return not self.rules

    def render(self, compiler: SQLCompiler) -> str:
        if not self.rules:
            return ""
        parts = [f"{compiler.identifier(key)} {direction.value}" for key, direction in self.rules.items()]
        return "ORDER BY " + ", ".join(parts)

    def __str__(self) -> str:
        return self.render(SQLCompiler())


@dataclass(frozen=True)
class Limit:
    count: int

    def render(self, compiler: SQLCompiler) -> str:
        return f"LIMIT {compiler.integer(self.count, 'limit')}"

    def __str__(self) -> str:
        return self.render(SQLCompiler())


@dataclass(frozen=True)
class Offset:
    count: int

    def render(self, compiler: SQLCompiler) -> str:
        return f"OFFSET {compiler.integer(self.count, 'offset')}"

    def __str__(self) -> str:
        return self.render(SQLCompiler())


def render_limit(compiler: SQLCompiler, limit: Limit | None, offset: Offset | None) -> str:
    """
    Render LIMIT/OFFSET through the dialect, which knows how to express a bare offset.
    """

    count = None if limit is None else int(compiler.integer(limit.count, "limit"))
    skip = None if offset is None else int(compiler.integer(offset.count, "offset"))
    if compiler.dialect is not None:
        return compiler.dialect.limit_clause(count, skip)
    parts: List[str] = []
    if limit is not None:
        parts.append(limit.render(compiler))
    if offset is not None:
        parts.append(offset.render(compiler))
    return " ".join(parts)
