"""
Column descriptors and their dialect-aware definition rendering.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from ..dialects.charsets import CharacterSet
from ..dialects.registry import DialectLike
from ..errors import FeatureNotSupportedError, MissingRequiredFieldError
from ..query.compiler import SQLCompiler, finite_number, is_number
from ..utils import get_logger
from .types import DataType, UnsignedState, render_data_type

logger = get_logger("schema.column")


class ColumnType(Enum):
    """Inline key constraint attached to a column."""

    DEFAULT = "default"
    PRIMARY_KEY = "primary_key"
    PRIMARY_KEY_AUTOINCREMENT = "primary_key_autoincrement"
    UNIQUE = "unique"

    @property
    def is_primary_key(self) -> bool:
        return self in (ColumnType.PRIMARY_KEY, ColumnType.PRIMARY_KEY_AUTOINCREMENT)


@dataclass
class Column:
    """
    Dialect-independent description of one table column.

    ``default_expression`` is emitted verbatim and wins over ``default_value``.
    Rendering never changes the descriptor; an infeasible autoincrement is
    downgraded to a plain primary key for that render only.
    """

    key: str | None
    data_type: DataType | None
    parameter: Any = None
    column_type: ColumnType = ColumnType.DEFAULT
    unsigned: UnsignedState = UnsignedState.INACTIVE
    not_null: bool = False
    default_value: Any = None
    default_expression: str | None = None
    character_set: CharacterSet | None = None

    def to_sql(self, dialect: DialectLike = None) -> str:
        return self.render(SQLCompiler(dialect))

    def __str__(self) -> str:
        return self.to_sql()

    def validate(self) -> None:
        self._required()

    def _required(self) -> tuple[str, DataType]:
        if not self.key:
            raise MissingRequiredFieldError("key", "Column key is required.")
        if self.data_type is None:
            raise MissingRequiredFieldError("data_type", f"Column '{self.key}' has no data type.")
        if self.data_type.requires_parameter and self.parameter is None:
            raise MissingRequiredFieldError(
                "parameter",
                f"Column '{self.key}' of type {self.data_type.name} requires a parameter.",
            )
        return self.key, self.data_type

    def render(self, compiler: SQLCompiler, *, inline_primary_key: bool = True) -> str:
        """
        Render ``key TYPE [CHARACTER SET cs] [NOT NULL] [constraint] [DEFAULT ...]``.

        With ``inline_primary_key`` disabled the primary-key clause is left to a
        table-level constraint.
        """
        key, data_type = self._required()
        parts = [
            compiler.identifier(key),
            render_data_type(data_type, self.parameter, self.unsigned, compiler),
        ]
        if self.character_set is not None:
            parts.append(self._charset_clause(compiler, self.character_set))
        if self.not_null:
            parts.append("NOT NULL")
        constraint = self._constraint_clause(compiler, inline_primary_key)
        if constraint:
            parts.append(constraint)
        default = self._default_clause(compiler)
        if default:
            parts.append(default)
        return " ".join(parts)

    def autoincrement_clause(self, compiler: SQLCompiler) -> str | None:
        """
        Dialect autoincrement clause, or ``None`` when the combination is infeasible.
        """
        if compiler.dialect is None or self.data_type is None or not self.data_type.is_integer:
            return None
        return compiler.dialect.autoincrement_clause(
            self.data_type.name, parameter=self.parameter, unsigned=bool(self.unsigned)
        )

    # Helpers -----------------------------------------------------------
    def _charset_clause(self, compiler: SQLCompiler, charset: CharacterSet) -> str:
        if compiler.dialect is None:
            return f"CHARACTER SET {charset.mysql_name}"
        if not compiler.is_mysql_family():
            raise FeatureNotSupportedError(compiler.driver, "Column character set")
        return f"CHARACTER SET {compiler.dialect.charset_name(charset)}"

    def _constraint_clause(self, compiler: SQLCompiler, inline_primary_key: bool) -> str | None:
        if self.column_type is ColumnType.UNIQUE:
            return "UNIQUE"
        if self.column_type is ColumnType.PRIMARY_KEY:
            return "PRIMARY KEY" if inline_primary_key else None
        if self.column_type is ColumnType.PRIMARY_KEY_AUTOINCREMENT:
            clause = self.autoincrement_clause(compiler)
            if clause is not None:
                return clause
            logger.warning(
                "Column '%s' (%s) cannot auto-increment on %s; rendering a plain primary key.",
                self.key,
                self.data_type,
                compiler.driver.readable_name if compiler.driver else "an unknown driver",
                extra={"column": self.key, "driver": compiler.driver},
            )
            return "PRIMARY KEY" if inline_primary_key else None
        return None

    def _default_clause(self, compiler: SQLCompiler) -> str | None:
        if self.default_expression is not None:
            return f"DEFAULT {self.default_expression}"
        if self.default_value is None:
            return None
        value = self.default_value
        if isinstance(value, bool):
            return f"DEFAULT {compiler.boolean(value)}"
        if is_number(value):
            return f"DEFAULT {finite_number(value, 'default_value')}"
        return f"DEFAULT {compiler.quote(value)}"
