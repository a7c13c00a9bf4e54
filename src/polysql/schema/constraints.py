"""
Table-level constraint descriptors.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Sequence, Tuple, Union

from ..errors import MissingRequiredFieldError

if TYPE_CHECKING:
    from ..query.compiler import SQLCompiler


class ForeignKeyAction(Enum):
    RESTRICT = "RESTRICT"
    NO_ACTION = "NO ACTION"
    SET_NULL = "SET NULL"
    SET_DEFAULT = "SET DEFAULT"
    CASCADE = "CASCADE"

    @property
    def sql(self) -> str:
        return self.value


def _columns(values: Sequence[str] | str) -> Tuple[str, ...]:
    if isinstance(values, str):
        return (values,)
    return tuple(values)


def _require_columns(kind: str, columns: Tuple[str, ...]) -> None:
    if not columns:
        raise MissingRequiredFieldError("columns", f"{kind} constraint needs at least one column.")


def _named(name: str | None, body: str, compiler: "SQLCompiler") -> str:
    if not name:
        return body
    return f"CONSTRAINT {compiler.identifier(name)} {body}"


@dataclass(frozen=True)
class PrimaryKeyConstraint:
    name: str | None
    columns: Tuple[str, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "columns", _columns(self.columns))

    def render(self, compiler: "SQLCompiler") -> str:
        _require_columns("PRIMARY KEY", self.columns)
        return _named(self.name, f"PRIMARY KEY ({compiler.identifiers(self.columns)})", compiler)


@dataclass(frozen=True)
class UniqueConstraint:
    name: str | None
    columns: Tuple[str, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "columns", _columns(self.columns))

    def render(self, compiler: "SQLCompiler") -> str:
        _require_columns("UNIQUE", self.columns)
        return _named(self.name, f"UNIQUE ({compiler.identifiers(self.columns)})", compiler)


@dataclass(frozen=True)
class IndexConstraint:
    """
    Secondary index declared with the table.

    MySQL renders it inline (``KEY``/``UNIQUE KEY``); other backends receive a
    separate ``CREATE INDEX`` statement from the table builder.
    """

    name: str | None
    columns: Tuple[str, ...]
    unique: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "columns", _columns(self.columns))

    def render(self, compiler: "SQLCompiler", index_name: str) -> str:
        _require_columns("INDEX", self.columns)
        kind = "UNIQUE KEY" if self.unique else "KEY"
        return f"{kind} {compiler.identifier(index_name)} ({compiler.identifiers(self.columns)})"


@dataclass(frozen=True)
class ForeignKeyConstraint:
    name: str | None
    columns: Tuple[str, ...]
    ref_table: str
    ref_columns: Tuple[str, ...] = field(default=())
    on_delete: ForeignKeyAction | None = None
    on_update: ForeignKeyAction | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "columns", _columns(self.columns))
        object.__setattr__(self, "ref_columns", _columns(self.ref_columns))

    def render(self, compiler: "SQLCompiler") -> str:
        _require_columns("FOREIGN KEY", self.columns)
        if not self.ref_table:
            raise MissingRequiredFieldError("ref_table", "Foreign key needs a referenced table.")
        ref_columns = self.ref_columns or self.columns
        if len(ref_columns) != len(self.columns):
            raise MissingRequiredFieldError(
                "ref_columns",
                "Foreign key column count does not match the referenced columns.",
            )
        body = (
            f"FOREIGN KEY ({compiler.identifiers(self.columns)}) "
            f"REFERENCES {compiler.table(self.ref_table)} ({compiler.identifiers(ref_columns)})"
        )
        if self.on_delete is not None:
            body += f" ON DELETE {self.on_delete.sql}"
        if self.on_update is not None:
            body += f" ON UPDATE {self.on_update.sql}"
        return _named(self.name, body, compiler)


@dataclass(frozen=True)
class CheckConstraint:
    name: str | None
    expression: str

    def render(self, compiler: "SQLCompiler") -> str:
        if not self.expression or not self.expression.strip():
            raise MissingRequiredFieldError("expression", "Check constraint needs an expression.")
        return _named(self.name, f"CHECK ({self.expression})", compiler)


TableConstraint = Union[
    PrimaryKeyConstraint,
    UniqueConstraint,
    IndexConstraint,
    ForeignKeyConstraint,
    CheckConstraint,
]
