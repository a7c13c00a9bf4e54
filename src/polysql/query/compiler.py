"""
Render context shared by every descriptor and statement builder.

A single :class:`SQLCompiler` drives both output modes: inline-literal mode
embeds escaped literals in the SQL text, bound-parameter mode emits dialect
placeholders and collects the values in :attr:`SQLCompiler.params`.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, List, Tuple

from ..dialects.base import Dialect
from ..dialects.drivers import DriverType
from ..dialects.registry import DialectLike, reject_dialect, require_dialect, resolve_dialect
from ..errors import FeatureNotSupportedError, InvalidValueTypeError

NUMBER_TYPES = (int, float, Decimal)


def is_number(value: Any) -> bool:
    return isinstance(value, NUMBER_TYPES) and not isinstance(value, bool)


def is_finite(value: Any) -> bool:
    if isinstance(value, Decimal):
        return value.is_finite()
    if isinstance(value, float):
        return math.isfinite(value)
    return True


def finite_number(value: Any, field: str) -> str:
    """
    Inline text of a number; NaN and infinities have no portable SQL literal.
    """
    if not is_finite(value):
        raise InvalidValueTypeError(field, value, "a finite number")
    return str(value)


@dataclass(frozen=True)
class Identifier:
    """
    A column reference used where a value is expected, e.g. ``Identifier("t.id")``.
    """

    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class CompiledStatement:
    """
    Rendered SQL text plus the parameters bound to its placeholders.
    """

    sql: str
    params: Tuple[Any, ...] = ()

    def __str__(self) -> str:
        return self.sql


class SQLCompiler:
    """
    Compile descriptors into SQL fragments for an optional target dialect.
    """

    def __init__(
        self,
        dialect: DialectLike = None,
        *,
        parameterized: bool = False,
        quote_identifiers: bool = False,
    ) -> None:
        self.dialect: Dialect | None = resolve_dialect(dialect)
        self.parameterized = parameterized
        self.quote_identifiers = quote_identifiers and self.dialect is not None
        self.params: List[Any] = []

    @property
    def driver(self) -> DriverType | None:
        return self.dialect.driver if self.dialect is not None else None

    def supports(self, capability: str) -> bool:
        if self.dialect is None:
            return False
        return bool(getattr(self.dialect.capabilities, f"supports_{capability}"))

    def require_capability(self, capability: str, feature: str) -> None:
        if not self.supports(capability):
            raise FeatureNotSupportedError(self.driver, feature)

    def require(self, *allowed: DriverType, feature: str | None = None) -> None:
        require_dialect(self.dialect, *allowed, feature=feature)

    def reject(self, *disallowed: DriverType, feature: str | None = None) -> None:
        reject_dialect(self.dialect, *disallowed, feature=feature)

    def is_mysql_family(self) -> bool:
        return self.driver is not None and self.driver.is_mysql_family

    # Identifiers --------------------------------------------------------
    def identifier(self, name: str) -> str:
        if not self.quote_identifiers or self.dialect is None or name == "*":
            return name
        return ".".join(
            part if part == "*" else self.dialect.quote_identifier(part)
            for part in name.split(".")
        )

    def table(self, name: str) -> str:
        if not self.quote_identifiers or self.dialect is None:
            return name
        return self.dialect.format_table(name)

    def identifiers(self, names: Any) -> str:
        return ", ".join(self.identifier(name) for name in names)

    # Literals and parameters --------------------------------------------
    def escape(self, value: str) -> str:
        if self.dialect is None:
            return value.replace("'", "''")
        return self.dialect.escape_string(value)

    def quote(self, value: Any) -> str:
        return f"'{self.escape(str(value))}'"

    def boolean(self, value: bool) -> str:
        if self.dialect is None:
            return "1" if value else "0"
        return self.dialect.boolean_literal(value)

    def literal(self, value: Any) -> str:
        """
        Render ``value`` as an inline SQL literal regardless of mode.
        """
        if value is None:
            return "NULL"
        if isinstance(value, bool):
            return self.boolean(value)
        if is_number(value):
            return finite_number(value, "value")
        return self.quote(value)

    def placeholder(self) -> str:
        if self.dialect is None:
            return "?"
        return self.dialect.parameter_placeholder(len(self.params))

    def bind(self, value: Any) -> str:
        placeholder = self.placeholder()
        self.params.append(value)
        return placeholder

    def value(self, value: Any) -> str:
        """
        Render a typed value: bound in parameter mode, a literal otherwise.
        """
        if isinstance(value, Identifier):
            return self.identifier(value.name)
        if self.parameterized:
            return self.bind(value)
        return self.literal(value)

    def text(self, value: Any) -> str:
        """
        Render a value compared textually; inline literals are always quoted.
        """
        if isinstance(value, Identifier):
            return self.identifier(value.name)
        if self.parameterized:
            return self.bind(value)
        if isinstance(value, bool):
            return "'1'" if value else "'0'"
        return self.quote(value)

    def number(self, value: Any, field: str) -> str:
        if isinstance(value, Identifier):
            return self.identifier(value.name)
        if not is_number(value):
            raise InvalidValueTypeError(field, value)
        text = finite_number(value, field)
        if self.parameterized:
            return self.bind(value)
        return text

    def integer(self, value: Any, field: str) -> str:
        """
        Integers used for LIMIT/OFFSET style counts are always inlined.
        """
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise InvalidValueTypeError(field, value, "a non-negative integer")
        return str(value)

    def statement(self, sql: str) -> CompiledStatement:
        return CompiledStatement(sql, tuple(self.params))
