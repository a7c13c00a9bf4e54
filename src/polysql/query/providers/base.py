"""
Base class shared by every statement builder.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, ClassVar, List, Sequence, TypeVar

from ...dialects.drivers import DriverType
from ...dialects.registry import DialectLike
from ...errors import FeatureNotSupportedError
from ...utils import get_logger
from ..compiler import CompiledStatement, SQLCompiler
from ..expressions import Condition, ConditionNode, Operator

logger = get_logger("query.provider")

P = TypeVar("P", bound="QueryProvider")


class BuilderState(Enum):
    UNCONFIGURED = "unconfigured"
    CONFIGURED = "configured"
    RENDERED = "rendered"


class QueryProvider:
    """
    Fluent statement builder.

    Setters return ``self`` and move the builder to ``CONFIGURED``; rendering
    reads the configuration without changing it, so repeated renders of an
    unchanged builder are identical.
    """

    statement_kind: ClassVar[str] = "statement"
    produces_rows: ClassVar[bool] = False

    def __init__(self) -> None:
        self._state = BuilderState.UNCONFIGURED

    @property
    def state(self) -> BuilderState:
        return self._state

    def _configured(self: P) -> P:
        self._state = BuilderState.CONFIGURED
        return self

    # Rendering ----------------------------------------------------------
    def _render(self, compiler: SQLCompiler) -> str:
        raise NotImplementedError

    def _follow_ups(self, compiler: SQLCompiler) -> Sequence["QueryProvider"]:
        return ()

    def returns_rows(self) -> bool:
        return self.produces_rows

    def generate_sql_string(self, dialect: DialectLike = None, *, quote_identifiers: bool = False) -> str:
        """
        Render with literals inlined (legacy mode).

        Only the main statement is returned. When the configuration also needs
        follow-up statements a warning names them; use :meth:`generate_sql_strings`.
        """
        compiler = SQLCompiler(dialect, quote_identifiers=quote_identifiers)
        sql = self._finish(compiler).sql
        follow_ups = self._follow_ups(compiler)
        if follow_ups:
            logger.warning(
                "%s statement needs %s follow-up statement(s) not returned by generate_sql_string: %s",
                self.statement_kind,
                len(follow_ups),
                ", ".join(follow_up.statement_kind for follow_up in follow_ups),
                extra={"driver": compiler.driver},
            )
        return sql

    def generate_sql_strings(
        self, dialect: DialectLike = None, *, quote_identifiers: bool = False
    ) -> List[str]:
        """
        Inline-literal counterpart of :meth:`compile_all`.
        """
        compiler = SQLCompiler(dialect, quote_identifiers=quote_identifiers)
        statements = [self._finish(compiler).sql]
        for follow_up in self._follow_ups(compiler):
            statements.append(follow_up.generate_sql_string(dialect, quote_identifiers=quote_identifiers))
        return statements

    def compile(self, dialect: DialectLike = None, *, quote_identifiers: bool = False) -> CompiledStatement:
        """
        Render with dialect placeholders and return the bound parameters alongside.
        """
        compiler = SQLCompiler(dialect, parameterized=True, quote_identifiers=quote_identifiers)
        return self._finish(compiler)

    def compile_all(
        self, dialect: DialectLike = None, *, quote_identifiers: bool = False
    ) -> List[CompiledStatement]:
        """
        Compile the statement plus any follow-up statements it implies.
        """
        compiler = SQLCompiler(dialect, parameterized=True, quote_identifiers=quote_identifiers)
        statements = [self._finish(compiler)]
        for follow_up in self._follow_ups(compiler):
            statements.append(follow_up.compile(dialect, quote_identifiers=quote_identifiers))
        return statements

    def is_compatible(self, driver: DialectLike) -> bool:
        """
        Whether the current configuration renders for ``driver``.

        Only driver support is judged; incomplete configuration still raises.
        """
        if driver is None or driver is DriverType.UNKNOWN:
            return False
        try:
            self._render(SQLCompiler(driver, parameterized=True))
        except FeatureNotSupportedError:
            return False
        return True

    def _finish(self, compiler: SQLCompiler) -> CompiledStatement:
        sql = self._render(compiler)
        self._state = BuilderState.RENDERED
        logger.debug(
            "Rendered %s statement",
            self.statement_kind,
            extra={"driver": compiler.driver, "param_count": len(compiler.params)},
        )
        return compiler.statement(sql)

    def __str__(self) -> str:
        return self.generate_sql_string()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} state={self._state.value}>"


def as_condition(key: ConditionNode | str, operator: Operator, value: Any) -> ConditionNode:
    if isinstance(key, str):
        return Condition(key, operator, value)
    return key


def join_parts(*parts: str) -> str:
    return " ".join(part for part in parts if part)
