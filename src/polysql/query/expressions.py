"""
Condition primitives for WHERE, HAVING, and JOIN ... ON clauses.
"""

from __future__ import annotations

from collections.abc import Collection
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Iterable, List, Union

from ..errors import InvalidValueTypeError, MissingRequiredFieldError
from .compiler import Identifier, SQLCompiler


class Operator(Enum):
    """
    Comparison operator; each member carries ``symbol``, ``needs_number`` and ``has_value``.
    """

    EQUALS = ("=", False, True)
    NOT_EQUALS = ("!=", False, True)
    LESS_THAN = ("<", True, True)
    GREATER_THAN = (">", True, True)
    LESS_EQUALS = ("<=", True, True)
    GREATER_EQUALS = (">=", True, True)
    LIKE = ("LIKE", False, True)
    IN = ("IN", False, True)
    NOT_IN = ("NOT IN", False, True)
    BETWEEN = ("BETWEEN", False, True)
    IS_NULL = ("IS NULL", False, False)
    IS_NOT_NULL = ("IS NOT NULL", False, False)

    def __init__(self, symbol: str, needs_number: bool, has_value: bool) -> None:
        self.symbol = symbol
        self.needs_number = needs_number
        self.has_value = has_value


class ConditionType(Enum):
    AND = "AND"
    OR = "OR"


AND = ConditionType.AND
OR = ConditionType.OR


class SelectFunction(Enum):
    NORMAL = ""
    COUNT = "COUNT"
    AVG = "AVG"
    SUM = "SUM"
    MIN = "MIN"
    MAX = "MAX"
    LOWER = "LOWER"
    UPPER = "UPPER"

    def wrap(self, expression: str) -> str:
        if self is SelectFunction.NORMAL:
            return expression
        return f"{self.value}({expression})"


class _Combinable:
    """
    Boolean composition with ``&``, ``|`` and ``~``, modelled after Q objects.
    """

    type: ConditionType
    negated: bool

    def __and__(self, other: "ConditionNode") -> "ConditionGroup":
        return ConditionGroup([self, replace(other, type=AND)])  # type: ignore[list-item]

    def __or__(self, other: "ConditionNode") -> "ConditionGroup":
        return ConditionGroup([self, replace(other, type=OR)])  # type: ignore[list-item]

    def __invert__(self):
        return replace(self, negated=not self.negated)  # type: ignore[type-var]

    def render(self, compiler: SQLCompiler) -> str:
        raise NotImplementedError

    def __str__(self) -> str:
        return self.render(SQLCompiler())


@dataclass
class Condition(_Combinable):
    """
    ``key <operator> value`` predicate.

    ``type`` decides how the condition joins its predecessor when several are
    folded together; ``negated`` prefixes it with ``NOT``.
    """

    key: str | None
    operator: Operator = Operator.EQUALS
    value: Any = None
    type: ConditionType = ConditionType.AND
    negated: bool = False
    key_function: SelectFunction = SelectFunction.NORMAL
    value_function: SelectFunction = SelectFunction.NORMAL

    @classmethod
    def group(
        cls,
        *conditions: "ConditionNode",
        type: ConditionType = ConditionType.AND,
        negated: bool = False,
    ) -> "ConditionGroup":
        return ConditionGroup(list(conditions), type=type, negated=negated)

    def render(self, compiler: SQLCompiler) -> str:
        expression = self._render_expression(compiler)
        return f"NOT {expression}" if self.negated else expression

    def _render_expression(self, compiler: SQLCompiler) -> str:
        if not self.key:
            raise MissingRequiredFieldError("key", "Condition key is required.")
        key_sql = self.key_function.wrap(compiler.identifier(self.key))
        operator = self.operator
        if not operator.has_value:
            return f"{key_sql} {operator.symbol}"
        if self.value is None:
            raise MissingRequiredFieldError(
                "value", f"Condition on '{self.key}' with {operator.symbol} needs a value."
            )

        if operator in (Operator.IN, Operator.NOT_IN):
            items = self._collection(self.key, self.value)
            rendered = ", ".join(compiler.value(item) for item in items)
            return f"{key_sql} {operator.symbol} ({rendered})"
        if operator is Operator.BETWEEN:
            items = self._collection(self.key, self.value)
            if len(items) != 2:
                raise InvalidValueTypeError(self.key, self.value, "a pair of values")
            low, high = (compiler.value(item) for item in items)
            return f"{key_sql} BETWEEN {low} AND {high}"

        if operator.needs_number:
            value_sql = compiler.number(self.value, self.key)
        else:
            value_sql = compiler.text(self.value)
        return f"{key_sql} {operator.symbol} {self.value_function.wrap(value_sql)}"

    @staticmethod
    def _collection(key: str, value: Any) -> List[Any]:
        if isinstance(value, (str, bytes)) or not isinstance(value, Collection):
            raise InvalidValueTypeError(key, value, "a collection of values")
        items = list(value)
        if not items:
            raise InvalidValueTypeError(key, value, "a non-empty collection of values")
        return items


@dataclass
class ConditionGroup(_Combinable):
    """
    Parenthesised sub-expression of conditions or nested groups.
    """

    conditions: List["ConditionNode"] = field(default_factory=list)
    type: ConditionType = ConditionType.AND
    negated: bool = False

    def add(self, condition: "ConditionNode") -> "ConditionGroup":
        self.conditions.append(condition)
        return self

    def render(self, compiler: SQLCompiler) -> str:
        if not self.conditions:
            raise MissingRequiredFieldError("conditions", "Condition group is empty.")
        inner = f"({render_conditions(self.conditions, compiler)})"
        return f"NOT {inner}" if self.negated else inner


ConditionNode = Union[Condition, ConditionGroup]


def render_conditions(conditions: Iterable[ConditionNode], compiler: SQLCompiler) -> str:
    """
    Fold conditions left to right; each one after the first is joined with its own type.
    """

    parts: List[str] = []
    for index, condition in enumerate(conditions):
        rendered = condition.render(compiler)
        if index == 0:
            parts.append(rendered)
        else:
            parts.append(f"{condition.type.value} {rendered}")
    return " ".join(parts)


__all__ = [
    "AND",
    "OR",
    "Condition",
    "ConditionGroup",
    "ConditionNode",
    "ConditionType",
    "Identifier",
    "Operator",
    "SelectFunction",
    "render_conditions",
]
