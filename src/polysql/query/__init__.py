"""
Query construction APIs: conditions, clauses, and the render context.
"""

from .clauses import (
    CreateMethod,
    DeleteMethod,
    Direction,
    DropBehaviour,
    Group,
    IdentityMode,
    InsertMethod,
    Join,
    JoinType,
    Limit,
    LockMode,
    LockWait,
    Offset,
    Order,
    SelectType,
    UpdatePriority,
)
from .compiler import CompiledStatement, Identifier, SQLCompiler
from .expressions import Condition, ConditionGroup, ConditionType, Operator, SelectFunction

__all__ = [
    "CompiledStatement",
    "Condition",
    "ConditionGroup",
    "ConditionType",
    "CreateMethod",
    "DeleteMethod",
    "Direction",
    "DropBehaviour",
    "Group",
    "IdentityMode",
    "Identifier",
    "InsertMethod",
    "Join",
    "JoinType",
    "Limit",
    "LockMode",
    "LockWait",
    "Offset",
    "Order",
    "SQLCompiler",
    "SelectFunction",
    "SelectType",
    "UpdatePriority",
]
