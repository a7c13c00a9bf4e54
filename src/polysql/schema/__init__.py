"""
Schema descriptors: data types, columns, and table constraints.
"""

from .column import Column, ColumnType
from .constraints import (
    CheckConstraint,
    ForeignKeyAction,
    ForeignKeyConstraint,
    IndexConstraint,
    PrimaryKeyConstraint,
    TableConstraint,
    UniqueConstraint,
)
from .types import DataType, TypeCategory, UnsignedState

__all__ = [
    "CheckConstraint",
    "Column",
    "ColumnType",
    "DataType",
    "ForeignKeyAction",
    "ForeignKeyConstraint",
    "IndexConstraint",
    "PrimaryKeyConstraint",
    "TableConstraint",
    "TypeCategory",
    "UniqueConstraint",
    "UnsignedState",
]
