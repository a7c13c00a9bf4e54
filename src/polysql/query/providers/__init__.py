"""
Statement builders ("query providers").
"""

from .base import BuilderState, QueryProvider
from .custom import CustomQueryProvider
from .database import DatabaseCreateQueryProvider, DatabaseDropQueryProvider
from .delete import DeleteQueryProvider
from .index import CreateIndexQueryProvider, DropIndexQueryProvider, IndexColumn, IndexMethod
from .insert import InsertQueryProvider
from .select import SelectQueryProvider
from .table import TableCreateQueryProvider, TableDropQueryProvider, TableTruncateQueryProvider
from .update import UpdateQueryProvider

__all__ = [
    "BuilderState",
    "CreateIndexQueryProvider",
    "CustomQueryProvider",
    "DatabaseCreateQueryProvider",
    "DatabaseDropQueryProvider",
    "DeleteQueryProvider",
    "DropIndexQueryProvider",
    "IndexColumn",
    "IndexMethod",
    "InsertQueryProvider",
    "QueryProvider",
    "SelectQueryProvider",
    "TableCreateQueryProvider",
    "TableDropQueryProvider",
    "TableTruncateQueryProvider",
    "UpdateQueryProvider",
]
