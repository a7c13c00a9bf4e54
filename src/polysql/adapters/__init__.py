"""
DB-API adapters for SQLite, PostgreSQL and MySQL/MariaDB.

``create_adapter`` picks the adapter from a DSN; driver libraries are imported
only when a connection is opened.
"""

from .base import (
    AdapterConfigurationError,
    AdapterConnectionError,
    AdapterError,
    AdapterExecutionError,
    AdapterTransactionError,
    ConnectionConfig,
    DatabaseAdapter,
    DriverUnavailableError,
    SSLConfig,
)
from .factory import create_adapter
from .mysql import MySQLAdapter
from .postgres import PostgresAdapter
from .sqlite import SQLiteAdapter

__all__ = [
    "create_adapter",
    "DatabaseAdapter",
    "SQLiteAdapter",
    "PostgresAdapter",
    "MySQLAdapter",
    "ConnectionConfig",
    "SSLConfig",
    "AdapterError",
    "AdapterConfigurationError",
    "AdapterConnectionError",
    "AdapterExecutionError",
    "AdapterTransactionError",
    "DriverUnavailableError",
]
