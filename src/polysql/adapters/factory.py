"""
Adapter selection from connection metadata.
"""

from __future__ import annotations

from ..dialects.drivers import DriverType
from ..dialects.mysql import MariaDBDialect
from .base import AdapterConfigurationError, ConnectionConfig, DatabaseAdapter
from .mysql import MySQLAdapter
from .postgres import PostgresAdapter
from .sqlite import SQLiteAdapter


def create_adapter(config: ConnectionConfig | str, *, slow_query_ms: int | None = None) -> DatabaseAdapter:
    """
    Return an unconnected adapter for the backend the DSN names.

    The driver library itself is only imported on ``connect``, which raises
    ``DriverUnavailableError`` when it is missing.
    """

    if isinstance(config, str):
        config = ConnectionConfig.from_dsn(config)
    driver = config.driver_type
    if driver is DriverType.SQLITE:
        return SQLiteAdapter(slow_query_ms=slow_query_ms)
    if driver is DriverType.POSTGRESQL:
        return PostgresAdapter(slow_query_ms=slow_query_ms)
    if driver is DriverType.MYSQL:
        return MySQLAdapter(slow_query_ms=slow_query_ms)
    if driver is DriverType.MARIADB:
        return MySQLAdapter(slow_query_ms=slow_query_ms, dialect=MariaDBDialect())
    raise AdapterConfigurationError(
        f"Cannot determine a database backend for {config.redacted_dsn()!r}."
    )
