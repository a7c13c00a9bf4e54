"""
MySQL and MariaDB adapter over PyMySQL, falling back to mysqlclient.
"""

from __future__ import annotations

from typing import Any

from ..dialects.mysql import MySQLDialect
from .base import (
    AdapterConfigurationError,
    AdapterConnectionError,
    ConnectionConfig,
    DatabaseAdapter,
    DriverUnavailableError,
)


def _load_driver():
    try:
        import pymysql  # type: ignore[import-untyped]

        return pymysql
    except ImportError:
        pass
    try:
        import MySQLdb

        return MySQLdb
    except ImportError:
        return None


class MySQLAdapter(DatabaseAdapter):
    """
    Both drivers speak the same protocol; pass ``MariaDBDialect`` to render
    MariaDB syntax.
    """

    backend = "mysql"
    begin_statement = "START TRANSACTION"

    def __init__(self, slow_query_ms: int | None = None, dialect: MySQLDialect | None = None) -> None:
        super().__init__(dialect or MySQLDialect(), slow_query_ms=slow_query_ms)

    def _open(self, config: ConnectionConfig) -> Any:
        driver = _load_driver()
        label = self.dialect.driver.readable_name
        if driver is None:
            raise DriverUnavailableError(self.dialect.driver, "PyMySQL or mysqlclient")
        dsn = config.dsn
        if dsn is None:
            raise AdapterConfigurationError(f"{label} connections need a DSN-based ConnectionConfig.")

        kwargs: dict[str, Any] = {
            "host": dsn.host or "localhost",
            "user": dsn.username,
            "password": dsn.password,
            "database": dsn.database,
        }
        if dsn.port:
            kwargs["port"] = dsn.port
        kwargs.update(config.connect_options(config.ssl.mysql_options() if config.ssl else {}))

        self.logger.info(
            "Connecting to %s %s (autocommit=%s)", label, config.descriptive_label(), config.autocommit
        )
        try:
            connection = driver.connect(**kwargs)
        except Exception as exc:
            raise AdapterConnectionError(f"Failed to connect to {label}.") from exc
        connection.autocommit(bool(config.autocommit))
        if config.isolation_level:
            level = config.isolation_level.upper()
            connection.cursor().execute(f"SET SESSION TRANSACTION ISOLATION LEVEL {level}")
        return connection

    def _is_closed(self, connection: Any) -> bool:
        return getattr(connection, "open", True) is False
