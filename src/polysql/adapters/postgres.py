"""
PostgreSQL adapter over psycopg 3.
"""

from __future__ import annotations

from typing import Any

from ..dialects.drivers import DriverType
from ..dialects.postgres import PostgresDialect
from .base import (
    AdapterConnectionError,
    AdapterExecutionError,
    ConnectionConfig,
    DatabaseAdapter,
    DriverUnavailableError,
)


def _load_driver():
    try:
        import psycopg

        return psycopg
    except ImportError:
        return None


class PostgresAdapter(DatabaseAdapter):
    backend = "postgres"

    def __init__(self, slow_query_ms: int | None = None) -> None:
        super().__init__(PostgresDialect(), slow_query_ms=slow_query_ms)

    def _open(self, config: ConnectionConfig) -> Any:
        psycopg = _load_driver()
        if psycopg is None:
            raise DriverUnavailableError(DriverType.POSTGRESQL, "psycopg")
        ssl_options = config.ssl.postgres_options() if config.ssl else {}
        self.logger.info(
            "Connecting to PostgreSQL %s (autocommit=%s)",
            config.descriptive_label(),
            config.autocommit,
        )
        try:
            connection = psycopg.connect(self.conninfo(config), **config.connect_options(ssl_options))
        except Exception as exc:
            raise AdapterConnectionError("Failed to connect to PostgreSQL.") from exc
        connection.autocommit = bool(config.autocommit)
        if config.isolation_level:
            connection.isolation_level = config.isolation_level
        return connection

    def _is_closed(self, connection: Any) -> bool:
        return bool(getattr(connection, "closed", False))

    @staticmethod
    def conninfo(config: ConnectionConfig) -> str:
        """
        URI handed to ``psycopg.connect``. Options already lifted into the
        config travel as keyword arguments instead.
        """
        if config.dsn is None:
            return config.url
        return config.dsn.conninfo("postgresql")

    def last_insert_id(self, cursor: Any, table: str, pk_column: str) -> Any:
        # psycopg has no lastrowid for SERIAL keys; the insert must use RETURNING
        row = cursor.fetchone()
        if not row:
            raise AdapterExecutionError(
                f"No RETURNING {pk_column} data available for the last insert into {table}."
            )
        return row[0]
