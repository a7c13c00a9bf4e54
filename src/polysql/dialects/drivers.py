"""
Driver identifiers for the supported database backends.
"""

from __future__ import annotations

from enum import Enum


class DriverType(str, Enum):
    """
    Identifies a database backend. ``UNKNOWN`` is the sentinel returned when
    connection metadata cannot be matched to a supported backend.
    """

    MYSQL = "mysql"
    MARIADB = "mariadb"
    POSTGRESQL = "postgresql"
    SQLITE = "sqlite"
    UNKNOWN = "unknown"

    @property
    def readable_name(self) -> str:
        return _READABLE_NAMES[self]

    @property
    def is_mysql_family(self) -> bool:
        return self in (DriverType.MYSQL, DriverType.MARIADB)


_READABLE_NAMES = {
    DriverType.MYSQL: "MySQL",
    DriverType.MARIADB: "MariaDB",
    DriverType.POSTGRESQL: "PostgreSQL",
    DriverType.SQLITE: "SQLite",
    DriverType.UNKNOWN: "Unknown",
}
