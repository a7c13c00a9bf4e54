"""
MySQL and MariaDB dialect implementations.
"""

from __future__ import annotations

from typing import Final

from .base import Dialect, DialectCapabilities
from .charsets import CharacterSet
from .drivers import DriverType

INTEGER_FAMILY: Final[frozenset[str]] = frozenset(
    {"TINYINT", "SMALLINT", "MEDIUMINT", "INT", "INTEGER", "BIGINT"}
)

# Largest value accepted by LIMIT; MySQL has no OFFSET without LIMIT.
_MAX_LIMIT: Final[str] = "18446744073709551615"


class MySQLDialect(Dialect):
    """
    MySQL dialect using percent-style placeholders and backtick quoting.
    """

    name: str = "mysql"
    driver: DriverType = DriverType.MYSQL
    param_style: str = "pyformat"
    quote_char: str = "`"
    capabilities: DialectCapabilities = DialectCapabilities(
        supports_returning=False,
        supports_savepoints=True,
        supports_partial_indexes=False,
        supports_schema_namespaces=True,
        supports_character_sets=True,
        supports_unsigned=True,
        supports_enum_types=True,
        supports_temporary_drop=True,
        supports_table_options=True,
        supports_inline_indexes=True,
        supports_index_if_not_exists=False,
        supports_modify_limit=True,
    )
    autoincrement_types = INTEGER_FAMILY

    def limit_clause(self, limit: int | None, offset: int | None) -> str:
        parts: list[str] = []
        if limit is not None:
            parts.append(f"LIMIT {limit}")
        if offset is not None:
            if limit is None:
                parts.append(f"LIMIT {_MAX_LIMIT}")
            parts.append(f"OFFSET {offset}")
        return " ".join(parts)

    def parameter_placeholder(self, position: int | None = None) -> str:
        return "%s"

    def escape_string(self, value: str) -> str:
        return value.replace("\\", "\\\\").replace("'", "''")

    def autoincrement_clause(
        self, logical_name: str, *, parameter: object = None, unsigned: bool = False
    ) -> str | None:
        if logical_name.upper() in self.autoincrement_types:
            return "PRIMARY KEY AUTO_INCREMENT"
        return None

    def charset_name(self, charset: CharacterSet) -> str:
        return charset.mysql_name


class MariaDBDialect(MySQLDialect):
    """
    MariaDB shares the MySQL grammar for everything rendered here.
    """

    name = "mariadb"
    driver = DriverType.MARIADB
    capabilities = DialectCapabilities(
        supports_returning=True,
        supports_savepoints=True,
        supports_partial_indexes=False,
        supports_schema_namespaces=True,
        supports_character_sets=True,
        supports_unsigned=True,
        supports_enum_types=True,
        supports_temporary_drop=True,
        supports_table_options=True,
        supports_inline_indexes=True,
        supports_index_if_not_exists=True,
        supports_modify_limit=True,
    )


def get_mysql_dialect() -> Dialect:
    return MySQLDialect()


def get_mariadb_dialect() -> Dialect:
    return MariaDBDialect()
