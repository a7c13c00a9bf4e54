"""
PostgreSQL dialect implementation.
"""

from __future__ import annotations

from typing import Final, Mapping

from .base import Dialect, DialectCapabilities
from .charsets import CharacterSet
from .drivers import DriverType
from .mysql import INTEGER_FAMILY


class PostgresDialect(Dialect):
    """
    PostgreSQL dialect using percent positional parameters.
    """

    name: Final[str] = "postgresql"
    driver: Final[DriverType] = DriverType.POSTGRESQL
    param_style: Final[str] = "pyformat"
    quote_char: Final[str] = '"'
    capabilities: Final[DialectCapabilities] = DialectCapabilities(
        supports_returning=True,
        supports_savepoints=True,
        supports_partial_indexes=True,
        supports_schema_namespaces=True,
        supports_database_if_not_exists=False,
        supports_character_sets=True,
        supports_binary_types=False,
        supports_full_join=True,
        supports_drop_behaviour=True,
        supports_extended_locking=True,
    )
    type_names: Final[Mapping[str, str]] = {
        "TINYINT": "SMALLINT",
        "MEDIUMINT": "INTEGER",
        "INT": "INTEGER",
        "DOUBLE": "DOUBLE PRECISION",
        "DATETIME": "TIMESTAMP",
        "TINYTEXT": "TEXT",
        "MEDIUMTEXT": "TEXT",
        "LONGTEXT": "TEXT",
    }
    # Integer display widths do not exist here.
    parameterless_types = INTEGER_FAMILY
    autoincrement_types = INTEGER_FAMILY

    def parameter_placeholder(self, position: int | None = None) -> str:
        return "%s"

    def boolean_literal(self, value: bool) -> str:
        return "TRUE" if value else "FALSE"

    def autoincrement_clause(
        self, logical_name: str, *, parameter: object = None, unsigned: bool = False
    ) -> str | None:
        if logical_name.upper() in self.autoincrement_types:
            return "GENERATED BY DEFAULT AS IDENTITY PRIMARY KEY"
        return None

    def charset_name(self, charset: CharacterSet) -> str:
        return charset.postgres_encoding_or_raise()


def get_postgres_dialect() -> Dialect:
    return PostgresDialect()
