"""
Dialect strategy base describing SQL rendering behaviors.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Mapping

from ..errors import FeatureNotSupportedError
from .charsets import CharacterSet
from .drivers import DriverType


@dataclass(frozen=True)
class DialectCapabilities:
    """
    Feature flags describing backend capabilities.
    """

    supports_returning: bool = False
    supports_savepoints: bool = True
    supports_partial_indexes: bool = False
    supports_schema_namespaces: bool = False
    supports_databases: bool = True
    supports_database_if_not_exists: bool = True
    supports_character_sets: bool = False
    supports_unsigned: bool = False
    supports_enum_types: bool = False
    supports_binary_types: bool = True
    supports_right_join: bool = True
    supports_full_join: bool = False
    supports_multi_table_drop: bool = True
    supports_temporary_drop: bool = False
    supports_drop_behaviour: bool = False
    supports_truncate: bool = True
    supports_table_options: bool = False
    supports_inline_indexes: bool = False
    supports_index_if_not_exists: bool = True
    supports_row_locking: bool = True
    supports_extended_locking: bool = False
    supports_modify_limit: bool = False


class Dialect:
    """
    Strategy object consumed across the schema, query, and adapter layers.

    Per-type naming is resolved through ``type_names`` (a lookup keyed by the
    logical type name) rather than through subclassing the type catalog.
    """

    name: ClassVar[str] = "generic"
    driver: ClassVar[DriverType] = DriverType.UNKNOWN
    param_style: ClassVar[str] = "qmark"
    quote_char: ClassVar[str] = '"'
    capabilities: ClassVar[DialectCapabilities] = DialectCapabilities()
    type_names: ClassVar[Mapping[str, str]] = {}
    parameterless_types: ClassVar[frozenset[str]] = frozenset()
    autoincrement_types: ClassVar[frozenset[str]] = frozenset()

    def quote_identifier(self, identifier: str) -> str:
        quote = self.quote_char
        escaped = identifier.replace(quote, quote * 2)
        return f"{quote}{escaped}{quote}"

    def format_table(self, table_name: str) -> str:
        if "." in table_name and self.capabilities.supports_schema_namespaces:
            schema, table = table_name.split(".", 1)
            return f"{self.quote_identifier(schema)}.{self.quote_identifier(table)}"
        return self.quote_identifier(table_name)

    def limit_clause(self, limit: int | None, offset: int | None) -> str:
        parts: list[str] = []
        if limit is not None:
            parts.append(f"LIMIT {limit}")
        if offset is not None:
            parts.append(f"OFFSET {offset}")
        return " ".join(parts)

    def parameter_placeholder(self, position: int | None = None) -> str:
        return "?"

    def escape_string(self, value: str) -> str:
        return value.replace("'", "''")

    def boolean_literal(self, value: bool) -> str:
        return "1" if value else "0"

    # Types --------------------------------------------------------------
    def type_name(self, logical_name: str) -> str:
        return self.type_names.get(logical_name, logical_name)

    def keeps_type_parameter(self, logical_name: str) -> bool:
        return logical_name not in self.parameterless_types

    def autoincrement_clause(
        self, logical_name: str, *, parameter: object = None, unsigned: bool = False
    ) -> str | None:
        """
        Return the key clause for an auto-incrementing primary key, or
        ``None`` when the type cannot carry one on this backend.
        """
        return None

    # Character sets -----------------------------------------------------
    def charset_name(self, charset: CharacterSet) -> str:
        raise FeatureNotSupportedError(self.driver, f"Character set {charset.mysql_name}")

    def supports_charset(self, charset: CharacterSet) -> bool:
        return charset.supported_by(self.driver)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Dialect) and type(other) is type(self)

    def __hash__(self) -> int:
        return hash(type(self))
