"""
Dialect strategy registry.
"""

from .base import Dialect, DialectCapabilities
from .charsets import CharacterSet
from .drivers import DriverType
from .mysql import MariaDBDialect, MySQLDialect
from .postgres import PostgresDialect
from .registry import (
    detect_dialect,
    dialect_for,
    driver_of,
    get_dialect,
    reject_dialect,
    require_dialect,
    resolve_dialect,
)
from .sqlite import SQLiteDialect

__all__ = [
    "CharacterSet",
    "Dialect",
    "DialectCapabilities",
    "DriverType",
    "MariaDBDialect",
    "MySQLDialect",
    "PostgresDialect",
    "SQLiteDialect",
    "detect_dialect",
    "dialect_for",
    "driver_of",
    "get_dialect",
    "reject_dialect",
    "require_dialect",
    "resolve_dialect",
]
