"""
Dialect registry, connection-metadata detection, and the driver feature gate.
"""

from __future__ import annotations

import re
from typing import Callable, Iterable, Union
from urllib.parse import urlparse

from ..errors import FeatureNotSupportedError
from ..utils import get_logger
from .base import Dialect
from .drivers import DriverType
from .mysql import get_mariadb_dialect, get_mysql_dialect
from .postgres import get_postgres_dialect
from .sqlite import get_sqlite_dialect

DialectLike = Union[Dialect, DriverType, str, None]

_FACTORIES: dict[DriverType, Callable[[], Dialect]] = {
    DriverType.MYSQL: get_mysql_dialect,
    DriverType.MARIADB: get_mariadb_dialect,
    DriverType.POSTGRESQL: get_postgres_dialect,
    DriverType.SQLITE: get_sqlite_dialect,
}

_SCHEME_ALIASES: dict[str, DriverType] = {
    "mysql": DriverType.MYSQL,
    "mariadb": DriverType.MARIADB,
    "postgres": DriverType.POSTGRESQL,
    "postgresql": DriverType.POSTGRESQL,
    "pgsql": DriverType.POSTGRESQL,
    "psql": DriverType.POSTGRESQL,
    "sqlite": DriverType.SQLITE,
    "sqlite3": DriverType.SQLITE,
}

# Product names as reported by servers; MariaDB reports itself as MySQL-compatible
# so it has to be matched first.
_PRODUCT_PATTERNS: tuple[tuple[re.Pattern[str], DriverType], ...] = (
    (re.compile(r"maria", re.IGNORECASE), DriverType.MARIADB),
    (re.compile(r"mysql", re.IGNORECASE), DriverType.MYSQL),
    (re.compile(r"postgres|pgsql", re.IGNORECASE), DriverType.POSTGRESQL),
    (re.compile(r"sqlite", re.IGNORECASE), DriverType.SQLITE),
)

_SQLITE_SUFFIXES = (".db", ".sqlite", ".sqlite3", ".db3")

logger = get_logger("dialects.registry")


def detect_dialect(metadata: str | None) -> DriverType:
    """
    Identify the backend from a DSN, JDBC-style URL, file path, or product name.

    Unrecognised input yields ``DriverType.UNKNOWN``; this never raises.
    """

    if not metadata or not isinstance(metadata, str):
        return DriverType.UNKNOWN
    text = metadata.strip()
    if text.lower().startswith("jdbc:"):
        text = text[5:]
    if text == ":memory:":
        return DriverType.SQLITE

    try:
        scheme = urlparse(text).scheme.lower()
    except ValueError:
        scheme = ""
    if scheme:
        # mysql+pymysql://, postgresql+psycopg://
        base = scheme.split("+", 1)[0]
        if base in _SCHEME_ALIASES:
            return _SCHEME_ALIASES[base]

    lowered = text.lower()
    if lowered.endswith(_SQLITE_SUFFIXES):
        return DriverType.SQLITE
    for pattern, driver in _PRODUCT_PATTERNS:
        if pattern.search(text):
            return driver

    logger.debug("Unrecognised connection metadata", extra={"metadata_length": len(text)})
    return DriverType.UNKNOWN


def get_dialect(driver: DriverType | str) -> Dialect:
    """
    Return a dialect instance for a driver or driver name.
    """

    resolved = driver if isinstance(driver, DriverType) else _coerce_driver(driver)
    factory = _FACTORIES.get(resolved)
    if factory is None:
        raise FeatureNotSupportedError(resolved, f"Dialect '{driver}'")
    return factory()


def dialect_for(metadata: str | None) -> Dialect | None:
    """
    Detect and instantiate a dialect, or ``None`` when the backend is unknown.
    """

    driver = detect_dialect(metadata)
    if driver is DriverType.UNKNOWN:
        return None
    return get_dialect(driver)


def resolve_dialect(value: DialectLike) -> Dialect | None:
    """
    Normalise a dialect, driver, driver name, or DSN into a dialect instance.

    ``None`` and ``DriverType.UNKNOWN`` mean "no target dialect"; a name or DSN
    that names no known backend raises ``FeatureNotSupportedError``.
    """

    if value is None or isinstance(value, Dialect):
        return value
    if value is DriverType.UNKNOWN:
        return None
    return get_dialect(value)


def driver_of(value: DialectLike) -> DriverType | None:
    if value is None:
        return None
    if isinstance(value, Dialect):
        return value.driver
    if isinstance(value, DriverType):
        return value
    return _coerce_driver(value)


def require_dialect(actual: DialectLike, *allowed: DriverType, feature: str | None = None) -> None:
    """
    Fail unless ``actual`` is one of ``allowed``. ``None`` never qualifies.
    """

    driver = driver_of(actual)
    if driver is None or driver not in allowed:
        raise FeatureNotSupportedError(driver, feature)


def reject_dialect(
    actual: DialectLike, *disallowed: DriverType, feature: str | None = None
) -> None:
    """
    Fail when ``actual`` is one of ``disallowed``.
    """

    driver = driver_of(actual)
    if driver is not None and driver in disallowed:
        raise FeatureNotSupportedError(driver, feature)


def supported_drivers() -> Iterable[DriverType]:
    return tuple(_FACTORIES)


def _coerce_driver(value: str) -> DriverType:
    normalized = value.strip().lower()
    try:
        return DriverType(normalized)
    except ValueError:
        pass
    if normalized in _SCHEME_ALIASES:
        return _SCHEME_ALIASES[normalized]
    return detect_dialect(value)
