"""
Adapter base class, connection configuration and adapter errors.

Each adapter owns one DB-API connection. :class:`DatabaseAdapter` carries the
plumbing every backend shares (parameter checks, timing, reconnects and
transaction calls); the backend modules only open the connection.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Iterable, Sequence, TypeVar

from ..dialects.base import Dialect
from ..dialects.drivers import DriverType
from ..dialects.registry import detect_dialect
from ..security.dsns import DSNConfig, parse_dsn
from ..security.redaction import redact_params, redact_url
from ..utils import get_logger, time_call
from ..utils.performance import resolve_slow_query_ms

T = TypeVar("T")


class AdapterError(RuntimeError):
    """Base error for adapter-related failures."""


class AdapterConfigurationError(AdapterError):
    """Raised when configuration or required dependencies are invalid."""


class DriverUnavailableError(AdapterConfigurationError):
    """Raised when the DB-API library for a backend is not installed."""

    def __init__(self, driver: DriverType, package: str) -> None:
        self.driver = driver
        self.package = package
        super().__init__(f"{package} is required to connect to {driver.readable_name}.")


class AdapterConnectionError(AdapterError):
    """Raised when establishing or using a connection fails."""


class AdapterExecutionError(AdapterError):
    """Raised when SQL execution or parameter validation fails."""


class AdapterTransactionError(AdapterError):
    """Raised when transaction operations fail."""


# DSN query key -> SSLConfig attribute; the underscored spellings are MySQL's.
_SSL_QUERY_KEYS = {
    "sslmode": "mode",
    "sslrootcert": "rootcert",
    "sslcert": "cert",
    "sslkey": "key",
    "ssl_ca": "ca",
    "ssl_cert": "cert",
    "ssl_key": "key",
}


@dataclass
class SSLConfig:
    mode: str | None = None
    rootcert: str | None = None
    cert: str | None = None
    key: str | None = None
    ca: str | None = None
    check_hostname: bool | None = None

    @classmethod
    def from_query(cls, query: dict[str, str]) -> "SSLConfig | None":
        """Pop the SSL keys out of a DSN query; ``None`` when there are none."""
        values: dict[str, Any] = {}
        for query_key, attribute in _SSL_QUERY_KEYS.items():
            if query_key in query:
                values[attribute] = query.pop(query_key)
        check_hostname = _take(query, "ssl_check_hostname", _to_bool)
        if check_hostname is not None:
            values["check_hostname"] = check_hostname
        return cls(**values) if values else None

    def postgres_options(self) -> dict[str, Any]:
        pairs = (
            ("sslmode", self.mode),
            ("sslrootcert", self.rootcert),
            ("sslcert", self.cert),
            ("sslkey", self.key),
        )
        return {name: value for name, value in pairs if value}

    def mysql_options(self) -> dict[str, Any]:
        ssl: dict[str, Any] = {
            name: value
            for name, value in (("ca", self.ca), ("cert", self.cert), ("key", self.key))
            if value
        }
        if self.check_hostname is not None:
            ssl["check_hostname"] = self.check_hostname
        return {"ssl": ssl} if ssl else {}


_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _to_bool(value: str) -> bool:
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ValueError(value)


def _convert(key: str, value: str, parser: Callable[[str], T]) -> T:
    try:
        return parser(value)
    except ValueError as exc:
        raise AdapterConfigurationError(f"Invalid value for '{key}': {value!r}") from exc


def _take(query: dict[str, str], key: str, parser: Callable[[str], T]) -> T | None:
    if key not in query:
        return None
    return _convert(key, query.pop(key), parser)


# Driver options that are passed through with a known type.
_TYPED_OPTIONS: dict[str, Callable[[str], Any]] = {"connect_timeout": int}


@dataclass
class ConnectionConfig:
    """
    Normalized connection configuration for adapters.
    """

    url: str
    autocommit: bool = False
    isolation_level: str | None = None
    timeout: float | None = None
    options: dict[str, Any] | None = None
    ssl: SSLConfig | None = None
    dsn: DSNConfig | None = None
    source: str | None = None

    @classmethod
    def from_dsn(cls, dsn: str, **overrides: Any) -> "ConnectionConfig":
        """
        Parse ``dsn``; keyword arguments win over values from its query string.

        ``autocommit``, ``timeout``, ``isolation_level`` and the SSL keys are
        lifted into fields, every other query option is handed to the driver.
        """

        parsed = parse_dsn(dsn)
        query = dict(parsed.query)
        fields: dict[str, Any] = {
            "autocommit": _take(query, "autocommit", _to_bool),
            "timeout": _take(query, "timeout", float),
            "isolation_level": query.pop("isolation_level", None),
            "ssl": SSLConfig.from_query(query),
        }
        options = {
            key: _convert(key, value, _TYPED_OPTIONS[key]) if key in _TYPED_OPTIONS else value
            for key, value in query.items()
        }
        options.update(overrides.pop("options", None) or {})
        for name in list(fields):
            if name in overrides:
                fields[name] = overrides.pop(name)
        fields["autocommit"] = bool(fields["autocommit"])
        return cls(url=dsn, dsn=parsed, options=options or None, **fields, **overrides)

    @classmethod
    def from_env(cls, env_var: str, **overrides: Any) -> "ConnectionConfig":
        value = os.getenv(env_var)
        if not value:
            raise AdapterConfigurationError(f"Environment variable {env_var} is not set")
        return cls.from_dsn(value, source=env_var, **overrides)

    @property
    def driver_type(self) -> DriverType:
        """Backend named by the DSN scheme or path; UNKNOWN when unrecognised."""
        return detect_dialect(self.url)

    def redacted_dsn(self) -> str:
        if self.dsn:
            return self.dsn.redacted()
        return redact_url(self.url)

    def descriptive_label(self) -> str:
        redacted = self.redacted_dsn()
        if self.source:
            return f"{self.source} ({redacted})"
        return redacted

    def connect_options(self, ssl_options: dict[str, Any]) -> dict[str, Any]:
        """Driver keyword arguments: explicit options, then SSL, then the timeout."""
        options = dict(self.options or {})
        for key, value in ssl_options.items():
            options.setdefault(key, value)
        if self.timeout and "connect_timeout" not in options:
            options["connect_timeout"] = int(self.timeout)
        return options


class DatabaseAdapter:
    """
    One DB-API connection plus the dialect used to render SQL for it.

    Subclasses implement :meth:`_open`; ``backend`` names the logger
    (``polysql.adapters.<backend>``) and the timing labels.
    """

    backend: ClassVar[str] = "generic"
    begin_statement: ClassVar[str] = "BEGIN"

    def __init__(self, dialect: Dialect, *, slow_query_ms: int | None = None) -> None:
        self.dialect = dialect
        self.slow_query_ms = resolve_slow_query_ms(default=100, override=slow_query_ms)
        self.logger = get_logger(f"adapters.{self.backend}")
        self._connection: Any = None
        self._config: ConnectionConfig | None = None

    # Connection management ----------------------------------------------
    @property
    def connected(self) -> bool:
        return self._connection is not None

    def connect(self, config: ConnectionConfig) -> Any:
        connection = self._open(config)
        self._connection = connection
        self._config = config
        return connection

    def _open(self, config: ConnectionConfig) -> Any:
        raise NotImplementedError

    def _is_closed(self, connection: Any) -> bool:
        return False

    def close(self) -> None:
        """Close the connection; calling it again is a no-op."""
        if self._connection is None:
            return
        try:
            self._connection.close()
        finally:
            self._connection = None

    def _ensure_connection(self) -> Any:
        if self._connection is None or self._config is None:
            raise AdapterConnectionError(f"{type(self).__name__} is not connected.")
        if self._is_closed(self._connection):
            self.logger.warning(
                "%s connection closed; reconnecting.", self.dialect.driver.readable_name
            )
            self.connect(self._config)
        return self._connection

    # Execution ----------------------------------------------------------
    def _check_params(self, sql: str, params: Sequence[Any]) -> None:
        validate_format_params(sql, params)

    def _execute(self, cursor: Any, sql: str, params: Sequence[Any]) -> None:
        # format-style drivers leave % sequences alone when no arguments are passed
        cursor.execute(sql, tuple(params) or None)

    def execute(self, sql: str, params: Sequence[Any] | None = None) -> Any:
        connection = self._ensure_connection()
        params = tuple(params or ())
        self._check_params(sql, params)
        cursor = connection.cursor()
        with time_call(
            f"{self.backend}.execute",
            self.logger,
            sql=sql,
            params=redact_params(params),
            threshold_ms=self.slow_query_ms,
        ):
            self._execute(cursor, sql, params)
        return cursor

    def executemany(self, sql: str, seq_of_params: Iterable[Sequence[Any]]) -> Any:
        connection = self._ensure_connection()
        seq = [tuple(params) for params in seq_of_params]
        for params in seq:
            self._check_params(sql, params)
        cursor = connection.cursor()
        with time_call(
            f"{self.backend}.executemany",
            self.logger,
            sql=sql,
            params=f"{len(seq)} parameter sets",
            threshold_ms=self.slow_query_ms,
        ):
            cursor.executemany(sql, seq)
        return cursor

    # Transactions -------------------------------------------------------
    def begin(self) -> None:
        """Start a transaction; skipped on autocommit connections."""
        connection = self._ensure_connection()
        if self._config is not None and self._config.autocommit:
            return
        connection.cursor().execute(self.begin_statement)

    def commit(self) -> None:
        self._ensure_connection().commit()

    def rollback(self) -> None:
        self._ensure_connection().rollback()

    def last_insert_id(self, cursor: Any, table: str, pk_column: str) -> Any:
        """Primary key generated by the previous insert on ``cursor``."""
        return cursor.lastrowid


def count_format_placeholders(sql: str) -> int:
    """
    Count ``%s`` placeholders in a format/pyformat statement, skipping ``%%``.
    """

    count = 0
    idx = 0
    while idx < len(sql) - 1:
        pair = sql[idx : idx + 2]
        if pair == "%s":
            count += 1
            idx += 2
        elif pair == "%%":
            idx += 2
        else:
            idx += 1
    return count


def validate_format_params(sql: str, params: Sequence[Any]) -> None:
    expected = count_format_placeholders(sql)
    if expected == 0 and params:
        raise AdapterExecutionError("Parameters provided but SQL statement has no placeholders.")
    if expected and expected != len(params):
        raise AdapterExecutionError(
            f"Parameter count mismatch: expected {expected}, received {len(params)}."
        )
