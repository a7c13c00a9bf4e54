"""Logger namespace, correlation ids and call timing for PolySQL."""

from __future__ import annotations

import logging
import time
import uuid
from contextvars import ContextVar
from typing import Any, Optional

ROOT_LOGGER_NAME = "polysql"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(correlation_id)s | %(name)s | %(message)s"

_correlation_id: ContextVar[Optional[str]] = ContextVar("polysql_correlation_id", default=None)


def set_correlation_id(value: Optional[str] = None) -> str:
    """Tag log records in the current context; a random id is used when ``value`` is omitted."""
    token = value or uuid.uuid4().hex
    _correlation_id.set(token)
    return token


def get_correlation_id() -> str:
    return _correlation_id.get() or set_correlation_id()


class CorrelationIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id()
        return True


def configure_logging(level: int = logging.INFO) -> None:
    """Attach a stream handler to the ``polysql`` logger unless one is already there."""
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if root.handlers:
        return
    handler = logging.StreamHandler()
    handler.addFilter(CorrelationIdFilter())
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    root.setLevel(level)


def get_logger(name: str) -> logging.Logger:
    configure_logging()
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


class Timer:
    """
    Times a ``with`` block and logs ``"<name> took N.NNms"`` when it exits.

    The record carries ``sql``, ``params`` and ``elapsed_ms`` extras and is a
    WARNING once ``threshold_ms`` is reached, DEBUG otherwise.
    """

    def __init__(self, name: str, logger: logging.Logger, sql: str | None, params: Any, threshold_ms: int) -> None:
        self.name = name
        self.logger = logger
        self.sql = sql
        self.params = params
        self.threshold_ms = threshold_ms
        self.elapsed_ms = 0.0
        self._started = 0.0

    def __enter__(self) -> "Timer":
        self._started = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.elapsed_ms = (time.perf_counter() - self._started) * 1000
        slow = self.elapsed_ms >= self.threshold_ms
        self.logger.log(
            logging.WARNING if slow else logging.DEBUG,
            "%s took %.2fms",
            self.name,
            self.elapsed_ms,
            extra={"sql": self.sql, "params": self.params, "elapsed_ms": self.elapsed_ms},
        )


def time_call(
    name: str,
    logger: logging.Logger,
    *,
    sql: str | None = None,
    params: Any = None,
    threshold_ms: int = 100,
) -> Timer:
    return Timer(name, logger, sql, params, threshold_ms)
