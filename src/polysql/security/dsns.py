"""
Connection URL parsing.

Accepts ``scheme[+driver]://user:password@host:port/database?options`` as well
as the path-only SQLite forms (``sqlite:///file.db``).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Optional
from urllib.parse import parse_qs, quote, unquote, urlencode, urlparse

from .redaction import REDACTED_VALUE, redact_query_params


@dataclass
class DSNConfig:
    driver: str
    username: Optional[str]
    password: Optional[str]
    host: Optional[str]
    port: Optional[int]
    database: Optional[str]
    path: str
    query: dict[str, str] = field(default_factory=dict)

    @property
    def backend(self) -> str:
        """Scheme without the ``+driver`` suffix, e.g. ``postgresql`` for ``postgresql+psycopg``."""
        return self.driver.split("+", 1)[0].lower()

    def _netloc(self, password: Optional[str]) -> str:
        netloc = ""
        if self.username:
            netloc += quote(self.username, safe="")
            if password:
                netloc += f":{password}"
            netloc += "@"
        if self.host:
            netloc += f"[{self.host}]" if ":" in self.host else self.host
        if self.port:
            netloc += f":{self.port}"
        return netloc

    def conninfo(self, scheme: str | None = None) -> str:
        """
        URL for the driver itself: no ``+driver`` suffix and no query options,
        which callers pass separately once parsed.
        """
        password = quote(self.password, safe="") if self.password else None
        return f"{scheme or self.backend}://{self._netloc(password)}{self.path}"

    def redacted(self) -> str:
        """
        Return the DSN with credentials and secret-bearing options masked.
        """
        query = redact_query_params(self.query)
        password = REDACTED_VALUE if self.password else None
        result = f"{self.driver}://{self._netloc(password)}{self.path}"
        if query:
            result += f"?{urlencode(query, safe='*/')}"
        return result


def parse_dsn(dsn: str) -> DSNConfig:
    parsed = urlparse(dsn.strip())
    query = {key: values[0] for key, values in parse_qs(parsed.query).items()}
    return DSNConfig(
        driver=parsed.scheme,
        username=unquote(parsed.username) if parsed.username else None,
        password=unquote(parsed.password) if parsed.password else None,
        host=parsed.hostname,
        port=parsed.port,
        database=parsed.path.lstrip("/") or None,
        path=parsed.path or "",
        query=query,
    )


def dsn_from_env(env_var: str) -> DSNConfig:
    value = os.getenv(env_var)
    if not value:
        raise ValueError(f"Environment variable {env_var} is not set")
    return parse_dsn(value)
