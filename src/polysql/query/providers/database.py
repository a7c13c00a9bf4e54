"""
CREATE DATABASE and DROP DATABASE builders.
"""

from __future__ import annotations

from ...dialects.charsets import CharacterSet
from ...dialects.drivers import DriverType
from ...errors import FeatureNotSupportedError, MissingRequiredFieldError
from ..clauses import CreateMethod, DeleteMethod
from ..compiler import SQLCompiler
from .base import QueryProvider, join_parts


def _require_databases(compiler: SQLCompiler, statement: str) -> None:
    if compiler.dialect is not None and not compiler.supports("databases"):
        raise FeatureNotSupportedError(compiler.driver, statement)


class DatabaseCreateQueryProvider(QueryProvider):
    """
    ``CREATE DATABASE [IF NOT EXISTS] name [CHARACTER SET cs]``.

    PostgreSQL expresses the character set as ``ENCODING`` and has no
    ``IF NOT EXISTS``; SQLite has no databases to create.
    """

    statement_kind = "create database"

    def __init__(self, database: str | None = None) -> None:
        super().__init__()
        self.database_name = database
        self.create_method = CreateMethod.DEFAULT
        self.charset: CharacterSet | None = None
        if database is not None:
            self._configured()

    def database(self, name: str) -> "DatabaseCreateQueryProvider":
        self.database_name = name
        return self._configured()

    def method(self, method: CreateMethod) -> "DatabaseCreateQueryProvider":
        self.create_method = method
        return self._configured()

    def if_not_exists(self, enabled: bool = True) -> "DatabaseCreateQueryProvider":
        return self.method(CreateMethod.IF_NOT_EXISTS if enabled else CreateMethod.DEFAULT)

    def character_set(self, charset: CharacterSet | None) -> "DatabaseCreateQueryProvider":
        self.charset = charset
        return self._configured()

    def _render(self, compiler: SQLCompiler) -> str:
        if not self.database_name:
            raise MissingRequiredFieldError("database", "Database name is required.")
        _require_databases(compiler, "CREATE DATABASE")

        if_not_exists = ""
        if self.create_method is CreateMethod.IF_NOT_EXISTS:
            if compiler.dialect is not None and not compiler.supports("database_if_not_exists"):
                raise FeatureNotSupportedError(compiler.driver, "CREATE DATABASE IF NOT EXISTS")
            if_not_exists = "IF NOT EXISTS"

        charset = ""
        if self.charset is not None:
            if compiler.driver is DriverType.POSTGRESQL:
                charset = f"ENCODING '{self.charset.postgres_encoding_or_raise()}'"
            elif compiler.dialect is None:
                charset = f"CHARACTER SET {self.charset.mysql_name}"
            else:
                charset = f"CHARACTER SET {compiler.dialect.charset_name(self.charset)}"

        return join_parts(
            "CREATE DATABASE", if_not_exists, compiler.identifier(self.database_name), charset
        )


class DatabaseDropQueryProvider(QueryProvider):
    """
    ``DROP DATABASE [IF EXISTS] name``; not available on SQLite.
    """

    statement_kind = "drop database"

    def __init__(self, database: str | None = None) -> None:
        super().__init__()
        self.database_name = database
        self.delete_method = DeleteMethod.DEFAULT
        if database is not None:
            self._configured()

    def database(self, name: str) -> "DatabaseDropQueryProvider":
        self.database_name = name
        return self._configured()

    def method(self, method: DeleteMethod) -> "DatabaseDropQueryProvider":
        self.delete_method = method
        return self._configured()

    def if_exists(self, enabled: bool = True) -> "DatabaseDropQueryProvider":
        return self.method(DeleteMethod.IF_EXISTS if enabled else DeleteMethod.DEFAULT)

    def _render(self, compiler: SQLCompiler) -> str:
        if not self.database_name:
            raise MissingRequiredFieldError("database", "Database name is required.")
        _require_databases(compiler, "DROP DATABASE")
        if_exists = "IF EXISTS" if self.delete_method is DeleteMethod.IF_EXISTS else ""
        return join_parts("DROP DATABASE", if_exists, compiler.identifier(self.database_name))
