"""
CREATE TABLE, DROP TABLE and TRUNCATE TABLE builders.
"""

from __future__ import annotations

from typing import Any, List, Sequence

from ...dialects.charsets import CharacterSet
from ...dialects.drivers import DriverType
from ...errors import FeatureNotSupportedError, MissingRequiredFieldError, QueryConfigurationError
from ...schema.column import Column, ColumnType
from ...schema.constraints import IndexConstraint, PrimaryKeyConstraint, TableConstraint
from ...schema.types import DataType
from ...utils import default_index_name, get_logger
from ..clauses import CreateMethod, DeleteMethod, DropBehaviour, IdentityMode
from ..compiler import SQLCompiler
from .base import QueryProvider, join_parts
from .index import CreateIndexQueryProvider

logger = get_logger("query.table")


class TableCreateQueryProvider(QueryProvider):
    """
    ``CREATE [TEMPORARY] TABLE [IF NOT EXISTS] name (columns, constraints) [options]``.

    Several primary-key columns are merged into one table-level
    ``PRIMARY KEY (a, b)``. Index constraints are rendered inline as
    ``KEY``/``UNIQUE KEY`` on MySQL and MariaDB; other backends get them as
    follow-up ``CREATE INDEX`` statements from :meth:`compile_all`.
    """

    statement_kind = "create table"

    def __init__(self, table: str | None = None) -> None:
        super().__init__()
        self.table_name = table
        self.column_list: List[Column] = []
        self.constraint_list: List[TableConstraint] = []
        self.create_method = CreateMethod.DEFAULT
        self.is_temporary = False
        self.engine_name: str | None = None
        self.table_comment: str | None = None
        self.charset: CharacterSet | None = None
        self.table_options: str | None = None
        if table is not None:
            self._configured()

    # Configuration ------------------------------------------------------
    def table(self, name: str) -> "TableCreateQueryProvider":
        self.table_name = name
        return self._configured()

    def column(
        self,
        column: Column | str,
        data_type: DataType | None = None,
        parameter: Any = None,
        **options: Any,
    ) -> "TableCreateQueryProvider":
        if isinstance(column, str):
            column = Column(column, data_type, parameter, **options)
        self.column_list.append(column)
        return self._configured()

    def columns(self, *columns: Column) -> "TableCreateQueryProvider":
        self.column_list.extend(columns)
        return self._configured()

    def constraint(self, *constraints: TableConstraint) -> "TableCreateQueryProvider":
        self.constraint_list.extend(constraints)
        return self._configured()

    def method(self, method: CreateMethod) -> "TableCreateQueryProvider":
        self.create_method = method
        return self._configured()

    def if_not_exists(self, enabled: bool = True) -> "TableCreateQueryProvider":
        return self.method(CreateMethod.IF_NOT_EXISTS if enabled else CreateMethod.DEFAULT)

    def temporary(self, enabled: bool = True) -> "TableCreateQueryProvider":
        self.is_temporary = enabled
        return self._configured()

    def engine(self, engine: str | None) -> "TableCreateQueryProvider":
        self.engine_name = engine
        return self._configured()

    def comment(self, comment: str | None) -> "TableCreateQueryProvider":
        self.table_comment = comment
        return self._configured()

    def character_set(self, charset: CharacterSet | None) -> "TableCreateQueryProvider":
        self.charset = charset
        return self._configured()

    def options(self, raw: str | None) -> "TableCreateQueryProvider":
        """Raw table options appended verbatim; replaces engine/comment/charset."""
        self.table_options = raw
        return self._configured()

    # Rendering ----------------------------------------------------------
    def _render(self, compiler: SQLCompiler) -> str:
        table = self.table_name
        if not table:
            raise MissingRequiredFieldError("table", "Table name is required.")
        if not self.column_list:
            raise MissingRequiredFieldError("columns", f"Table '{table}' has no columns.")

        primary_keys = [c for c in self.column_list if c.column_type.is_primary_key]
        explicit_pk = any(isinstance(c, PrimaryKeyConstraint) for c in self.constraint_list)
        if primary_keys and explicit_pk:
            raise QueryConfigurationError(
                f"Table '{table}' declares its primary key both inline and as a constraint."
            )
        composite = len(primary_keys) > 1
        if composite and any(
            c.column_type is ColumnType.PRIMARY_KEY_AUTOINCREMENT for c in primary_keys
        ):
            raise QueryConfigurationError(
                "An auto-increment column cannot be part of a composite primary key."
            )

        definitions = [
            column.render(compiler, inline_primary_key=not composite) for column in self.column_list
        ]
        if composite:
            keys = compiler.identifiers(c.key for c in primary_keys)
            definitions.append(f"PRIMARY KEY ({keys})")
        for constraint in self.constraint_list:
            if isinstance(constraint, IndexConstraint):
                if compiler.is_mysql_family():
                    definitions.append(constraint.render(compiler, self._index_name(constraint, table)))
                continue
            definitions.append(constraint.render(compiler))

        head = join_parts(
            "CREATE",
            "TEMPORARY" if self.is_temporary else "",
            "TABLE",
            "IF NOT EXISTS" if self.create_method is CreateMethod.IF_NOT_EXISTS else "",
            compiler.table(table),
        )
        return join_parts(f"{head} ({', '.join(definitions)})", self._render_options(compiler))

    def _follow_ups(self, compiler: SQLCompiler) -> Sequence[QueryProvider]:
        table = self.table_name
        if compiler.is_mysql_family() or not table:
            return ()
        follow_ups: List[QueryProvider] = []
        for constraint in self.constraint_list:
            if not isinstance(constraint, IndexConstraint):
                continue
            provider = (
                CreateIndexQueryProvider(table, self._index_name(constraint, table))
                .columns(*constraint.columns)
                .unique(constraint.unique)
            )
            if compiler.dialect is None or compiler.supports("index_if_not_exists"):
                provider.if_not_exists()
            follow_ups.append(provider)
        return follow_ups

    @staticmethod
    def _index_name(constraint: IndexConstraint, table: str) -> str:
        return constraint.name or default_index_name(
            table, constraint.columns, unique=constraint.unique
        )

    def _render_options(self, compiler: SQLCompiler) -> str:
        if self.table_options and self.table_options.strip():
            return self.table_options.strip()
        options: List[str] = []
        if self.engine_name and self.engine_name.strip():
            if compiler.is_mysql_family():
                options.append(f"ENGINE={self.engine_name.strip()}")
            else:
                logger.debug(
                    "Ignoring storage engine %s for %s",
                    self.engine_name,
                    compiler.driver.readable_name if compiler.driver else "an unknown driver",
                )
        if self.charset is not None:
            compiler.require(DriverType.MYSQL, DriverType.MARIADB, feature="Table character set")
            options.append(f"DEFAULT CHARACTER SET {self.charset.mysql_name}")
        if self.table_comment and self.table_comment.strip():
            compiler.require(DriverType.MYSQL, DriverType.MARIADB, feature="Table comment")
            options.append(f"COMMENT={compiler.quote(self.table_comment)}")
        return " ".join(options)


class TableDropQueryProvider(QueryProvider):
    """
    ``DROP [TEMPORARY] TABLE [IF EXISTS] t1[, t2] [CASCADE|RESTRICT]``.
    """

    statement_kind = "drop table"

    def __init__(self, *tables: str) -> None:
        super().__init__()
        self.table_names: List[str] = list(tables)
        self.delete_method = DeleteMethod.DEFAULT
        self.is_temporary = False
        self.behaviour = DropBehaviour.NONE
        if tables:
            self._configured()

    def table(self, *names: str) -> "TableDropQueryProvider":
        self.table_names.extend(names)
        return self._configured()

    def method(self, method: DeleteMethod) -> "TableDropQueryProvider":
        self.delete_method = method
        return self._configured()

    def if_exists(self, enabled: bool = True) -> "TableDropQueryProvider":
        return self.method(DeleteMethod.IF_EXISTS if enabled else DeleteMethod.DEFAULT)

    def temporary(self, enabled: bool = True) -> "TableDropQueryProvider":
        self.is_temporary = enabled
        return self._configured()

    def drop_behaviour(self, behaviour: DropBehaviour) -> "TableDropQueryProvider":
        self.behaviour = behaviour
        return self._configured()

    def _render(self, compiler: SQLCompiler) -> str:
        if not self.table_names:
            raise MissingRequiredFieldError("table", "At least one table name is required.")
        if len(self.table_names) > 1 and compiler.dialect is not None:
            if not compiler.supports("multi_table_drop"):
                raise FeatureNotSupportedError(compiler.driver, "Dropping several tables at once")

        temporary = ""
        if self.is_temporary:
            if compiler.dialect is None or compiler.supports("temporary_drop"):
                temporary = "TEMPORARY"
            else:
                logger.debug("DROP TEMPORARY is MySQL-only; dropping %s as a regular table", self.table_names)

        behaviour = ""
        if self.behaviour is not DropBehaviour.NONE:
            compiler.require(DriverType.POSTGRESQL, feature=f"DROP TABLE ... {self.behaviour.value}")
            behaviour = self.behaviour.value

        tables = ", ".join(compiler.table(name) for name in self.table_names)
        return join_parts(
            "DROP",
            temporary,
            "TABLE",
            "IF EXISTS" if self.delete_method is DeleteMethod.IF_EXISTS else "",
            tables,
            behaviour,
        )


class TableTruncateQueryProvider(QueryProvider):
    """
    ``TRUNCATE TABLE name [RESTART|CONTINUE IDENTITY] [CASCADE|RESTRICT]``; not on SQLite.
    """

    statement_kind = "truncate table"

    def __init__(self, table: str | None = None) -> None:
        super().__init__()
        self.table_name = table
        self.identity = IdentityMode.NONE
        self.behaviour = DropBehaviour.NONE
        if table is not None:
            self._configured()

    def table(self, name: str) -> "TableTruncateQueryProvider":
        self.table_name = name
        return self._configured()

    def identity_mode(self, mode: IdentityMode) -> "TableTruncateQueryProvider":
        self.identity = mode
        return self._configured()

    def drop_behaviour(self, behaviour: DropBehaviour) -> "TableTruncateQueryProvider":
        self.behaviour = behaviour
        return self._configured()

    def _render(self, compiler: SQLCompiler) -> str:
        if not self.table_name:
            raise MissingRequiredFieldError("table", "Table name is required.")
        if compiler.dialect is not None and not compiler.supports("truncate"):
            raise FeatureNotSupportedError(compiler.driver, "TRUNCATE TABLE")
        if self.identity is not IdentityMode.NONE:
            compiler.require(DriverType.POSTGRESQL, feature=self.identity.value)
        if self.behaviour is not DropBehaviour.NONE:
            compiler.require(DriverType.POSTGRESQL, feature=f"TRUNCATE ... {self.behaviour.value}")
        return join_parts(
            "TRUNCATE TABLE",
            compiler.table(self.table_name),
            self.identity.value,
            self.behaviour.value,
        )
