"""
Session coordinating an adapter, transactions and statement execution.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

from ..adapters.base import ConnectionConfig, DatabaseAdapter
from ..adapters.factory import create_adapter
from ..dialects.base import Dialect
from ..errors import FeatureNotSupportedError, QueryConfigurationError
from ..query.compiler import CompiledStatement
from ..query.providers.base import QueryProvider
from ..query.providers.custom import CustomQueryProvider
from ..security.redaction import redact_params
from ..utils import get_logger, time_call
from ..utils.performance import StatementTracker
from .result import ExecutionResult
from .transaction import TransactionManager

_ROW_COUNTING_KINDS = frozenset({"insert", "update", "delete"})


class Session:
    """
    Executes query providers against one database connection.

    Statements are compiled with the adapter's dialect in bound-parameter
    mode before anything reaches the driver, so configuration and
    compatibility errors never leave a half-applied batch behind.
    """

    def __init__(
        self,
        adapter: Optional[DatabaseAdapter] = None,
        *,
        connection_config: Optional[ConnectionConfig] = None,
        dsn: Optional[str] = None,
        use_transaction: bool = True,
        quote_identifiers: bool = False,
    ) -> None:
        if connection_config is None:
            if dsn:
                connection_config = ConnectionConfig.from_dsn(dsn)
            else:
                connection_config = ConnectionConfig(url="sqlite:///:memory:")
        self.connection_config = connection_config
        self.adapter = adapter if adapter is not None else create_adapter(connection_config)
        self.dialect: Dialect = self.adapter.dialect
        self.use_transaction = use_transaction
        self.quote_identifiers = quote_identifiers
        self.transaction_manager = TransactionManager(self.adapter, self.dialect)
        self.logger = get_logger("persistence.session")
        self.tracker = StatementTracker(get_logger("persistence.statements"))
        self.adapter.connect(self.connection_config)

    # ------------------------------------------------------------------ #
    # Context management
    # ------------------------------------------------------------------ #
    def __enter__(self) -> "Session":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            while self.transaction_manager.active:
                if exc_type:
                    self.transaction_manager.rollback()
                else:
                    self.transaction_manager.commit()
        finally:
            self.close()

    def close(self) -> None:
        self.adapter.close()
        self.tracker.reset()

    # ------------------------------------------------------------------ #
    # Transactions
    # ------------------------------------------------------------------ #
    def begin(self) -> None:
        self.transaction_manager.begin()

    def commit(self) -> None:
        self.transaction_manager.commit()

    def rollback(self) -> None:
        self.transaction_manager.rollback()

    @contextmanager
    def transaction(self) -> Iterator["Session"]:
        """
        Provide a transaction scope; nested scopes become savepoints.
        """

        with self.transaction_manager.transaction():
            yield self

    # ------------------------------------------------------------------ #
    # Execution
    # ------------------------------------------------------------------ #
    def supports(self, provider: QueryProvider) -> bool:
        return provider.is_compatible(self.dialect)

    def compile(self, *providers: QueryProvider) -> List[Tuple[CompiledStatement, bool]]:
        """
        Compile every provider for this session's dialect.

        Each entry pairs the statement with whether it returns rows; follow-up
        statements (separate index DDL) never do.
        """

        if not providers:
            raise QueryConfigurationError("At least one query provider is required.")
        compiled: List[Tuple[CompiledStatement, bool]] = []
        for provider in providers:
            statements = self._compile_provider(provider)
            compiled.append((statements[0], provider.returns_rows()))
            compiled.extend((statement, False) for statement in statements[1:])
        return compiled

    def execute(self, *providers: QueryProvider, raise_on_error: bool = True) -> ExecutionResult:
        """
        Run the providers in order, inside one transaction unless the session
        was created with ``use_transaction=False``.

        Driver failures roll the transaction back and propagate; with
        ``raise_on_error=False`` they are reported through the result instead.
        """

        if not providers:
            raise QueryConfigurationError("At least one query provider is required.")
        batches = [(provider, self._compile_provider(provider)) for provider in providers]
        statements = [statement for _, compiled in batches for statement in compiled]
        affected = 0
        rows: List[Dict[str, Any]] = []
        try:
            with self._scope():
                for provider, compiled in batches:
                    for index, statement in enumerate(compiled):
                        cursor = self._run(statement.sql, statement.params)
                        if index == 0 and provider.returns_rows():
                            rows = self._fetch(cursor)
                            if provider.statement_kind in _ROW_COUNTING_KINDS:
                                affected += len(rows)
                        else:
                            affected += max(getattr(cursor, "rowcount", 0) or 0, 0)
        except Exception as exc:
            self.logger.error(
                "Execution of %s statement(s) failed: %s",
                len(statements),
                exc,
                extra={"statements": [statement.sql for statement in statements]},
            )
            if raise_on_error:
                raise
            return ExecutionResult(False, affected, [], statements, error=exc)
        return ExecutionResult(True, affected, rows, statements)

    def execute_sql(
        self,
        sql: str,
        params: Sequence[Any] | None = None,
        *,
        returns_rows: bool | None = None,
    ) -> ExecutionResult:
        """
        Run raw SQL written with this dialect's placeholder style.
        """

        return self.execute(CustomQueryProvider(sql, params, returns_rows=returns_rows))

    def statement_summary(self) -> List[dict[str, object]]:
        return self.tracker.summary()

    # ------------------------------------------------------------------ #
    def _compile_provider(self, provider: QueryProvider) -> List[CompiledStatement]:
        try:
            return provider.compile_all(self.dialect, quote_identifiers=self.quote_identifiers)
        except FeatureNotSupportedError:
            self.logger.warning(
                "%s statement cannot run on %s",
                provider.statement_kind.capitalize(),
                self.dialect.driver.readable_name,
            )
            raise

    @contextmanager
    def _scope(self) -> Iterator[None]:
        if self.use_transaction:
            with self.transaction_manager.transaction():
                yield
            return
        yield
        if not self.transaction_manager.active and not self.connection_config.autocommit:
            self.adapter.commit()

    def _run(self, sql: str, params: Sequence[Any]) -> Any:
        with time_call(
            "session.execute",
            self.logger,
            sql=sql,
            params=redact_params(params),
            threshold_ms=self.adapter.slow_query_ms,
        ) as timer:
            cursor = self.adapter.execute(sql, params)
        self.tracker.record(sql, params, timer.elapsed_ms)
        return cursor

    @staticmethod
    def _fetch(cursor: Any) -> List[Dict[str, Any]]:
        if not cursor.description:
            return []
        names = [column[0] for column in cursor.description]
        return [dict(zip(names, row)) for row in cursor.fetchall()]
