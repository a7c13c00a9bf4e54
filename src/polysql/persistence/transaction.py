"""
Transaction manager handling nested transactions through savepoints.
"""

from __future__ import annotations

import itertools
from contextlib import contextmanager
from typing import Generator, List

from ..adapters.base import DatabaseAdapter
from ..dialects.base import Dialect
from ..utils import get_logger


class TransactionError(RuntimeError):
    pass


class TransactionManager:
    """
    The outermost ``begin`` opens a real transaction; nested levels map to
    ``SAVEPOINT``/``RELEASE``/``ROLLBACK TO`` on dialects that support them.
    """

    def __init__(self, adapter: DatabaseAdapter, dialect: Dialect) -> None:
        self.adapter = adapter
        self.dialect = dialect
        self._stack: List[str | None] = []
        self._savepoint_counter = itertools.count(1)
        self.logger = get_logger("persistence.transaction")

    @property
    def depth(self) -> int:
        return len(self._stack)

    @property
    def active(self) -> bool:
        return bool(self._stack)

    def begin(self) -> None:
        if not self._stack:
            self.adapter.begin()
            self._stack.append(None)
            self.logger.debug("Transaction started")
            return

        if not self.dialect.capabilities.supports_savepoints:
            raise TransactionError(f"Nested transactions are not supported by {self.dialect.name}.")
        name = f"sp_{next(self._savepoint_counter)}"
        self.adapter.execute(f"SAVEPOINT {name}")
        self._stack.append(name)
        self.logger.debug("Savepoint %s created (depth=%s)", name, self.depth)

    def commit(self) -> None:
        savepoint = self._pop("commit")
        if savepoint is None:
            self.adapter.commit()
            self.logger.debug("Transaction committed")
        else:
            self.adapter.execute(f"RELEASE SAVEPOINT {savepoint}")

    def rollback(self) -> None:
        savepoint = self._pop("roll back")
        if savepoint is None:
            self.adapter.rollback()
            self.logger.debug("Transaction rolled back")
        else:
            self.adapter.execute(f"ROLLBACK TO SAVEPOINT {savepoint}")
            self.adapter.execute(f"RELEASE SAVEPOINT {savepoint}")

    @contextmanager
    def transaction(self) -> Generator[None, None, None]:
        self.begin()
        try:
            yield
        except Exception:
            self.rollback()
            raise
        else:
            self.commit()

    def _pop(self, action: str) -> str | None:
        if not self._stack:
            raise TransactionError(f"No active transaction to {action}.")
        return self._stack.pop()
