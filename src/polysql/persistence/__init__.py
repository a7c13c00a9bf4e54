"""
Execution layer: sessions, transactions and results.
"""

from .result import ExecutionResult
from .session import Session
from .transaction import TransactionError, TransactionManager

__all__ = ["ExecutionResult", "Session", "TransactionError", "TransactionManager"]
