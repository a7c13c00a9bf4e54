"""
Outcome of executing one or more statements through a Session.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..query.compiler import CompiledStatement


@dataclass
class ExecutionResult:
    """
    ``rows`` holds the rows of the last row-returning statement as dicts;
    ``affected_rows`` sums the driver row counts of every statement that
    reported one.
    """

    success: bool
    affected_rows: int = 0
    rows: List[Dict[str, Any]] = field(default_factory=list)
    statements: List[CompiledStatement] = field(default_factory=list)
    error: Optional[BaseException] = None

    def __bool__(self) -> bool:
        return self.success

    @property
    def first(self) -> Dict[str, Any] | None:
        return self.rows[0] if self.rows else None

    def scalar(self) -> Any:
        """First column of the first row, or ``None``."""
        if not self.rows:
            return None
        return next(iter(self.rows[0].values()), None)
