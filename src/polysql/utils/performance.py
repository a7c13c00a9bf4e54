"""
Per-statement execution statistics and the slow-query threshold.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence

SLOW_QUERY_ENV_VAR = "POLYSQL_SLOW_QUERY_MS"

_logger = logging.getLogger("polysql.utils.performance")


def resolve_slow_query_ms(default: int = 100, override: int | None = None) -> int:
    """
    Slow-query threshold in milliseconds.

    An explicit ``override`` wins, then ``POLYSQL_SLOW_QUERY_MS``; a value that
    is not an integer is logged and ignored.
    """

    if override is not None:
        return int(override)
    configured = (os.getenv(SLOW_QUERY_ENV_VAR) or "").strip()
    if not configured:
        return default
    if not configured.lstrip("-").isdigit():
        _logger.warning("Ignoring non-integer %s=%r", SLOW_QUERY_ENV_VAR, configured)
        return default
    return max(int(configured), 0)


def _freeze(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(item) for item in value)
    if isinstance(value, dict):
        return tuple(sorted((key, _freeze(item)) for key, item in value.items()))
    return value


@dataclass
class StatementStat:
    sql: str
    count: int = 0
    total_ms: float = 0.0
    parameter_sets: set[str] = field(default_factory=set)

    @property
    def average_ms(self) -> float:
        return self.total_ms / self.count if self.count else 0.0

    @property
    def distinct_params(self) -> int:
        return len(self.parameter_sets)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "sql": self.sql,
            "count": self.count,
            "total_ms": self.total_ms,
            "average_ms": self.average_ms,
            "distinct_params": self.distinct_params,
        }


class StatementTracker:
    """
    Groups executions by whitespace-normalized SQL.

    Once a statement has run ``repeat_threshold`` times with at least two
    different parameter sets it is logged, once, as a candidate for batching.
    ``sample_size`` caps how many parameter sets are quoted in that warning.
    """

    def __init__(self, logger: logging.Logger, *, repeat_threshold: int = 5, sample_size: int = 5) -> None:
        self.logger = logger
        self.repeat_threshold = repeat_threshold
        self.sample_size = sample_size
        self.stats: Dict[str, StatementStat] = {}
        self._flagged: set[str] = set()

    def record(self, sql: str, params: Sequence[object], elapsed_ms: float) -> None:
        key = " ".join(sql.split())
        stat = self.stats.get(key)
        if stat is None:
            stat = self.stats[key] = StatementStat(sql=key)
        stat.count += 1
        stat.total_ms += elapsed_ms
        if params:
            stat.parameter_sets.add(repr(_freeze(params)))
        if key in self._flagged or stat.count < self.repeat_threshold or stat.distinct_params < 2:
            return
        self._flagged.add(key)
        shown = key if len(key) <= 80 else key[:77] + "..."
        self.logger.warning(
            "Statement '%s' repeated %s times with %s distinct parameter sets; consider batching",
            shown,
            stat.count,
            stat.distinct_params,
            extra={
                "sql": key,
                "count": stat.count,
                "distinct_params": stat.distinct_params,
                "samples": sorted(stat.parameter_sets)[: self.sample_size],
            },
        )

    def summary(self) -> List[Dict[str, Any]]:
        return [stat.as_dict() for stat in self.stats.values()]

    def reset(self) -> None:
        self.stats.clear()
        self._flagged.clear()
