"""
Naming helpers for generated schema objects.
"""

import re
from typing import Sequence

_UNSAFE_RE = re.compile(r"[^0-9A-Za-z_]+")

# Most backends cap identifiers at 63/64 characters.
MAX_IDENTIFIER_LENGTH = 63


def default_index_name(table: str, columns: Sequence[str], *, unique: bool = False) -> str:
    """
    Build ``idx_<table>_<col1>_<col2>`` (``uq_`` for unique indexes).
    """
    prefix = "uq" if unique else "idx"
    parts = [prefix, table.split(".")[-1], *columns]
    name = "_".join(_UNSAFE_RE.sub("_", part).strip("_") for part in parts)
    return name[:MAX_IDENTIFIER_LENGTH].lower()
