"""
Masking of credentials and secret-looking values before they reach the logs.
"""

from __future__ import annotations

import re
from typing import Any, Iterable, Mapping

REDACTED_VALUE = "***"

# Matched against names with punctuation stripped, so ``api-key`` and ``API_KEY`` agree.
_SENSITIVE_NAME = re.compile(
    r"passw(or)?d|pwd|secret|token|apikey|accesskey|privatekey|credential|"
    r"ssl(key|cert|rootcert|ca)",
    re.IGNORECASE,
)
_SENSITIVE_TEXT = re.compile(
    r"passw(or)?d|pwd|secret|token|api[_-]?key|access[_-]?key|private[_-]?key|bearer|authorization",
    re.IGNORECASE,
)
_URL_CREDENTIALS = re.compile(r"(?P<prefix>[a-z][a-z0-9+.\-]*://[^:/@\s]+:)[^@\s]+@", re.IGNORECASE)


def _compact(name: str) -> str:
    return "".join(ch for ch in name if ch.isalnum())


def is_sensitive_key(key: str) -> bool:
    return bool(_SENSITIVE_NAME.search(_compact(key)))


def is_sensitive_value(value: str) -> bool:
    return bool(_SENSITIVE_TEXT.search(value))


def redact_url(text: str) -> str:
    """Mask the password part of any ``scheme://user:password@`` URL in ``text``."""
    return _URL_CREDENTIALS.sub(lambda match: f"{match.group('prefix')}{REDACTED_VALUE}@", text)


def redact_query_params(query: Mapping[str, str]) -> dict[str, str]:
    return {key: REDACTED_VALUE if is_sensitive_key(key) else val for key, val in query.items()}


def redact_value(value: Any, *, key: str | None = None) -> Any:
    if key is not None and is_sensitive_key(str(key)):
        return REDACTED_VALUE
    if isinstance(value, Mapping):
        return {k: redact_value(v, key=str(k)) for k, v in value.items()}
    if isinstance(value, (tuple, list)):
        return type(value)(redact_value(item) for item in value)
    if isinstance(value, (bytes, bytearray, memoryview)):
        # Binary parameters are never logged verbatim.
        return f"<{len(value)} bytes>"
    if isinstance(value, str):
        if is_sensitive_value(value):
            return REDACTED_VALUE
        return redact_url(value)
    return value


def redact_params(params: Iterable[Any] | Mapping[str, Any] | None) -> list[Any] | dict[str, Any]:
    """
    Loggable copy of statement parameters; named parameters are also masked by name.
    """
    if params is None:
        return []
    if isinstance(params, Mapping):
        return {str(key): redact_value(value, key=str(key)) for key, value in params.items()}
    return [redact_value(value) for value in params]
