"""
Error hierarchy raised while rendering statements.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .dialects.drivers import DriverType


class PolySQLError(Exception):
    """Base error for statement construction failures."""


class QueryConfigurationError(PolySQLError, ValueError):
    """Raised when a descriptor or builder is configured inconsistently."""


class MissingRequiredFieldError(QueryConfigurationError):
    """
    A mandatory descriptor field is absent at render time.
    """

    def __init__(self, field: str, message: str | None = None) -> None:
        self.field = field
        super().__init__(message or f"Required field '{field}' is missing.")


class InvalidValueTypeError(QueryConfigurationError, TypeError):
    """
    A value has the wrong type for the operation it is used in.
    """

    def __init__(self, field: str, value: Any, expected: str = "a number") -> None:
        self.field = field
        self.value = value
        super().__init__(f"Value {value!r} for '{field}' must be {expected}.")


class FeatureNotSupportedError(PolySQLError):
    """
    The requested construct has no valid rendering for the active driver.
    """

    def __init__(self, driver: "DriverType | None", feature: str | None = None) -> None:
        self.driver = driver
        self.feature = feature
        readable = driver.readable_name if driver is not None else "N/A"
        subject = feature or "This feature"
        super().__init__(f"{subject} is not available with the current driver ({readable}).")
