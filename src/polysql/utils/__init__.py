"""
Utility helpers shared across PolySQL packages.
"""

from .logging import configure_logging, get_logger, time_call
from .naming import default_index_name

__all__ = ["configure_logging", "default_index_name", "get_logger", "time_call"]
