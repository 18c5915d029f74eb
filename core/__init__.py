"""
Core module containing configuration, logging, database and dependency wiring.
"""

from .config import Settings, get_settings
from .logger import logger, format_exception_short

__all__ = [
    "Settings",
    "get_settings",
    "logger",
    "format_exception_short",
]
