"""Utility modules for the calendar engine"""

from .error_handler import ErrorHandler, log_failures
from .logger import get_logger, setup_logging

__all__ = [
    "get_logger",
    "setup_logging",
    "log_failures",
    "ErrorHandler",
]
