"""Shared error logging utilities.

Scheduling operations are pure and their failures are input-validation
errors, so failures are always re-raised after logging. Nothing here turns an
exception into a default value.
"""

import functools
from collections.abc import Callable
from typing import Any, TypeVar, cast

from .logger import get_logger

logger = get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


class ErrorHandler:
    """Logging helpers for failed operations"""

    @staticmethod
    def log_failure(operation_name: str, exception: Exception, **kwargs: Any) -> None:
        """Log a failed operation with its error type"""
        logger.warning(
            f"Failed to {operation_name}",
            error=str(exception),
            error_type=type(exception).__name__,
            **kwargs,
        )


def log_failures(
    operation_name: str,
    *,
    exceptions: tuple[type[Exception], ...] = (Exception,),
    **log_kwargs: Any,
) -> Callable[[F], F]:
    """
    Decorator that logs failures of an operation and re-raises them.

    Args:
        operation_name: Operation name used in the log message
        exceptions: Exception types to log; others propagate unlogged
        **log_kwargs: Extra fields attached to the log entry
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return func(*args, **kwargs)
            except exceptions as e:
                ErrorHandler.log_failure(operation_name, e, **log_kwargs)
                raise

        return cast(F, wrapper)

    return decorator
